"""Blocking HTTP verbs driven by declarative per-call settings."""
from .config import HttpSettings, HttpSettingsBuilder
from .context import HttpContext
from .errors import (
    ConfigurationError,
    HttpFacadeError,
    HttpStatusError,
    InvalidArgument,
    TransportError,
    TransportTimeoutError,
)
from .executor import execute
from .models import CertificatePolicy, HttpMethod
from .verbs import (
    build_settings,
    http_delete,
    http_get,
    http_get_as_bytes,
    http_patch,
    http_patch_as_bytes,
    http_post,
    http_post_as_bytes,
    http_put,
    http_put_as_bytes,
)

__all__ = [
    "CertificatePolicy",
    "ConfigurationError",
    "HttpContext",
    "HttpFacadeError",
    "HttpMethod",
    "HttpSettings",
    "HttpSettingsBuilder",
    "HttpStatusError",
    "InvalidArgument",
    "TransportError",
    "TransportTimeoutError",
    "build_settings",
    "execute",
    "http_delete",
    "http_get",
    "http_get_as_bytes",
    "http_patch",
    "http_patch_as_bytes",
    "http_post",
    "http_post_as_bytes",
    "http_put",
    "http_put_as_bytes",
]
