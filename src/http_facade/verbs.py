"""
Public verb functions.

Each verb accepts its settings in one of three shapes:

    http_get(ctx, "https://example.com", HttpSettings(...))          # explicit settings
    http_get(ctx, "https://example.com", lambda s: s.set_no_cache())  # configurator
    http_get(ctx, "https://example.com")                              # defaults

All of them reduce to the explicit-settings form and run through `execute`.
"""
from __future__ import annotations
from typing import Any, Callable, Optional, Union

from .config import HttpSettings, HttpSettingsBuilder
from .context import HttpContext
from .errors import InvalidArgument
from .executor import execute
from .models import HttpMethod

Configurator = Callable[[HttpSettingsBuilder], Any]
SettingsArg = Union[HttpSettings, HttpSettingsBuilder, Configurator]

_UNSET: Any = object()


def _no_op(settings: HttpSettingsBuilder) -> None:
    pass


def build_settings(configurator: Optional[Configurator]) -> HttpSettings:
    """Run a configurator against a fresh default builder and freeze the result."""
    if configurator is None or not callable(configurator):
        raise InvalidArgument("configurator")
    builder = HttpSettingsBuilder()
    configurator(builder)
    return builder.build()


def _settings(settings: SettingsArg) -> Any:
    if settings is _UNSET:
        return build_settings(_no_op)
    if settings is None or isinstance(settings, HttpSettings):
        return settings
    if isinstance(settings, HttpSettingsBuilder):
        return settings.build()
    if callable(settings):
        return build_settings(settings)
    raise InvalidArgument("settings", f"Expected HttpSettings or a configurator, got {type(settings).__name__}")


def _text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


# ------- GET -------

def http_get_as_bytes(context: HttpContext, address: str, settings: SettingsArg = _UNSET) -> bytes:
    return execute(context, HttpMethod.GET, address, _settings(settings))


def http_get(context: HttpContext, address: str, settings: SettingsArg = _UNSET) -> str:
    """GET the resource and return its body decoded as UTF-8."""
    return _text(http_get_as_bytes(context, address, settings))


# ------- POST -------

def http_post_as_bytes(context: HttpContext, address: str, settings: SettingsArg = _UNSET) -> bytes:
    return execute(context, HttpMethod.POST, address, _settings(settings))


def http_post(context: HttpContext, address: str, settings: SettingsArg = _UNSET) -> str:
    """POST the configured request body and return the response decoded as UTF-8."""
    return _text(http_post_as_bytes(context, address, settings))


# ------- PUT -------

def http_put_as_bytes(context: HttpContext, address: str, settings: SettingsArg = _UNSET) -> bytes:
    return execute(context, HttpMethod.PUT, address, _settings(settings))


def http_put(context: HttpContext, address: str, settings: SettingsArg = _UNSET) -> str:
    return _text(http_put_as_bytes(context, address, settings))


# ------- PATCH -------

def http_patch_as_bytes(context: HttpContext, address: str, settings: SettingsArg = _UNSET) -> bytes:
    return execute(context, HttpMethod.PATCH, address, _settings(settings))


def http_patch(context: HttpContext, address: str, settings: SettingsArg = _UNSET) -> str:
    return _text(http_patch_as_bytes(context, address, settings))


# ------- DELETE -------

def http_delete(context: HttpContext, address: str, settings: SettingsArg = _UNSET) -> None:
    """DELETE the resource. The body is read and discarded; only failures are reported."""
    execute(context, HttpMethod.DELETE, address, _settings(settings))
