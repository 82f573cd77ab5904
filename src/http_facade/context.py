from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Optional, Tuple, Union

import httpx

if TYPE_CHECKING:
    from .http_client import TransportOptions

AmbientCredentials = Union[httpx.Auth, Tuple[str, str]]
TransportFactory = Callable[["TransportOptions"], httpx.BaseTransport]


@dataclass(frozen=True)
class HttpContext:
    """
    Caller-side handle passed as the first argument of every verb.

    It carries what the calling runtime owns rather than what a single request
    describes: where relative addresses resolve, the default timeout, whether the
    environment (proxy variables, netrc, CA bundle variables) is trusted, the
    ambient credentials used when a request asks for default credentials, and the
    transport capability that actually performs the round trip.
    """

    base_url: Optional[str] = None
    timeout_s: Optional[float] = 100.0
    follow_redirects: bool = True
    trust_env: bool = True
    default_credentials: Optional[AmbientCredentials] = None
    transport_factory: Optional[TransportFactory] = None
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("http_facade"))
