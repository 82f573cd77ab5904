from __future__ import annotations
import logging
import netrc
import ssl
import urllib.request
from dataclasses import dataclass
from typing import Optional, Union

import httpx

from .config import HttpSettings
from .context import HttpContext
from .errors import ConfigurationError
from .models import HttpMethod
from .tls import policy_ssl_context

log = logging.getLogger("http_facade.transport")


@dataclass(frozen=True)
class TransportOptions:
    """Transport-level configuration derived from one settings value."""

    verify: Union[bool, ssl.SSLContext] = True
    proxy: Optional[httpx.Proxy] = None
    trust_env: bool = True


def _system_proxy(url: httpx.URL) -> Optional[str]:
    host = url.host
    if not host or urllib.request.proxy_bypass(host):
        return None
    proxies = urllib.request.getproxies()
    found = proxies.get(url.scheme) or proxies.get("all")
    if found and "://" not in found:
        found = f"http://{found}"
    return found


def _resolve_proxy(context: HttpContext, settings: HttpSettings, url: httpx.URL) -> Optional[httpx.Proxy]:
    raw = settings.proxy
    if raw is None and context.trust_env:
        raw = _system_proxy(url)
    if raw is None or isinstance(raw, httpx.Proxy):
        return raw
    try:
        return httpx.Proxy(raw)
    except (ValueError, TypeError, httpx.InvalidURL) as e:
        raise ConfigurationError(f"Invalid proxy {raw!r}: {e}", url=str(url), original_error=e) from e


def _resolve_verify(settings: HttpSettings) -> Union[bool, ssl.SSLContext]:
    policy = settings.certificate_validation
    if policy is None:
        return True
    if not callable(policy):
        raise ConfigurationError(f"Certificate validation policy must be callable, got {type(policy).__name__}")
    return policy_ssl_context(policy)


def transport_options(context: HttpContext, settings: HttpSettings, url: httpx.URL) -> TransportOptions:
    return TransportOptions(
        verify=_resolve_verify(settings),
        proxy=_resolve_proxy(context, settings, url),
        trust_env=context.trust_env,
    )


def default_transport(options: TransportOptions) -> httpx.BaseTransport:
    return httpx.HTTPTransport(verify=options.verify, proxy=options.proxy, trust_env=options.trust_env)


def ambient_credentials(context: HttpContext) -> Optional[httpx.Auth]:
    """Credentials attached when a request opts into default credentials."""
    creds = context.default_credentials
    if isinstance(creds, tuple):
        return httpx.BasicAuth(*creds)
    if creds is not None:
        return creds
    if not context.trust_env:
        return None
    try:
        return httpx.NetRCAuth()
    except FileNotFoundError:
        log.debug("No netrc file found; default credentials are empty")
        return None
    except (OSError, netrc.NetrcParseError) as e:
        raise ConfigurationError(f"Unable to read netrc credentials: {e}", original_error=e) from e


class HttpClient:
    """Synchronous client scoped to exactly one request and one settings value."""

    def __init__(self, context: HttpContext, settings: HttpSettings, url: str) -> None:
        self._settings = settings
        self.options = transport_options(context, settings, httpx.URL(url))
        auth = ambient_credentials(context) if settings.use_default_credentials else None
        timeout = settings.timeout_s if settings.timeout_s is not None else context.timeout_s
        factory = context.transport_factory or default_transport
        transport = factory(self.options)
        try:
            self._client = httpx.Client(
                transport=transport,
                headers=dict(settings.headers),
                auth=auth,
                timeout=timeout,
                follow_redirects=context.follow_redirects,
                # proxies and CA bundles are already resolved into the transport
                trust_env=False,
            )
        except BaseException:
            transport.close()
            raise

    def build_request(self, method: HttpMethod, url: str) -> httpx.Request:
        content: Optional[bytes] = None
        headers = {}
        if method.carries_body:
            content = self._settings.request_body
            if self._settings.content_type:
                headers["Content-Type"] = self._settings.content_type
        return self._client.build_request(method.value, url, content=content, headers=headers)

    def send(self, request: httpx.Request) -> httpx.Response:
        return self._client.send(request)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
