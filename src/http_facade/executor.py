from __future__ import annotations
from typing import Union

import httpx

from .config import HttpSettings
from .context import HttpContext
from .errors import HttpStatusError, InvalidArgument, TransportError, TransportTimeoutError
from .http_client import HttpClient
from .models import HttpMethod
from .util import is_blank, loggable_headers, resolve_address


def verify_parameters(context: object, address: object, settings: object) -> None:
    if context is None:
        raise InvalidArgument("context")
    if is_blank(address):
        raise InvalidArgument("address")
    if settings is None:
        raise InvalidArgument("settings")
    if not isinstance(settings, HttpSettings):
        raise InvalidArgument("settings", f"Expected HttpSettings, got {type(settings).__name__}")


def _target_url(context: HttpContext, address: str) -> str:
    url = resolve_address(context.base_url, address)
    try:
        scheme = httpx.URL(url).scheme
    except httpx.InvalidURL as e:
        raise InvalidArgument("address", f"Invalid address {address!r}: {e}") from e
    if scheme not in ("http", "https"):
        raise InvalidArgument("address", f"Address must be an absolute http(s) URL, got {url!r}")
    return url


def execute(
    context: HttpContext,
    method: Union[HttpMethod, str],
    address: str,
    settings: HttpSettings,
) -> bytes:
    """
    Perform one blocking round trip and return the complete response body.

    Raises:
        InvalidArgument: context, address or settings missing; raised before any I/O
        ConfigurationError: proxy, certificate policy or credentials could not be bound
        TransportError: the request could not be completed
        HttpStatusError: non-2xx status while ensure_success_status_code is on
    """
    verify_parameters(context, address, settings)
    try:
        verb = HttpMethod(method.upper() if isinstance(method, str) else method)
    except ValueError as e:
        raise InvalidArgument("method", f"Unsupported HTTP method {method!r}") from e
    url = _target_url(context, address)
    log = context.logger

    with HttpClient(context, settings, url) as client:
        request = client.build_request(verb, url)
        log.debug("%s %s headers=%s body=%d bytes", verb.value, url, loggable_headers(dict(request.headers)), len(request.content))
        try:
            response = client.send(request)
        except httpx.TimeoutException as e:
            raise TransportTimeoutError(f"{verb.value} {url} timed out", url=url, original_error=e) from e
        except httpx.RequestError as e:
            raise TransportError(f"{verb.value} {url} failed: {e}", url=url, original_error=e) from e

        body = response.content
        log.debug("%s %s -> HTTP %d (%d bytes)", verb.value, url, response.status_code, len(body))
        if settings.ensure_success_status_code and not response.is_success:
            raise HttpStatusError(verb.value, url, response.status_code, body)
        return body
