from __future__ import annotations
from typing import Optional


class HttpFacadeError(Exception):
    """Base exception for every failure raised by the facade."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        original_error: Optional[BaseException] = None,
    ) -> None:
        self.message = message
        self.url = url
        self.status_code = status_code
        self.original_error = original_error
        super().__init__(message)

    def __str__(self) -> str:
        parts = [self.message]
        if self.url:
            parts.append(f"URL: {self.url}")
        if self.status_code:
            parts.append(f"Status: {self.status_code}")
        return " | ".join(parts)


class InvalidArgument(HttpFacadeError, ValueError):
    """A required parameter was missing or blank. Raised before any I/O."""

    def __init__(self, parameter: str, message: Optional[str] = None) -> None:
        self.parameter = parameter
        super().__init__(message or f"Invalid argument: {parameter}")


class ConfigurationError(HttpFacadeError):
    """Proxy, certificate or credential configuration could not be bound."""


class TransportError(HttpFacadeError):
    """Connection, DNS, TLS or I/O failure during the round trip."""


class TransportTimeoutError(TransportError):
    """The transport gave up waiting on the server."""


class HttpStatusError(HttpFacadeError):
    """A response arrived with a status outside 200-299 while enforcement was on."""

    def __init__(self, method: str, url: str, status_code: int, body: bytes = b"") -> None:
        self.method = method
        self.body = body
        super().__init__(
            message=f"HTTP {status_code} error for {method} {url}",
            url=url,
            status_code=status_code,
        )

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")
