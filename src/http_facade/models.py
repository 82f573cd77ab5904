from __future__ import annotations
from enum import Enum
from typing import Callable, Tuple


# (leaf certificate DER, presented chain DER, errors) -> accept?
CertificatePolicy = Callable[[bytes, Tuple[bytes, ...], Tuple[str, ...]], bool]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def carries_body(self) -> bool:
        """POST, PUT and PATCH send the configured request body; GET and DELETE do not."""
        return self in (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)
