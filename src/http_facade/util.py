from __future__ import annotations
from typing import Optional, Tuple
from urllib.parse import urlsplit

_SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "cookie", "x-api-key"}


def is_blank(value: object) -> bool:
    """True for None, non-strings and whitespace-only strings."""
    return not isinstance(value, str) or not value.strip()


def resolve_address(base_url: Optional[str], address: str) -> str:
    """Return the absolute URL for an address, prefixing base_url when address has no scheme."""
    a = address.strip()
    parts = urlsplit(a)
    if (parts.scheme and parts.netloc) or not base_url:
        return a
    return f"{base_url.rstrip('/')}/{a.lstrip('/')}"


def parse_header(raw: str) -> Tuple[str, str]:
    """Split a "Name: value" string."""
    name, sep, value = raw.partition(":")
    if not sep or not name.strip():
        raise ValueError(f"Header must look like 'Name: value', got {raw!r}")
    return name.strip(), value.strip()


def mask_secret(tok: Optional[str]) -> str:
    if not tok:
        return "-"
    t = tok.strip()
    if len(t) <= 8:
        return "***"
    return f"{t[:4]}…{t[-4:]}"


def loggable_headers(headers: dict[str, str]) -> dict[str, str]:
    return {k: (mask_secret(v) if k.lower() in _SENSITIVE_HEADERS else v) for k, v in headers.items()}
