from __future__ import annotations
import base64
import json
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union
from urllib.parse import urlencode

import httpx

from .models import CertificatePolicy

ProxyTypes = Union[str, httpx.URL, httpx.Proxy]


def _merge_header(headers: Dict[str, str], name: str, value: str) -> Dict[str, str]:
    """Last write wins; names compare case-insensitively and keep their first position."""
    key = name.lower()
    if not any(k.lower() == key for k in headers):
        return {**headers, name: value}
    return {(name if k.lower() == key else k): (value if k.lower() == key else v) for k, v in headers.items()}


def _normalize_headers(headers: Union[Mapping[str, str], Iterable[Tuple[str, str]], None]) -> Mapping[str, str]:
    items = headers.items() if isinstance(headers, Mapping) else (headers or ())
    merged: Dict[str, str] = {}
    for name, value in items:
        merged = _merge_header(merged, str(name), str(value))
    return MappingProxyType(merged)


@dataclass(frozen=True)
class HttpSettings:
    """Immutable description of one request: headers, body, credentials, proxy and TLS policy."""

    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    request_body: bytes = b""
    content_type: Optional[str] = None
    use_default_credentials: bool = False
    proxy: Optional[ProxyTypes] = None
    certificate_validation: Optional[CertificatePolicy] = None
    ensure_success_status_code: bool = True
    timeout_s: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", _normalize_headers(self.headers))
        body = self.request_body
        if body is None:
            body = b""
        elif isinstance(body, str):
            body = body.encode("utf-8")
        object.__setattr__(self, "request_body", bytes(body))

    def __hash__(self) -> int:
        # header names are unique, so the item set matches mapping equality
        return hash((
            frozenset(self.headers.items()),
            self.request_body,
            self.content_type,
            self.use_default_credentials,
            self.proxy,
            self.certificate_validation,
            self.ensure_success_status_code,
            self.timeout_s,
        ))

    @staticmethod
    def builder() -> "HttpSettingsBuilder":
        return HttpSettingsBuilder()

    def to_builder(self) -> "HttpSettingsBuilder":
        return HttpSettingsBuilder(self)


class HttpSettingsBuilder:
    """
    Fluent, mutable handle handed to configurators.

    Every mutator returns the builder itself so calls can be chained:

        settings.use_bearer_authorization(token).set_no_cache().append_header("Connection", "keep-alive")

    No mutator validates cross-field consistency; a body set for a GET is
    simply not sent.
    """

    def __init__(self, base: Optional[HttpSettings] = None) -> None:
        self._settings = base or HttpSettings()

    def _set(self, **changes: Any) -> "HttpSettingsBuilder":
        self._settings = replace(self._settings, **changes)
        return self

    def build(self) -> HttpSettings:
        return self._settings

    # ------- core mutators -------

    def append_header(self, name: str, value: str) -> "HttpSettingsBuilder":
        if not name or not name.strip():
            raise ValueError("Header name must not be blank")
        return self._set(headers=_merge_header(dict(self._settings.headers), name, value))

    def set_request_body(self, body: Union[bytes, str]) -> "HttpSettingsBuilder":
        return self._set(request_body=body)

    def set_content_type(self, content_type: Optional[str]) -> "HttpSettingsBuilder":
        return self._set(content_type=content_type)

    def use_default_credentials(self, enabled: bool = True) -> "HttpSettingsBuilder":
        return self._set(use_default_credentials=enabled)

    def set_proxy(self, proxy: Optional[ProxyTypes]) -> "HttpSettingsBuilder":
        return self._set(proxy=proxy)

    def set_certificate_validation(self, policy: Optional[CertificatePolicy]) -> "HttpSettingsBuilder":
        return self._set(certificate_validation=policy)

    def ensure_success_status_code(self, enabled: bool = True) -> "HttpSettingsBuilder":
        return self._set(ensure_success_status_code=enabled)

    def set_timeout(self, seconds: Optional[float]) -> "HttpSettingsBuilder":
        return self._set(timeout_s=seconds)

    # ------- convenience -------

    def set_authorization(self, scheme: str, parameter: str) -> "HttpSettingsBuilder":
        return self.append_header("Authorization", f"{scheme} {parameter}")

    def use_bearer_authorization(self, token: str) -> "HttpSettingsBuilder":
        return self.set_authorization("Bearer", token)

    def use_basic_authorization(self, user: str, password: str) -> "HttpSettingsBuilder":
        creds = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
        return self.set_authorization("Basic", creds)

    def set_accept(self, media_type: str) -> "HttpSettingsBuilder":
        return self.append_header("Accept", media_type)

    def set_no_cache(self) -> "HttpSettingsBuilder":
        return self.append_header("Cache-Control", "no-store").append_header("Pragma", "no-cache")

    def set_json_request_body(self, payload: Any) -> "HttpSettingsBuilder":
        body = json.dumps(payload, separators=(",", ":")).encode("utf-8")
        return self.set_request_body(body).set_content_type("application/json")

    def set_form_url_encoded_request_body(self, fields: Mapping[str, str]) -> "HttpSettingsBuilder":
        return self.set_request_body(urlencode(list(fields.items()))).set_content_type(
            "application/x-www-form-urlencoded"
        )
