from __future__ import annotations

import httpx
import pytest

from http_facade import (
    HttpSettings,
    HttpStatusError,
    InvalidArgument,
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

from .conftest import echo

TEXT_VERBS = [http_get, http_post, http_put, http_patch, http_delete]
BYTE_VERBS = [http_get_as_bytes, http_post_as_bytes, http_put_as_bytes, http_patch_as_bytes]


def test_get_with_default_settings_returns_body(context, stub):
    stub.respond(200, b"hello")

    assert http_get(context, "/ok") == "hello"
    assert stub.last.method == "GET"
    assert str(stub.last.url) == "http://stub.test/ok"


@pytest.mark.parametrize("body", [b"x", b'{"a": [1, 2, 3]}', bytes(range(256)), "grüße ✓".encode("utf-8")])
def test_post_echo_returns_exact_body(context, stub, body):
    stub.handler = echo

    assert http_post_as_bytes(context, "/echo", HttpSettings(request_body=body)) == body


def test_text_variant_matches_plain_utf8_decode(context, stub):
    raw = "naïve café ✓ 日本".encode("utf-8")
    stub.respond(200, raw)

    assert http_put(context, "/text") == raw.decode("utf-8")
    assert http_put_as_bytes(context, "/text") == raw


def test_text_variant_replaces_malformed_utf8(context, stub):
    stub.respond(200, b"ok \xff\xfe end")

    assert http_get(context, "/bad") == "ok �� end"


@pytest.mark.parametrize("verb", TEXT_VERBS)
def test_default_and_no_op_configurator_send_identical_requests(context, stub, verb):
    verb(context, "/same")
    verb(context, "/same", lambda settings: None)

    first, second = stub.requests
    assert first.method == second.method
    assert first.url == second.url
    assert first.headers.raw == second.headers.raw
    assert first.content == second.content == b""


@pytest.mark.parametrize("verb", TEXT_VERBS + BYTE_VERBS)
@pytest.mark.parametrize("address", ["", "   ", "\t\n"])
def test_blank_address_fails_before_any_network_activity(context, stub, verb, address):
    with pytest.raises(InvalidArgument) as exc_info:
        verb(context, address)

    assert exc_info.value.parameter == "address"
    assert stub.options == []
    assert stub.requests == []


@pytest.mark.parametrize("verb", TEXT_VERBS)
def test_missing_context_is_rejected(stub, verb):
    with pytest.raises(InvalidArgument) as exc_info:
        verb(None, "http://stub.test/x")

    assert exc_info.value.parameter == "context"
    assert stub.requests == []


def test_not_found_raises_status_error_when_enforced(context, stub):
    stub.respond(404, b"missing")

    with pytest.raises(HttpStatusError) as exc_info:
        http_get(context, "/nope")

    assert exc_info.value.status_code == 404
    assert exc_info.value.body == b"missing"
    assert exc_info.value.method == "GET"


def test_not_found_returns_body_when_not_enforced(context, stub):
    stub.respond(404, b"missing")

    body = http_get(context, "/nope", lambda s: s.ensure_success_status_code(False))

    assert body == "missing"


def test_repeated_header_sends_last_value_once(context, stub):
    http_get(context, "/h", lambda s: s.append_header("X-Token", "first").append_header("x-token", "second"))

    assert stub.last.headers.get_list("x-token") == ["second"]


def test_delete_no_content_succeeds(context, stub):
    stub.respond(204)

    assert http_delete(context, "/item/1") is None
    assert stub.last.method == "DELETE"
    assert stub.last.content == b""


def test_delete_failure_is_reported(context, stub):
    stub.respond(409, b"conflict")

    with pytest.raises(HttpStatusError) as exc_info:
        http_delete(context, "/item/1")

    assert exc_info.value.status_code == 409


def test_patch_sends_json_with_content_type(context, stub):
    stub.respond(200, b"{}")

    http_patch(
        context,
        "/item/1",
        lambda s: s.set_request_body('{"id":123}').set_content_type("application/json"),
    )

    request = stub.last
    assert request.method == "PATCH"
    assert request.headers["Content-Type"] == "application/json"
    assert request.content == '{"id":123}'.encode("utf-8")


def test_explicit_settings_and_configurator_are_equivalent(context, stub):
    explicit = HttpSettings(headers={"Accept": "text/plain"}, request_body=b"data")
    http_post(context, "/p", explicit)
    http_post(context, "/p", lambda s: s.set_accept("text/plain").set_request_body(b"data"))

    first, second = stub.requests
    assert first.headers.raw == second.headers.raw
    assert first.content == second.content == b"data"


def test_builder_instance_is_accepted_as_settings(context, stub):
    builder = HttpSettings.builder().set_request_body("payload")

    http_post(context, "/p", builder)

    assert stub.last.content == b"payload"


def test_build_settings_rejects_missing_configurator():
    with pytest.raises(InvalidArgument) as exc_info:
        build_settings(None)

    assert exc_info.value.parameter == "configurator"


def test_build_settings_runs_configurator_on_fresh_defaults():
    seen = []

    settings = build_settings(lambda s: seen.append(s.build()) or s.use_default_credentials())

    assert seen == [HttpSettings()]
    assert settings.use_default_credentials is True


@pytest.mark.parametrize("bad", [None, 42, "settings"])
def test_unusable_settings_argument_is_rejected(context, stub, bad):
    with pytest.raises(InvalidArgument) as exc_info:
        http_get(context, "/x", bad)

    assert exc_info.value.parameter == "settings"
    assert stub.requests == []


def test_configurator_is_run_per_call(context, stub):
    calls = []

    def configure(s):
        calls.append(s)
        s.append_header("X-Call", str(len(calls)))

    http_get(context, "/a", configure)
    http_get(context, "/b", configure)

    assert calls[0] is not calls[1]
    assert [r.headers["X-Call"] for r in stub.requests] == ["1", "2"]


def test_transport_is_bound_per_call(context, stub):
    http_get(context, "/a", lambda s: s.set_proxy("http://proxy-a.test:3128"))
    http_get(context, "/b")

    first, second = stub.options
    assert first.proxy is not None and first.proxy.url == httpx.URL("http://proxy-a.test:3128")
    assert second.proxy is None
    assert stub.closed == 2


def test_relative_address_with_url_in_query_joins_base_url(context, stub):
    stub.respond(200, b"ok")

    assert http_get(context, "/login?next=https://app.test/home") == "ok"
    assert stub.last.url.path == "/login"
    assert stub.last.url.host == "stub.test"
    assert stub.last.url.params["next"] == "https://app.test/home"
