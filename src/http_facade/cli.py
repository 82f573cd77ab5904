from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console

from .config import HttpSettingsBuilder
from .context import HttpContext
from .errors import HttpFacadeError, InvalidArgument
from .models import HttpMethod
from .reporter import Reporter
from .util import parse_header
from .verbs import (
    Configurator,
    http_delete,
    http_get_as_bytes,
    http_patch_as_bytes,
    http_post_as_bytes,
    http_put_as_bytes,
)

app = typer.Typer(add_completion=False, no_args_is_help=True)

_BYTE_VERBS = {
    HttpMethod.GET: http_get_as_bytes,
    HttpMethod.POST: http_post_as_bytes,
    HttpMethod.PUT: http_put_as_bytes,
    HttpMethod.PATCH: http_patch_as_bytes,
}


def _accept_any_certificate(certificate: bytes, chain: tuple, errors: tuple) -> bool:
    return True


def build_context(base_url: Optional[str], timeout: Optional[float]) -> HttpContext:
    return HttpContext(base_url=base_url, timeout_s=timeout)


def _configurator(
    headers: List[str],
    data: Optional[str],
    content_type: Optional[str],
    bearer: Optional[str],
    basic: Optional[str],
    default_credentials: bool,
    proxy: Optional[str],
    insecure: bool,
    ensure_success: bool,
) -> Configurator:
    parsed = []
    for raw in headers:
        try:
            parsed.append(parse_header(raw))
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--header")
    if basic is not None and ":" not in basic:
        raise typer.BadParameter("Expected user:password", param_hint="--basic")

    def configure(s: HttpSettingsBuilder) -> None:
        if bearer:
            s.use_bearer_authorization(bearer)
        if basic is not None:
            user, _, password = basic.partition(":")
            s.use_basic_authorization(user, password)
        for name, value in parsed:
            s.append_header(name, value)
        if data is not None:
            s.set_request_body(data)
        if content_type:
            s.set_content_type(content_type)
        if default_credentials:
            s.use_default_credentials()
        if proxy:
            s.set_proxy(proxy)
        if insecure:
            s.set_certificate_validation(_accept_any_certificate)
        s.ensure_success_status_code(ensure_success)

    return configure


def _run(verb: HttpMethod, url: str, configure: Configurator, context: HttpContext, output: Optional[Path]) -> None:
    console = Console()
    reporter = Reporter(Console(stderr=True))
    try:
        if verb == HttpMethod.DELETE:
            http_delete(context, url, configure)
            reporter.deleted(url)
            return
        body = _BYTE_VERBS[verb](context, url, configure)
    except InvalidArgument as e:
        reporter.error(e)
        raise typer.Exit(code=2)
    except HttpFacadeError as e:
        reporter.error(e)
        raise typer.Exit(code=1)
    if output is not None:
        try:
            output.write_bytes(body)
        except OSError as e:
            reporter.write_failed(output, e)
            raise typer.Exit(code=1)
        reporter.saved(output, len(body))
    else:
        console.out(body.decode("utf-8", errors="replace"), highlight=False)


def _command(verb: HttpMethod):
    def command(
        url: str = typer.Argument(..., help="Absolute URL, or a path relative to --base-url"),
        header: List[str] = typer.Option([], "--header", "-H", help='Request header, "Name: value". Repeatable.'),
        data: Optional[str] = typer.Option(None, "--data", "-d", help="Request body (POST, PUT, PATCH)."),
        content_type: Optional[str] = typer.Option(None, "--content-type"),
        bearer: Optional[str] = typer.Option(None, "--bearer", envvar="HTTP_FACADE_BEARER"),
        basic: Optional[str] = typer.Option(None, "--basic", help="user:password"),
        default_credentials: bool = typer.Option(False, "--default-credentials", help="Attach ambient (netrc) credentials."),
        proxy: Optional[str] = typer.Option(None, "--proxy", envvar="HTTP_FACADE_PROXY"),
        insecure: bool = typer.Option(False, "--insecure", help="Accept any server certificate."),
        ensure_success: bool = typer.Option(True, "--ensure-success/--no-ensure-success"),
        timeout: float = typer.Option(100.0, "--timeout", envvar="HTTP_FACADE_TIMEOUT"),
        base_url: Optional[str] = typer.Option(None, "--base-url", envvar="HTTP_FACADE_BASE_URL"),
        output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the raw body to a file."),
        verbose: bool = typer.Option(False, "--verbose", "-v"),
    ):
        if verbose:
            logging.basicConfig(
                level=logging.DEBUG,
                format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            )
        configure = _configurator(
            header, data, content_type, bearer, basic, default_credentials, proxy, insecure, ensure_success
        )
        _run(verb, url, configure, build_context(base_url, timeout), output)

    command.__doc__ = f"Send an HTTP {verb.value} request and print the response body."
    return command


@app.callback()
def main() -> None:
    pass


for _verb in HttpMethod:
    app.command(_verb.value.lower())(_command(_verb))


if __name__ == "__main__":
    app()
