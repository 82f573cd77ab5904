from __future__ import annotations
from pathlib import Path
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text
from .errors import HttpFacadeError, HttpStatusError, InvalidArgument

_BODY_PREVIEW = 500


class Reporter:
    def __init__(self, console: Console) -> None:
        self.console = console

    def error(self, exc: HttpFacadeError) -> None:
        table = Table(show_header=False, box=None)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Error", type(exc).__name__)
        table.add_row("Message", exc.message)
        if isinstance(exc, InvalidArgument):
            table.add_row("Parameter", exc.parameter)
        if isinstance(exc, HttpStatusError):
            table.add_row("Method", exc.method)
            table.add_row("Status", str(exc.status_code))
        if exc.url:
            table.add_row("URL", exc.url)
        if isinstance(exc, HttpStatusError) and exc.body:
            text = exc.text
            suffix = "…" if len(text) > _BODY_PREVIEW else ""
            table.add_row("Body", Text(text[:_BODY_PREVIEW] + suffix))
        if exc.original_error is not None:
            table.add_row("Cause", Text(repr(exc.original_error)))
        self.console.print(Panel.fit(table, title=Text("Request failed", style="bold red")))

    def saved(self, path: Path, size: int) -> None:
        self.console.print(f"[bold green]Saved[/bold green] {size} bytes → {path}")

    def write_failed(self, path: Path, exc: OSError) -> None:
        table = Table(show_header=False, box=None)
        table.add_column("Field", style="bold")
        table.add_column("Value")
        table.add_row("Error", type(exc).__name__)
        table.add_row("Path", str(path))
        table.add_row("Message", Text(exc.strerror or str(exc)))
        self.console.print(Panel.fit(table, title=Text("Write failed", style="bold red")))

    def deleted(self, url: str) -> None:
        self.console.print(f"[bold green]Deleted[/bold green] {url}")
