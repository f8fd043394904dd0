"""Command-line interface for dotspell."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterable, NoReturn

import click
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from .config import ConfigError, load_settings
from .errors import DotspellError, FileAccessError
from .log import setup_logging
from .manager import ReconcileManager
from .models import ActionResult, FileAction, FileState, Package, PeerReport

EXIT_ERROR = 1

app = typer.Typer(help="Conjure dotfile packages into your home directory", no_args_is_help=True)
console = Console()
err_console = Console(stderr=True)

STATE_STYLES = {
    FileState.ABSENT: "yellow",
    FileState.PRESENT: "green",
    FileState.MISMATCH: "red",
}


def _load_manager(source: Path | None, target: Path | None, config: Path | None) -> ReconcileManager:
    settings = load_settings(source, target, config)
    return ReconcileManager(settings)


def _display(text: str) -> str:
    """Make undecodable filename bytes printable on any stdout encoding."""

    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _handle_error(exc: Exception, *, context: str | None = None) -> NoReturn:
    if isinstance(exc, DotspellError):
        message = f"{context}: {exc}" if context else str(exc)
        hint = ""
        if isinstance(exc, FileAccessError) and exc.permission_denied:
            hint = " (check the ownership of that path or re-run with elevated privileges)"
        elif isinstance(exc, ConfigError) and "does not exist" in str(exc):
            hint = " (pass --config with the path to an existing dotspell.toml)"
        err_console.print(f"[red]{escape(_display(message))}[/red][yellow]{hint}[/yellow]", soft_wrap=True)
        raise typer.Exit(code=EXIT_ERROR)
    raise exc


def _prepare(
    source: Path | None,
    target: Path | None,
    config: Path | None,
    verbose: bool,
) -> tuple[ReconcileManager, list[Package]]:
    setup_logging(verbose)
    try:
        manager = _load_manager(source, target, config)
        packages = manager.scan()
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc)
    return manager, packages


def _heading(verb: str) -> Callable[[Package], None]:
    def announce(package: Package) -> None:
        console.print(Text(_display(f".:. {verb} {package.name}")), soft_wrap=True)

    return announce


def _format_results(results: Iterable[ActionResult]) -> None:
    changed = [result for result in results if result.action is not FileAction.SKIPPED]
    if not changed:
        console.print("Nothing to do.")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Package")
    table.add_column("File", overflow="fold")
    table.add_column("State")
    table.add_column("Action")

    for result in changed:
        style = STATE_STYLES[result.state]
        table.add_row(
            Text(_display(result.package)),
            Text(_display(result.path)),
            Text(result.state.value, style=style),
            result.action.value,
        )

    console.print(table)


def _format_report(report: PeerReport) -> None:
    console.print(".:. Peering Packages")
    for package in report.packages:
        console.print(Text(_display(f"  {package.name}")), soft_wrap=True)
        for item in package.files:
            line = Text.assemble("    (", (item.state.value, STATE_STYLES[item.state]), _display(f") {item.path}"))
            console.print(line, soft_wrap=True)

    counts = report.counts()
    total = sum(counts.values())
    summary = ", ".join(f"{count} {state.value.lower()}" for state, count in counts.items())
    console.print(f"{total} file(s): {summary}")


@app.command()
def conjure(
    source: Path | None = typer.Option(None, "--source", "-s", help="Directory holding one folder per package"),
    target: Path | None = typer.Option(None, "--target", "-t", help="Directory packages are installed into"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to dotspell.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every file decision to stderr"),
) -> None:
    """Install absent and mismatched files into the target."""

    manager, packages = _prepare(source, target, config, verbose)
    try:
        results = manager.conjure(packages, on_package=_heading("Conjuring"))
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc, context="Conjure command failed with error")
    _format_results(results)


@app.command()
def expel(
    source: Path | None = typer.Option(None, "--source", "-s", help="Directory holding one folder per package"),
    target: Path | None = typer.Option(None, "--target", "-t", help="Directory packages are installed into"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to dotspell.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every file decision to stderr"),
) -> None:
    """Remove installed files that still match their source."""

    manager, packages = _prepare(source, target, config, verbose)
    try:
        results = manager.expel(packages, on_package=_heading("Expelling"))
    except Exception as exc:  # noqa: BLE001
        _handle_error(exc, context="Expel command failed with error")
    _format_results(results)


@app.command()
def peer(
    source: Path | None = typer.Option(None, "--source", "-s", help="Directory holding one folder per package"),
    target: Path | None = typer.Option(None, "--target", "-t", help="Directory packages are installed into"),
    config: Path | None = typer.Option(None, "--config", "-c", help="Path to dotspell.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every file decision to stderr"),
) -> None:
    """Show the state of every package file without touching the target."""

    manager, packages = _prepare(source, target, config, verbose)
    _format_report(manager.peer(packages))


def run() -> None:
    """Entry point used for console_script bindings.

    Usage errors exit with the same status as every other failure.
    """

    try:
        code = app(standalone_mode=False)
    except click.ClickException as exc:
        exc.show()
        code = EXIT_ERROR
    except click.Abort:
        err_console.print("Aborted.")
        code = EXIT_ERROR
    sys.exit(code or 0)
