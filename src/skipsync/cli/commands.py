"""CLI commands for skipsync.

This module implements the user-facing commands:
- ``resolve``: run the skip-segment pipeline for a playback request file.
- ``offset``: inspect and edit per-title offsets.
- ``config``: persist settings in config.toml.
- ``version``: print the installed version.

Design:
- Typer sub-apps group the offset and config commands.
- All output is routed through Rich (see ConsoleManager); ``--json`` prints
  plain JSON for scripting.
- Exit codes are defined as an Enum; "no segments found" is not an error but
  gets its own code so scripts can branch on it.
"""

import asyncio
import json
import os
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from skipsync.cli.console import ConsoleManager, ConsoleNotifier
from skipsync.core.offsets import OFFSET_CHOICES, OffsetStore, format_offset
from skipsync.core.resolver import SkipResolver
from skipsync.fs.storage import JsonFileStorage, load_request
from skipsync.models.core import Resolution
from skipsync.utils.config import set_setting, storage_path

app = typer.Typer(
    name="skipsync",
    help="Resolve skippable openings, endings and recaps for video playback.",
    add_completion=False,
)
offset_app = typer.Typer(help="Inspect and edit per-title skip offsets.")
config_app = typer.Typer(help="Persist skipsync settings.")
app.add_typer(offset_app, name="offset")
app.add_typer(config_app, name="config")


class ExitCode(int, Enum):
    """Exit codes for CLI commands."""

    SUCCESS = 0
    ERROR = 1
    NOT_FOUND = 2


STORAGE = Annotated[
    Optional[str],
    typer.Option(
        "--storage",
        help="Key-value storage file holding offsets "
        "(default: ~/.config/skipsync/storage.json).",
    ),
]


def _offset_store(storage: Optional[str]) -> OffsetStore:
    return OffsetStore(JsonFileStorage(storage_path(storage)))


def _format_seconds(value: float) -> str:
    minutes, seconds = divmod(int(value), 60)
    return f"{minutes:02d}:{seconds:02d}"


def _render_resolution(resolution: Resolution, title: str) -> Table:
    position = resolution.position
    table = Table(
        title=f"{title} S{position.season:02d}E{position.episode:02d} "
        f"({resolution.provenance.value})"
    )
    table.add_column("Label", style="cyan")
    table.add_column("Start", style="green")
    table.add_column("End", style="green")
    for seg in resolution.segments:
        table.add_row(seg.label, _format_seconds(seg.start), _format_seconds(seg.end))
    return table


@app.callback()
def callback(
    no_rich: bool = typer.Option(
        False,
        "--no-rich",
        help="Disable Rich coloured output. "
        "Can also be set with the SKIPSYNC_NO_RICH environment variable.",
    ),
) -> None:
    """Top-level CLI callback adding global options."""
    if no_rich:
        os.environ["SKIPSYNC_NO_RICH"] = "1"


@app.command()
def version() -> None:
    """Show the version of skipsync."""
    from skipsync.__about__ import __version__

    with ConsoleManager() as console:
        console.print(f"skipsync version: [bold]{__version__}[/bold]")


@app.command()
def resolve(
    request_file: Annotated[
        Path,
        typer.Argument(
            exists=True,
            dir_okay=False,
            readable=True,
            help="Playback request as JSON or YAML.",
        ),
    ],
    storage: STORAGE = None,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the updated request as JSON."),
    ] = False,
) -> None:
    """Resolve skip segments for a playback request."""
    try:
        request = load_request(request_file)
    except (OSError, ValueError) as exc:
        with ConsoleManager() as console:
            console.print(f"[red]Could not read {request_file}: {exc}[/red]")
        raise typer.Exit(code=ExitCode.ERROR)

    with ConsoleManager() as console:
        # Notifications go to stderr so --json output stays machine-readable.
        notifier = ConsoleNotifier(Console(stderr=True) if json_output else console)
        resolver = SkipResolver(_offset_store(storage), notifier=notifier)
        resolution = asyncio.run(resolver.resolve(request))

        if json_output:
            typer.echo(json.dumps(request.host_payload(), ensure_ascii=False))
        elif resolution is not None:
            card = request.card
            title = request.title or (card.display_title if card else "")
            console.print(_render_resolution(resolution, title))
        else:
            console.print("[yellow]No skip segments found.[/yellow]")

    if resolution is None:
        raise typer.Exit(code=ExitCode.NOT_FOUND)


@offset_app.command("get")
def offset_get(card_id: str, storage: STORAGE = None) -> None:
    """Show the offset stored for a title."""
    value = _offset_store(storage).get_offset(card_id)
    with ConsoleManager() as console:
        console.print(f"{card_id}: {format_offset(value)} sec")


@offset_app.command("set", context_settings={"ignore_unknown_options": True})
def offset_set(card_id: str, seconds: int, storage: STORAGE = None) -> None:
    """Store an offset in seconds for a title; 0 removes it."""
    _offset_store(storage).set_offset(card_id, seconds)
    with ConsoleManager() as console:
        console.print(f"Marks offset for {card_id}: {format_offset(seconds)} sec")


@offset_app.command("list")
def offset_list(storage: STORAGE = None) -> None:
    """List every stored offset."""
    offsets = _offset_store(storage).all_offsets()
    with ConsoleManager() as console:
        if not offsets:
            console.print("No offsets stored.")
            return
        table = Table(title="Skip offsets")
        table.add_column("Card", style="cyan")
        table.add_column("Offset (sec)", style="magenta")
        for card_id, value in sorted(offsets.items()):
            table.add_row(card_id, format_offset(value))
        console.print(table)


@offset_app.command("choices")
def offset_choices() -> None:
    """Show the offsets offered by the player's offset picker."""
    with ConsoleManager() as console:
        console.print(" ".join(format_offset(value) for value in OFFSET_CHOICES))


@config_app.command("set")
def config_set(key: str, value: str) -> None:
    """Persist a dotted setting, e.g. ``storage.path``."""
    parsed: object = int(value) if value.lstrip("-").isdigit() else value
    set_setting(key, parsed)
    with ConsoleManager() as console:
        console.print(f"Set [bold]{key}[/bold] = {parsed!r}")


if __name__ == "__main__":
    app()
