"""CLI entry point for voicesite."""

from __future__ import annotations

import asyncio
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from voicesite.config import VoiceSiteConfig, load_config
from voicesite.config.loader import CONFIG_FILENAME, DEFAULT_CONFIG_TEMPLATE
from voicesite.errors import SnapshotNotFound
from voicesite.export import DirectorySaver
from voicesite.llm import create_llm_provider
from voicesite.llm.base import LLMProvider
from voicesite.log import configure_logging
from voicesite.preview import BrowserViewer, HtmlFileSandbox
from voicesite.session import Session
from voicesite.speech import ManualTranscript
from voicesite.versions import SQLiteKeyValueStore
from voicesite.workspace import Workspace

app = typer.Typer(
    name="voicesite",
    help="Build a small website from spoken instructions.",
)

config_app = typer.Typer(help="Manage voicesite configuration.")
app.add_typer(config_app, name="config")

versions_app = typer.Typer(help="Browse and restore saved versions.")
app.add_typer(versions_app, name="versions")

# Global state
_config: VoiceSiteConfig | None = None


def _get_config() -> VoiceSiteConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to voicesite.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(_config.log_level, _config.log_format)


@contextmanager
def _open_session(
    cfg: VoiceSiteConfig,
    llm: LLMProvider | None = None,
    instruction: str = "",
) -> Iterator[tuple[Session, Workspace]]:
    """Load the workspace buffers and history into a fresh Session.

    The history database is closed when the block exits.
    """
    workspace = Workspace(cfg.workspace.dir)
    sandbox = HtmlFileSandbox(cfg.preview.output, cfg.preview.initial_state())
    store = SQLiteKeyValueStore(cfg.versions.db_path)
    try:
        session = Session.create(
            cfg,
            llm,
            sandbox=sandbox,
            persistence=store,
            buffers=workspace.load(),
            viewer=BrowserViewer(Path(cfg.workspace.dir) / "external.html"),
            transcript=ManualTranscript(instruction),
        )
        if session.versions.load_error is not None:
            rprint(
                "[yellow]Saved versions were unreadable; starting with an empty history.[/yellow]"
            )
        yield session, workspace
    finally:
        store.close()


@app.command()
def init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing buffers"),
) -> None:
    """Create the workspace with starter markup, style and script."""
    cfg = _get_config()
    workspace = Workspace(cfg.workspace.dir)
    written = workspace.init(overwrite=force)
    if not written:
        rprint(f"[yellow]{workspace.root} already initialised.[/yellow] Use --force to reset.")
        return
    for path in written:
        rprint(f"[green]Created[/green] {path}")


@app.command()
def generate(
    instruction: str = typer.Argument(..., help="Spoken instruction, as transcribed text"),
) -> None:
    """Apply an instruction to the site via the generation service."""
    cfg = _get_config()
    try:
        llm = create_llm_provider(cfg.llm)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    with _open_session(cfg, llm, instruction) as (session, workspace):
        rprint(f"[bold]Generating[/bold] (llm: {cfg.llm.provider}/{cfg.llm.model})...")
        outcome = asyncio.run(session.generate_from_voice())
        if not outcome.succeeded:
            rprint(f"[red]Generation failed:[/red] {outcome.message}")
            raise typer.Exit(1)
        workspace.save(session.buffers)

    snap = outcome.snapshot
    rprint(Panel(
        f"[dim]Instruction:[/dim] {outcome.instruction}\n"
        f"[dim]Updated:[/dim]     {', '.join(k.value for k in outcome.fields) or 'nothing'}\n"
        f"[dim]Version:[/dim]     {snap.id if snap else '-'}\n"
        f"[dim]Preview:[/dim]     {cfg.preview.output}",
        title="Generation Complete",
        border_style="green",
    ))


@app.command()
def preview(
    device: Annotated[
        str | None, typer.Option("--device", "-d", help="Device preset name")
    ] = None,
    width: Annotated[int | None, typer.Option("--width", "-w", help="Width in px")] = None,
    full_width: bool = typer.Option(False, "--full-width", help="Use the full frame width"),
    zoom: Annotated[int | None, typer.Option("--zoom", "-z", help="Zoom percent")] = None,
    outlines: bool = typer.Option(False, "--outlines", help="Outline every element"),
) -> None:
    """Compose the buffers into the sandboxed preview page."""
    cfg = _get_config()
    presets = cfg.preview.device_presets
    if device is not None and device not in presets:
        rprint(
            f"[red]Error:[/red] Unknown device {device!r}. "
            f"Available: {', '.join(presets)}"
        )
        raise typer.Exit(1)

    with _open_session(cfg) as (session, _):
        controller = session.preview
        if device is not None:
            controller.set_device_preset(presets[device])
        if width is not None:
            controller.set_width(width)
        if full_width:
            controller.set_full_width()
        if zoom is not None:
            controller.set_zoom(zoom)
        if outlines != controller.config.show_outlines:
            controller.toggle_outlines()
        controller.refresh(force=True)
        state = controller.config

    rprint(Panel(
        f"[dim]File:[/dim]     {cfg.preview.output}\n"
        f"[dim]Width:[/dim]    {state.css_width}\n"
        f"[dim]Zoom:[/dim]     {state.zoom_percent}%\n"
        f"[dim]Outlines:[/dim] {'on' if state.show_outlines else 'off'}",
        title="Preview",
        border_style="blue",
    ))


@app.command("open")
def open_external() -> None:
    """Open the composed site, without preview overlays, in a browser."""
    cfg = _get_config()
    with _open_session(cfg) as (session, _):
        try:
            session.open_external()
        except OSError as e:
            rprint(f"[red]Open failed:[/red] {e}")
            raise typer.Exit(1)


@app.command()
def save(
    label: Annotated[str | None, typer.Option("--label", "-l", help="Version label")] = None,
) -> None:
    """Save the current buffers as a new version."""
    cfg = _get_config()
    with _open_session(cfg) as (session, _):
        snap = session.save_version(label)
    rprint(f"[green]Version saved:[/green] {snap.id} {snap.label}")


@app.command()
def export(
    output: str = typer.Option("site", "--output", "-o", help="Directory to write files to"),
) -> None:
    """Write index.html, style.css and script.js."""
    cfg = _get_config()
    saver = DirectorySaver(output)
    with _open_session(cfg) as (session, _):
        try:
            session.export(saver)
        except OSError as e:
            rprint(f"[red]Export failed:[/red] {e}")
            raise typer.Exit(1)
    for path in saver.written:
        rprint(f"[green]Wrote[/green] {path}")


# ---------------------------------------------------------------------------
# Versions
# ---------------------------------------------------------------------------


@versions_app.command("list")
def versions_list() -> None:
    """List saved versions, most recent first."""
    cfg = _get_config()
    with _open_session(cfg) as (session, _):
        history = session.versions.history
    if not history:
        rprint("No saved versions yet")
        return

    table = Table(title=f"Versions ({len(history)})")
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    table.add_column("Markup", justify="right")
    table.add_column("Style", justify="right")
    table.add_column("Script", justify="right")
    for snap in history:
        table.add_row(
            str(snap.id),
            snap.label,
            str(len(snap.markup)),
            str(len(snap.style)),
            str(len(snap.script)),
        )
    rprint(table)


@versions_app.command("show")
def versions_show(
    snapshot_id: int = typer.Argument(..., help="Version id"),
) -> None:
    """Print a version as JSON."""
    cfg = _get_config()
    with _open_session(cfg) as (session, _):
        try:
            snap = session.versions.get(snapshot_id)
        except SnapshotNotFound as e:
            rprint(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
    rprint(Syntax(snap.model_dump_json(indent=2), "json"))


@versions_app.command("restore")
def versions_restore(
    snapshot_id: int = typer.Argument(..., help="Version id"),
) -> None:
    """Overwrite the buffers with a saved version."""
    cfg = _get_config()
    with _open_session(cfg) as (session, workspace):
        try:
            session.restore_version(snapshot_id)
        except SnapshotNotFound as e:
            rprint(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
        workspace.save(session.buffers)
    rprint(f"[green]Restored[/green] version {snapshot_id}")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default voicesite.yaml in current directory."""
    target = Path(CONFIG_FILENAME)
    if target.exists() and not force:
        rprint("[yellow]voicesite.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
