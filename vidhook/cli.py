"""
vidhook.cli - Typer CLI entry point.

Provides the submit, check and init subcommands.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from vidhook import __version__
from vidhook.config import CONFIG_FILENAME, create_default_config, load_config, write_config
from vidhook.exceptions import ConfigError, DependencyError
from vidhook.extract.audio import format_size
from vidhook.extract.capability import probe_capabilities, require_ffmpeg
from vidhook.form import UploadForm
from vidhook.logging import configure_logging
from vidhook.models import SelectedVideo

app = typer.Typer(
    name="vidhook",
    help="Video & audio uploader.\n\n"
    "Extracts the audio track of an MP4/MOV video and sends both files, "
    "with your contact details, to a webhook.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"vidhook {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Vidhook - video & audio uploader."""
    pass


def _print_errors(form: UploadForm) -> None:
    for field, message in form.errors.items():
        if message:
            console.print(f"[red]{field}: {escape(message)}[/red]")


@app.command("submit")
def submit(
    video: Path = typer.Argument(..., help="MP4 or MOV file to upload"),
    name: str = typer.Option(..., "--name", "-n", prompt="Name", help="Your name"),
    surname: str = typer.Option(..., "--surname", "-s", prompt="Surname", help="Your surname"),
    email: str = typer.Option(..., "--email", "-e", prompt="Email", help="Your email address"),
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help=f"Path to {CONFIG_FILENAME}"
    ),
    webhook_url: str | None = typer.Option(
        None, "--webhook-url", "-w", help="Webhook URL (overrides config and environment)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """Upload a video and its extracted audio to the webhook."""
    configure_logging(verbose)

    try:
        config = load_config(config_path, webhook_url=webhook_url)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not config.webhook_url:
        console.print("[red]Error: No webhook URL configured[/red]")
        console.print(
            "[dim]Set webhook_url in vidhook.yaml, VIDHOOK_WEBHOOK_URL, or pass --webhook-url[/dim]"
        )
        raise typer.Exit(1)

    form = UploadForm(config, on_progress=lambda m: console.print(f"[dim]  {escape(m)}[/dim]"))
    form.update_field("name", name)
    form.update_field("surname", surname)
    form.update_field("email", email)

    video_file = video.expanduser()
    if not video_file.is_file():
        console.print(f"[red]Error: File not found: {escape(str(video_file))}[/red]")
        raise typer.Exit(1)

    if not form.select_file(SelectedVideo.from_path(video_file.resolve())):
        _print_errors(form)
        raise typer.Exit(1)

    if not form.validate():
        _print_errors(form)
        raise typer.Exit(1)

    console.print(f"[dim]Uploading {video_file.name} ({format_size(form.data.file.size)})...[/dim]")
    result = form.submit()

    if result is None or not result.ok:
        message = result.message if result else "Upload did not run"
        console.print(f"[red]✗ {escape(message)}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] {result.message}")


def _yes_no(value: bool) -> str:
    return "yes" if value else "[red]no[/red]"


@app.command("check")
def check(
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help=f"Path to {CONFIG_FILENAME}"
    ),
) -> None:
    """Check whether audio extraction is available."""
    try:
        config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        require_ffmpeg()
    except DependencyError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if e.install_hint:
            console.print(f"[dim]{e.install_hint}[/dim]")
        raise typer.Exit(1)

    report = probe_capabilities(config.audio_codec, config.audio_container)

    table = Table(title="Audio Extraction Support")
    table.add_column("Check", style="cyan")
    table.add_column("Result", style="green")
    table.add_row("ffmpeg", f"{report['ffmpeg_path']} ({report['ffmpeg_version']})")
    table.add_row("ffprobe", str(report["ffprobe_path"]))
    table.add_row(f"encoder {report['codec']}", _yes_no(report["encoder_available"]))
    table.add_row(f"muxer {report['container']}", _yes_no(report["muxer_available"]))
    table.add_row("webhook", config.webhook_url or "[yellow]not configured[/yellow]")
    console.print(table)

    if not report["supported"]:
        console.print(
            "[yellow]Audio extraction unavailable; uploads will carry an empty audio file[/yellow]"
        )
        raise typer.Exit(1)

    console.print("[green]✓[/green] Audio extraction supported")


@app.command("init")
def init_config(
    path: str = typer.Option(".", "--path", "-d", help="Directory to write vidhook.yaml in"),
    webhook_url: str | None = typer.Option(None, "--webhook-url", "-w", help="Webhook URL"),
) -> None:
    """Write a default vidhook.yaml."""
    config_file = Path(path) / CONFIG_FILENAME

    if config_file.exists():
        console.print(f"[red]Error: '{config_file}' already exists[/red]")
        raise typer.Exit(1)

    try:
        config = create_default_config(webhook_url)
    except ConfigError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    write_config(config, config_file)
    console.print(f"[green]✓[/green] Created {config_file}")
    if not webhook_url:
        console.print("[dim]  Set webhook_url before running 'vidhook submit'[/dim]")
