"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path
from typing import Any

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from spotify_insights.models.config import AppConfig
from spotify_insights.models.spotify import Playlist, Track
from spotify_insights.models.stats import STATISTIC_LABELS, MetricsSnapshot
from spotify_insights.utils.formatting import (
    format_artists,
    format_statistic,
    format_track_length,
)


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "AuthorizationError": [
            "• Your access token has probably expired (they last one hour).",
            "• Run `spotify-insights logout` and then `spotify-insights login`.",
        ],
        "NotAuthenticatedError": [
            "• Run `spotify-insights login` first.",
        ],
        "MalformedRedirectError": [
            "• Paste the full URL your browser was redirected to, including '#'.",
            "• Make sure you approved the requested permissions.",
        ],
        "EmptyTrackCollectionError": [
            "• Spotify returned no top tracks for this account yet.",
            "• Listen to some music and try again later.",
        ],
        "ConfigurationError": [
            "• Run `spotify-insights init <CLIENT_ID>` to create a configuration.",
            "• Check the values with `spotify-insights --show-config`.",
        ],
        "TransportError": [
            "• A network connection issue occurred.",
            "• The Spotify API might be temporarily unavailable.",
            "• Please try again in a few minutes.",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(Text("\n".join(suggestions)))

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_config(config_path: Path, config_data: dict[str, Any]):
    """Displays the current configuration."""
    console = Console()
    content = ""
    for key, value in config_data.items():
        if isinstance(value, list):
            value = ", ".join(getattr(v, "value", str(v)) for v in value)
        content += f"{key} = {value}\n"

    console.print(
        Panel(
            content.strip(),
            title=f"Configuration ([dim]{config_path}[/dim])",
            border_style="cyan",
        )
    )


def print_validation_table(config: AppConfig):
    """Displays a summary of the current settings."""
    console = Console()
    options = config.playlist_options()

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column()

    table.add_row(
        "Client ID:",
        "[green]✓ Set[/green]" if config.client_id else "[red]✗ Missing[/red]",
    )
    table.add_row("Redirect URI:", config.redirect_uri)
    table.add_row("Preset:", config.preset)
    table.add_row("Playlist Name:", options.name)
    table.add_row("Description:", f"[dim]{options.description}[/dim]")
    table.add_row(
        "Metrics:", ", ".join(STATISTIC_LABELS[m] for m in options.metrics)
    )
    table.add_row(
        "Require Population:",
        "✓ Enabled" if options.require_population else "✗ Disabled",
    )
    table.add_row(
        "Request Timeout:",
        f"{config.request_timeout:g}s" if config.request_timeout else "None",
    )

    console.print(
        Panel(
            table,
            title="[bold green]✓ Validated Settings[/bold green]",
            border_style="green",
        )
    )


def print_tracks_table(tracks: list[Track]):
    """Displays the fetched top tracks."""
    console = Console()
    if not tracks:
        console.print("[dim]No top tracks to show.[/dim]")
        return

    table = Table(title=f"Your Top {len(tracks)} Tracks", box=box.ROUNDED)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Artist")
    table.add_column("Released", style="dim")
    table.add_column("Length", justify="right")
    table.add_column("Pop.", justify="right", style="green")
    for i, track in enumerate(tracks, 1):
        table.add_row(
            str(i),
            track.name or track.uri,
            format_artists(track),
            track.album.release_date or "",
            format_track_length(track.duration_ms),
            str(track.popularity),
        )
    console.print(table)


def print_playlist_panel(playlist: Playlist):
    """Displays the created playlist with its share link."""
    console = Console()
    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold cyan")
    grid.add_column()
    grid.add_row("Playlist Name:", playlist.name)
    if playlist.share_url:
        grid.add_row(
            "Open on Spotify:",
            f"[link={playlist.share_url}]{playlist.share_url}[/link]",
        )
    console.print(
        Panel(
            grid,
            title="[bold]Custom Playlist Created[/bold]",
            border_style="green",
            expand=False,
        )
    )


def print_metrics_panel(metrics: MetricsSnapshot):
    """Displays the playlist insights."""
    console = Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan", justify="right")
    table.add_column(style="white")
    for stat, value in metrics.computed().items():
        table.add_row(f"{STATISTIC_LABELS[stat]}:", format_statistic(stat, value))
    table.add_row("", "")
    table.add_row("Tracks:", f"[dim]{metrics.track_count}[/dim]")

    console.print(
        Panel(
            table,
            title="🎧 [bold]Playlist Insights[/bold]",
            border_style="cyan",
            box=box.DOUBLE,
            expand=False,
            padding=(1, 2),
        )
    )
