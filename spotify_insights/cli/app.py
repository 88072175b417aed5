"""
Defines the command-line interface for the application using Typer.
"""

import asyncio
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from spotify_insights import __version__
from spotify_insights.api.auth import RedirectLocation, SessionManager
from spotify_insights.api.client import SpotifyAPIClient
from spotify_insights.core.playlist_composer import PlaylistComposer
from spotify_insights.core.track_fetcher import TrackFetcher
from spotify_insights.exceptions import ConfigurationError, SpotifyInsightsError
from spotify_insights.models.config import (
    DEFAULT_PRESET,
    DEFAULT_REDIRECT_URI,
    PLAYLIST_PRESETS,
    AppConfig,
)
from spotify_insights.models.stats import Statistic
from spotify_insights.storage.config_manager import ConfigManager
from spotify_insights.storage.token_store import TokenStore

from .formatters import (
    print_config,
    print_metrics_panel,
    print_playlist_panel,
    print_tracks_table,
    print_validation_table,
)

console = Console()

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("spotify_insights")

app = typer.Typer(
    name="spotify-insights",
    help=(
        "Turn your Spotify top tracks into a private playlist with listening"
        " insights. Use 'spotify-insights <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def get_config_dir() -> Path:
    if os.name == "nt":
        base_dir = Path(os.getenv("APPDATA", "~\\AppData\\Roaming"))
    else:
        base_dir = Path(os.getenv("XDG_CONFIG_HOME", "~/.config"))
    return base_dir.expanduser() / "spotify-insights"


CONFIG_DIR = get_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.ini"


def _load_config(cli_options: dict | None = None) -> AppConfig:
    try:
        return ConfigManager(CONFIG_FILE).load_config(cli_options)
    except ConfigurationError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1) from e


def _restore_session(config: AppConfig) -> SessionManager:
    """Builds a session manager initialized from the persisted token."""
    session = SessionManager(
        TokenStore(CONFIG_DIR),
        client_id=config.client_id,
        redirect_uri=config.redirect_uri,
    )
    session.initialize()
    return session


def _require_login(session: SessionManager) -> None:
    if not session.is_authenticated:
        console.print(
            "[red]✗ Not logged in.[/red] Run [cyan]spotify-insights login[/cyan] first."
        )
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
    show_config: bool = typer.Option(
        False, "--show-config", help="Display the current configuration."
    ),
):
    """Spotify Insights CLI"""
    if version:
        console.print(
            f"[bold]spotify-insights[/bold] version [cyan]{__version__}[/cyan]"
        )
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("spotify_insights").setLevel(log_level)

    if show_config:
        if not CONFIG_FILE.is_file():
            console.print(
                "[red]✗ Config file not found.[/] Run [cyan]spotify-insights init"
                "[/cyan] first."
            )
            raise typer.Exit(code=1)
        print_config(CONFIG_FILE, _load_config().model_dump(exclude={"config_path"}))
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def init(
    client_id: str = typer.Argument(
        ..., help="Client ID of your app from the Spotify developer dashboard."
    ),
    redirect_uri: str = typer.Option(
        DEFAULT_REDIRECT_URI,
        "--redirect-uri",
        help="Redirect URI registered for the app.",
    ),
    preset: str = typer.Option(
        DEFAULT_PRESET,
        "--preset",
        "-p",
        help=f"Playlist preset: {', '.join(PLAYLIST_PRESETS)}.",
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing configuration."
    ),
):
    """Initialize configuration with your Spotify app settings."""
    if (
        CONFIG_FILE.exists()
        and not force
        and not typer.confirm("Configuration file already exists. Overwrite it?")
    ):
        raise typer.Abort()

    settings = {"client_id": client_id, "redirect_uri": redirect_uri, "preset": preset}
    try:
        AppConfig(**settings, config_path=str(CONFIG_DIR))
        ConfigManager(CONFIG_FILE).save_new_config(settings)
    except (ValueError, ConfigurationError) as e:
        console.print(f"[red]✗ Invalid settings: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"\n[bold green]✓ Configuration saved to '{CONFIG_FILE}'[/bold green]")
    console.print("Next step: [cyan]spotify-insights login[/cyan]")


@app.command()
def login(
    redirect_url: str | None = typer.Option(
        None,
        "--redirect-url",
        help="The URL Spotify redirected you to, if you already authorized.",
    ),
    no_browser: bool = typer.Option(
        False, "--no-browser", help="Print the authorization URL instead of opening it."
    ),
):
    """Authorize this app with your Spotify account."""
    config = _load_config()
    session = _restore_session(config)
    if session.is_authenticated:
        console.print("[green]✓ Already logged in.[/green]")
        return

    if redirect_url is None:
        if not config.client_id:
            console.print(
                "[red]✗ No client ID configured.[/red] Run [cyan]spotify-insights init"
                " <CLIENT_ID>[/cyan] or set [cyan]SPOTIFY_CLIENT_ID[/cyan]."
            )
            raise typer.Exit(code=1)
        url = session.login_url()
        console.print("Open this URL to authorize access:\n")
        console.print(f"[cyan]{url}[/cyan]\n", soft_wrap=True)
        if not no_browser:
            typer.launch(url)
        redirect_url = typer.prompt("Paste the URL you were redirected to")

    session.initialize(RedirectLocation(redirect_url.strip()))
    if not session.is_authenticated:
        console.print(
            "[red]✗ Login failed:[/red] the redirect URL did not contain an access"
            " token."
        )
        raise typer.Exit(code=1)
    console.print("[bold green]✓ Logged in.[/bold green]")


@app.command()
def logout():
    """Forget the stored access token."""
    session = SessionManager(TokenStore(CONFIG_DIR))
    session.initialize()
    session.logout()
    console.print("[green]✓ Logged out.[/green]")


@app.command()
def status():
    """Show whether an access token is stored."""
    session = SessionManager(TokenStore(CONFIG_DIR))
    if session.initialize():
        console.print("[green]✓ Logged in[/green] (token stored).")
    else:
        console.print("[yellow]○ Not logged in.[/yellow]")


@app.command()
def top():
    """Fetch and show your top 50 tracks."""
    config = _load_config()
    session = _restore_session(config)
    _require_login(session)

    async def _top_async():
        async with SpotifyAPIClient(config.request_timeout) as api_client:
            return await TrackFetcher(api_client).fetch_top_tracks(session.state)

    try:
        tracks = asyncio.run(_top_async())
    except SpotifyInsightsError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1) from e
    print_tracks_table(tracks)


@app.command()
def create(
    preset: str | None = typer.Option(
        None,
        "--preset",
        "-p",
        help=f"Playlist preset: {', '.join(PLAYLIST_PRESETS)}.",
    ),
    name: str | None = typer.Option(None, "--name", help="Playlist name."),
    description: str | None = typer.Option(
        None, "--description", help="Playlist description."
    ),
    metrics: list[Statistic] | None = typer.Option(  # noqa: B008
        None,
        "--metric",
        "-m",
        help="Statistic to compute (repeatable). Overrides the preset's metrics.",
    ),
    require_population: bool | None = typer.Option(
        None,
        "--require-population/--no-require-population",
        help="Only compute metrics if all tracks were added to the playlist.",
    ),
):
    """Create a private playlist from your top tracks and show insights."""
    cli_options = {
        key: value
        for key, value in {
            "preset": preset,
            "playlist_name": name,
            "playlist_description": description,
            "metrics": metrics or None,
            "metrics_require_population": require_population,
        }.items()
        if value is not None
    }
    config = _load_config(cli_options)
    session = _restore_session(config)
    _require_login(session)

    async def _create_async():
        async with SpotifyAPIClient(config.request_timeout) as api_client:
            await TrackFetcher(api_client).fetch_top_tracks(session.state)
            if not session.state.tracks:
                console.print("[yellow]⚠️  No top tracks available.[/yellow]")
                return None
            composer = PlaylistComposer(api_client, config.playlist_options())
            return await composer.create_playlist(session.state)

    try:
        playlist = asyncio.run(_create_async())
    except SpotifyInsightsError as e:
        console.print(f"[bold red]Error: {e}[/bold red]")
        raise typer.Exit(code=1) from e

    if playlist is None:
        raise typer.Exit(code=1)

    print_playlist_panel(playlist)
    if session.state.populated:
        console.print(
            f"[bold green]✓ Your playlist '{playlist.name}' has been created!"
            "[/bold green]"
        )
    else:
        console.print(
            f"[yellow]⚠️  Tracks could not be added to '{playlist.name}'.[/yellow]"
        )
    if session.state.metrics:
        print_metrics_panel(session.state.metrics)


@app.command()
def validate():
    """Validate the current configuration."""
    try:
        config = ConfigManager(CONFIG_FILE).load_config()
        print_validation_table(config)
    except SpotifyInsightsError as e:
        console.print(f"[red]✗ Configuration is invalid: {e}[/red]")
        raise typer.Exit(code=1) from e
