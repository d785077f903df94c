import sys
from typing import Optional

import typer
from rich.console import Console

from .browser import open_url
from .client import ApiClient
from .config import START_SCREENS, SettingsStore, get_api_url, setup_logging
from .reader import ContentExtractor
from .themes import THEMES, theme_names

app = typer.Typer()
console = Console()


def build_controller(store: SettingsStore, theme: Optional[str] = None):
    from .tui.controller import NavigationController, Services
    from .tui.worker import BackgroundRunner

    token = store.get_token()
    client = ApiClient(get_api_url(), token) if token else None
    services = Services(
        client=client,
        extractor=ContentExtractor(),
        open_url=open_url,
        settings=store,
    )
    return NavigationController(services, BackgroundRunner(), theme_name=theme)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Write a debug log file."),
    theme: Optional[str] = typer.Option(None, "--theme", help="Theme for this run only."),
):
    """
    CuraQ - read your article feed in the terminal.
    Run without commands to start the interactive TUI.
    """
    log_path = setup_logging(debug)
    if log_path:
        print(f"Debug logging enabled: {log_path}", file=sys.stderr)

    if ctx.invoked_subcommand is not None:
        return

    if theme is not None and theme not in THEMES:
        console.print(f"[bold red]Unknown theme '{theme}'.[/bold red] Available: {', '.join(theme_names())}")
        raise typer.Exit(code=1)

    from .tui.app import AppState

    AppState(build_controller(SettingsStore(), theme)).run()


@app.command()
def login(token: str = typer.Argument(..., help="API token from your CuraQ account.")):
    """Stores the API token."""
    SettingsStore().set_token(token)
    console.print("[green]Token saved.[/green]")


@app.command()
def logout():
    """Removes the stored API token."""
    SettingsStore().clear_token()
    console.print("[green]Token removed.[/green]")


@app.command()
def theme(name: Optional[str] = typer.Argument(None, help="Theme to make the default.")):
    """Lists themes, or sets the default theme."""
    store = SettingsStore()
    if name is None:
        current = store.load().theme
        for theme_name in theme_names():
            marker = "*" if theme_name == current else " "
            console.print(f"{marker} [{THEMES[theme_name].primary}]{theme_name}[/]")
        return

    if name not in THEMES:
        console.print(f"[bold red]Unknown theme '{name}'.[/bold red] Available: {', '.join(theme_names())}")
        raise typer.Exit(code=1)
    store.set_theme(name)
    console.print(f"Theme set to [bold]{name}[/bold].")


@app.command(name="start-screen")
def start_screen(screen: Optional[str] = typer.Argument(None, help="'unread' or 'read'.")):
    """Shows or sets which articles the session lists."""
    store = SettingsStore()
    if screen is None:
        console.print(store.load().start_screen)
        return

    if screen not in START_SCREENS:
        console.print(f"[bold red]Unknown start screen '{screen}'.[/bold red] Use: {', '.join(START_SCREENS)}")
        raise typer.Exit(code=1)
    store.set_start_screen(screen)
    console.print(f"Start screen set to [bold]{screen}[/bold].")


if __name__ == "__main__":
    app()
