"""Main Typer CLI application for asana-hooks."""

import logging
import sys
from typing import Annotated, Optional

import typer
from dotenv import load_dotenv
from rich.console import Console

from asana_hooks import __version__
from asana_hooks.api.auth import AuthContext, AuthError
from asana_hooks.api.transport import HttpxTransport
from asana_hooks.config.settings import Settings, get_settings

# Create the Typer app
app = typer.Typer(
    name="asana-hooks",
    help="Resolve Asana pick-list options and manage Asana webhooks.",
    no_args_is_help=True,
)

console = Console()


# Global state for config
class State:
    debug: bool = False
    logger: logging.Logger = logging.getLogger("asana_hooks")


state = State()


def setup_logging(debug: bool) -> logging.Logger:
    """Configure logging based on debug flag."""
    logger = logging.getLogger("asana_hooks")
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        "%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    if debug:
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.WARNING)

    return logger


def load_auth() -> tuple[Settings, AuthContext]:
    """Read settings and build the auth context, exiting on missing credentials."""
    settings = get_settings()
    try:
        auth = AuthContext.from_settings(settings)
    except AuthError as e:
        console.print(f"[red]Error:[/red] {e}. Set ASANA_ACCESS_TOKEN.")
        raise typer.Exit(1)
    return settings, auth


def make_transport(settings: Settings) -> HttpxTransport:
    return HttpxTransport(timeout=settings.timeout, logger=state.logger)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"asana-hooks {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging"),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """asana-hooks - Asana options and webhooks from the command line."""
    # Load .env file
    load_dotenv()

    state.debug = debug or get_settings().debug
    state.logger = setup_logging(state.debug)
    state.logger.debug("Debug mode enabled")


# Import and register subcommands
from asana_hooks.cli.options import options_cmd
from asana_hooks.cli.webhooks import hooks_app, verify_cmd

app.command(name="options")(options_cmd)
app.command(name="verify")(verify_cmd)
app.add_typer(hooks_app, name="hooks")


if __name__ == "__main__":
    app()
