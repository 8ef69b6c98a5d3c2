"""Options command."""

import asyncio
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from asana_hooks.api.client import ResourceClient
from asana_hooks.api.transport import APIError
from asana_hooks.options.resolver import OptionResolver, UnknownOptionKind

console = Console()


def options_cmd(
    kind: Annotated[
        str,
        typer.Argument(help="Option kind, e.g. workspaces, projects, sections"),
    ],
    workspace: Annotated[
        Optional[str],
        typer.Option("--workspace", help="Workspace GID"),
    ] = None,
    project: Annotated[
        Optional[str],
        typer.Option("--project", help="Project GID"),
    ] = None,
    organization: Annotated[
        Optional[str],
        typer.Option("--organization", help="Organization GID"),
    ] = None,
    team: Annotated[
        Optional[str],
        typer.Option("--team", help="Team GID"),
    ] = None,
) -> None:
    """List the selectable options of KIND."""
    from asana_hooks.cli.main import load_auth, make_transport, state

    settings, auth = load_auth()
    client = ResourceClient(
        auth,
        transport=make_transport(settings),
        base_url=settings.base_url,
        logger=state.logger,
    )
    resolver = OptionResolver(client, logger=state.logger)

    given = {
        "workspace": workspace,
        "project": project,
        "organization": organization,
        "team": team,
    }

    try:
        wanted = resolver.parents_of(kind)
    except UnknownOptionKind:
        console.print(
            f"[red]Error:[/red] Unknown kind '{kind}'. "
            f"Choose one of: {', '.join(resolver.kinds())}"
        )
        raise typer.Exit(1)

    ignored = [name for name, value in given.items() if value and name not in wanted]
    if ignored:
        state.logger.warning(f"Ignoring options not used by {kind}: {', '.join(ignored)}")

    parents = {name: given[name] for name in wanted}

    try:
        options = asyncio.run(resolver.resolve(kind, **parents))
    except APIError as e:
        console.print(f"[red]Error:[/red] API request failed: {e}")
        raise typer.Exit(1)

    table = Table(title=f"{kind} ({len(options)})")
    table.add_column("Label")
    table.add_column("Value", style="cyan")
    for option in options:
        table.add_row(option.label, option.value)

    console.print(table)
