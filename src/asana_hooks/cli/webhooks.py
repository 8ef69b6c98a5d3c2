"""Webhook commands."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from asana_hooks.webhooks.manager import WebhookManager
from asana_hooks.webhooks.models import HOOK_SECRET_HEADER
from asana_hooks.webhooks.verifier import WebhookVerifier

console = Console()

hooks_app = typer.Typer(help="Create and delete webhooks.", no_args_is_help=True)


def _manager() -> WebhookManager:
    from asana_hooks.cli.main import load_auth, make_transport, state

    settings, auth = load_auth()
    return WebhookManager(
        auth,
        transport=make_transport(settings),
        handshake_timeout=settings.handshake_timeout,
        base_url=settings.base_url,
        logger=state.logger,
    )


@hooks_app.command("create")
def create_cmd(
    resource: Annotated[
        str,
        typer.Option("--resource", help="GID of the resource to watch"),
    ],
    target: Annotated[
        str,
        typer.Option("--target", help="URL that receives the handshake and events"),
    ],
) -> None:
    """Create a webhook. The target must answer the handshake itself."""
    result = asyncio.run(_manager().create_hook(resource, target))

    if not result.success:
        console.print(f"[red]Error:[/red] {result.error_message}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Webhook {result.hook_id} created for {resource}")


@hooks_app.command("delete")
def delete_cmd(
    hook_id: Annotated[str, typer.Argument(help="Webhook GID")],
) -> None:
    """Delete a webhook."""
    result = asyncio.run(_manager().delete_hook(hook_id))

    if not result.success:
        console.print(f"[red]Error:[/red] {result.error_message}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Webhook {hook_id} deleted")


def verify_cmd(
    body_file: Annotated[
        Path,
        typer.Argument(help="File holding the delivery body exactly as received"),
    ],
    signature: Annotated[
        str,
        typer.Option("--signature", help=f"Value of the {HOOK_SECRET_HEADER} header"),
    ],
) -> None:
    """Check a webhook delivery's signature."""
    from asana_hooks.cli.main import load_auth, state

    _, auth = load_auth()

    if not body_file.exists():
        console.print(f"[red]Error:[/red] {body_file} not found")
        raise typer.Exit(1)

    verifier = WebhookVerifier(auth, logger=state.logger)
    if not verifier.verify(body_file.read_bytes(), {HOOK_SECRET_HEADER: signature}):
        console.print("[red]✗[/red] Signature does not match")
        raise typer.Exit(1)

    console.print("[green]✓[/green] Signature verified")
