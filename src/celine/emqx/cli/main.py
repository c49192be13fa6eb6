"""CELINE EMQX CLI - Main entrypoint.

Usage:
    celine-emqx --base-url http://localhost:18083/api/v5 users list
    celine-emqx acl create --username alice --topic 'sensors/#' --action subscribe
"""

from __future__ import annotations

from typing import Annotated, Optional

import typer

from celine.emqx.cli.commands import (
    acl_app,
    clients_app,
    nodes_app,
    sessions_app,
    subscriptions_app,
    users_app,
)
from celine.emqx.config import EmqxSettings
from celine.emqx.logs import configure_logging

app = typer.Typer(
    name="celine-emqx",
    help="EMQX broker management CLI",
    add_completion=True,
)

app.add_typer(users_app, name="users")
app.add_typer(acl_app, name="acl")
app.add_typer(clients_app, name="clients")
app.add_typer(sessions_app, name="sessions")
app.add_typer(subscriptions_app, name="subscriptions")
app.add_typer(nodes_app, name="nodes")


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Annotated[
        Optional[str],
        typer.Option("--base-url", "-u", help="EMQX management API base URL"),
    ] = None,
    api_key: Annotated[
        Optional[str],
        typer.Option("--api-key", help="EMQX API key"),
    ] = None,
    api_secret: Annotated[
        Optional[str],
        typer.Option("--api-secret", help="EMQX API secret"),
    ] = None,
    token: Annotated[
        Optional[str],
        typer.Option("--token", help="Bearer token"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
) -> None:
    """Manage users, ACL rules, clients and sessions of an EMQX broker.

    Options not given on the command line are read from CELINE_EMQX_*
    environment variables.
    """
    settings = EmqxSettings().with_overrides(
        base_url=base_url,
        api_key=api_key,
        api_secret=api_secret,
        token=token,
    )
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings


def create_app() -> None:
    """CLI entrypoint."""
    app()


if __name__ == "__main__":
    create_app()
