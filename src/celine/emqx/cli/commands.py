"""EMQX CLI commands.

Commands:
    celine-emqx users list|get|create|delete
    celine-emqx acl list|get|create|delete
    celine-emqx clients list|kick
    celine-emqx sessions get|delete
    celine-emqx subscriptions list
    celine-emqx nodes list
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Annotated, Any, Iterator, Optional

import typer
from pydantic import BaseModel, ValidationError

from celine.emqx.builder import client_from_settings
from celine.emqx.client import EmqxClient, EmqxConfigError, EmqxError
from celine.emqx.config import EmqxSettings
from celine.emqx.models import AclAction, AclRule, AuthenticatorId, User

users_app = typer.Typer(help="Authenticator users", add_completion=False)
acl_app = typer.Typer(help="ACL rules", add_completion=False)
clients_app = typer.Typer(help="Connected clients", add_completion=False)
sessions_app = typer.Typer(help="Client sessions", add_completion=False)
subscriptions_app = typer.Typer(help="Client subscriptions", add_completion=False)
nodes_app = typer.Typer(help="Cluster nodes", add_completion=False)

AuthenticatorOption = Annotated[
    AuthenticatorId,
    typer.Option("--authenticator", "-a", help="Authenticator ID"),
]


@contextmanager
def _emqx(ctx: typer.Context) -> Iterator[EmqxClient]:
    """Open a client from the CLI settings and report EMQX errors."""
    settings: EmqxSettings = ctx.obj or EmqxSettings()
    try:
        client = client_from_settings(settings)
    except EmqxConfigError as e:
        typer.secho(
            f"Configuration error: {e} (use --base-url or CELINE_EMQX_BASE_URL)",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(1)

    try:
        with client:
            yield client
    except EmqxError as e:
        typer.secho(f"EMQX error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    except ValidationError as e:
        typer.secho(f"Unexpected response: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


def _dump(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, list):
        return [_dump(v) for v in value]
    return value


def _echo(value: Any) -> None:
    typer.echo(json.dumps(_dump(value), indent=2))


# -----------------------------------------------------------------------------
# Users
# -----------------------------------------------------------------------------


@users_app.command("list")
def list_users(
    ctx: typer.Context,
    authenticator: AuthenticatorOption = AuthenticatorId.DEFAULT,
) -> None:
    """List users of an authenticator."""
    with _emqx(ctx) as client:
        _echo(client.list_users(authenticator))


@users_app.command("get")
def get_user(
    ctx: typer.Context,
    username: Annotated[str, typer.Argument(help="Username")],
    authenticator: AuthenticatorOption = AuthenticatorId.DEFAULT,
) -> None:
    """Show a user."""
    with _emqx(ctx) as client:
        _echo(client.get_user(authenticator, username))


@users_app.command("create")
def create_user(
    ctx: typer.Context,
    username: Annotated[str, typer.Argument(help="Username")],
    password: Annotated[
        str,
        typer.Option(prompt=True, hide_input=True, help="Password"),
    ],
    user_type: Annotated[
        Optional[str],
        typer.Option("--type", help="Backend type, e.g. built_in_database"),
    ] = None,
    authenticator: AuthenticatorOption = AuthenticatorId.DEFAULT,
) -> None:
    """Create a user."""
    user = User(username=username, password=password, type=user_type)
    with _emqx(ctx) as client:
        _echo(client.create_user(authenticator, user))


@users_app.command("delete")
def delete_user(
    ctx: typer.Context,
    username: Annotated[str, typer.Argument(help="Username")],
    authenticator: AuthenticatorOption = AuthenticatorId.DEFAULT,
) -> None:
    """Delete a user."""
    with _emqx(ctx) as client:
        client.delete_user(authenticator, username)
    typer.secho(f"Deleted user: {username}", fg=typer.colors.GREEN)


# -----------------------------------------------------------------------------
# ACL
# -----------------------------------------------------------------------------


@acl_app.command("list")
def list_acls(ctx: typer.Context) -> None:
    """List ACL rules."""
    with _emqx(ctx) as client:
        _echo(client.list_acls())


@acl_app.command("get")
def get_acl(
    ctx: typer.Context,
    acl_id: Annotated[int, typer.Argument(help="ACL rule ID")],
) -> None:
    """Show an ACL rule."""
    with _emqx(ctx) as client:
        _echo(client.get_acl(acl_id))


@acl_app.command("create")
def create_acl(
    ctx: typer.Context,
    username: Annotated[str, typer.Option("--username", help="Username")],
    topic: Annotated[str, typer.Option("--topic", help="Topic filter")],
    action: Annotated[AclAction, typer.Option("--action", help="Action")],
    allow: Annotated[
        bool,
        typer.Option("--allow/--deny", help="Allow or deny the action"),
    ] = True,
    acl_id: Annotated[
        Optional[int],
        typer.Option("--id", help="Rule ID (assigned by the broker if omitted)"),
    ] = None,
) -> None:
    """Create an ACL rule."""
    rule = AclRule(id=acl_id, username=username, topic=topic, action=action, allow=allow)
    with _emqx(ctx) as client:
        _echo(client.create_acl(rule))


@acl_app.command("delete")
def delete_acl(
    ctx: typer.Context,
    acl_id: Annotated[int, typer.Argument(help="ACL rule ID")],
) -> None:
    """Delete an ACL rule."""
    with _emqx(ctx) as client:
        client.delete_acl(acl_id)
    typer.secho(f"Deleted ACL rule: {acl_id}", fg=typer.colors.GREEN)


# -----------------------------------------------------------------------------
# Clients, sessions, subscriptions, nodes
# -----------------------------------------------------------------------------


@clients_app.command("list")
def list_clients(ctx: typer.Context) -> None:
    """List connected clients."""
    with _emqx(ctx) as client:
        _echo(client.list_clients())


@clients_app.command("kick")
def kick_client(
    ctx: typer.Context,
    client_id: Annotated[str, typer.Argument(help="MQTT client ID")],
) -> None:
    """Disconnect a client."""
    with _emqx(ctx) as client:
        client.disconnect_client(client_id)
    typer.secho(f"Disconnected client: {client_id}", fg=typer.colors.GREEN)


@sessions_app.command("get")
def get_session(
    ctx: typer.Context,
    client_id: Annotated[str, typer.Argument(help="MQTT client ID")],
) -> None:
    """Show the session of a client."""
    with _emqx(ctx) as client:
        _echo(client.get_session(client_id))


@sessions_app.command("delete")
def delete_session(
    ctx: typer.Context,
    client_id: Annotated[str, typer.Argument(help="MQTT client ID")],
) -> None:
    """Delete the session of a client."""
    with _emqx(ctx) as client:
        client.delete_session(client_id)
    typer.secho(f"Deleted session: {client_id}", fg=typer.colors.GREEN)


@subscriptions_app.command("list")
def list_subscriptions(
    ctx: typer.Context,
    client_id: Annotated[str, typer.Argument(help="MQTT client ID")],
) -> None:
    """List the subscriptions of a client."""
    with _emqx(ctx) as client:
        _echo(client.list_subscriptions(client_id))


@nodes_app.command("list")
def list_nodes(ctx: typer.Context) -> None:
    """List cluster nodes."""
    with _emqx(ctx) as client:
        _echo(client.list_nodes())
