"""EMQX management API client.

Typed, synchronous access to the EMQX REST API: users, ACL rules, clients,
sessions, subscriptions and nodes.

Usage:
    from celine.emqx import AuthenticatorId, EmqxClient, User

    with EmqxClient.builder().with_base_url(url).with_basic_auth(key, secret).build() as client:
        client.create_user(AuthenticatorId.DEFAULT, User(username="u", password="p"))
"""

from celine.emqx.auth import AuthHook, basic_auth, bearer_auth
from celine.emqx.builder import EmqxClientBuilder, build_client, client_from_settings
from celine.emqx.client import EmqxClient, EmqxConfigError, EmqxError, EmqxRequestError
from celine.emqx.codec import JsonCodec
from celine.emqx.config import EmqxSettings
from celine.emqx.models import (
    AclAction,
    AclRule,
    AuthenticatorId,
    Client,
    Node,
    Session,
    Subscription,
    User,
)

__all__ = [
    "EmqxClient",
    "EmqxClientBuilder",
    "build_client",
    "client_from_settings",
    "EmqxSettings",
    "JsonCodec",
    "AuthHook",
    "basic_auth",
    "bearer_auth",
    "EmqxError",
    "EmqxConfigError",
    "EmqxRequestError",
    "AclAction",
    "AclRule",
    "AuthenticatorId",
    "Client",
    "Node",
    "Session",
    "Subscription",
    "User",
]
