"""Data models mirroring EMQX management API payloads.

The records carry no behaviour; they only define the JSON field mapping used
by the codec. Fields left unset are omitted when a record is sent as a body.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AuthenticatorId(str, Enum):
    """Built-in EMQX authenticator IDs.

    The value is the wire string used as a URL path segment, e.g.
    ``/authentication/password_based:built_in_database/users``.
    """

    # Username/password against the EMQX built-in database
    DEFAULT = "password_based:built_in_database"
    PASSWORD_BASED_BUILT_IN_DATABASE = "password_based:built_in_database"

    PASSWORD_BASED_MYSQL = "password_based:mysql"
    PASSWORD_BASED_POSTGRESQL = "password_based:postgresql"
    PASSWORD_BASED_MONGODB = "password_based:mongodb"
    PASSWORD_BASED_REDIS = "password_based:redis"
    PASSWORD_BASED_LDAP = "password_based:ldap"
    PASSWORD_BASED_HTTP = "password_based:http"

    JWT = "jwt"

    SCRAM_BUILT_IN_DATABASE = "scram:built_in_database"
    SCRAM_HTTP = "scram:http"

    # Kerberos
    GSSAPI = "gssapi"

    CLIENT_INFO = "client_info"

    def __str__(self) -> str:
        return self.value


class AclAction(str, Enum):
    """Actions an ACL rule applies to."""

    PUBLISH = "publish"
    SUBSCRIBE = "subscribe"


class User(BaseModel):
    """User of an authenticator chain."""

    username: str | None = None
    password: str | None = None
    type: str | None = Field(
        default=None, description="Backend name, e.g. 'built_in_database'"
    )


class AclRule(BaseModel):
    """ACL rule.

    ``id`` is left out of the request body when unset (it is not sent as 0),
    so the broker assigns one.
    """

    id: int | None = None
    username: str | None = None
    topic: str | None = None
    action: AclAction | None = None
    allow: bool = False


class Client(BaseModel):
    """Connected MQTT client.

    The broker decides the shape; every field it returns is kept as-is and
    can be read as an attribute or through ``model_dump()``.
    """

    model_config = ConfigDict(extra="allow")


class Session(BaseModel):
    """MQTT session of a client."""

    existing: bool = Field(
        default=False, description="True if an existing session was resumed"
    )
    expiry: int = Field(default=0, description="Session expiry interval in seconds")


class Subscription(BaseModel):
    """Topic subscription held by a client."""

    clientid: str | None = None
    topic: str | None = None
    qos: int = 0


class Node(BaseModel):
    """Cluster node, passed through as returned by the broker."""

    model_config = ConfigDict(extra="allow")
