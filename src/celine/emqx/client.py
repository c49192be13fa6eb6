"""EMQX management API client.

Wraps the EMQX REST API for managing:
- Users of an authenticator chain
- ACL rules
- Connected clients
- Sessions
- Subscriptions
- Cluster nodes

Every method performs exactly one synchronous HTTP request.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import httpx

from celine.emqx.codec import JsonCodec
from celine.emqx.models import (
    AclRule,
    AuthenticatorId,
    Client,
    Node,
    Session,
    Subscription,
    User,
)

if TYPE_CHECKING:
    from celine.emqx.builder import EmqxClientBuilder

logger = logging.getLogger(__name__)


class EmqxError(Exception):
    """Base exception for EMQX client errors."""

    pass


class EmqxConfigError(EmqxError, ValueError):
    """Client configuration is missing or invalid."""

    pass


class EmqxRequestError(EmqxError):
    """A request failed, either in transport or with a non-2xx status."""

    pass


class EmqxClient:
    """Sync client for the EMQX management REST API.

    Use :func:`celine.emqx.builder.build_client` or :meth:`builder` to create
    one. The client owns its ``httpx.Client``; close it with :meth:`close` or
    use the client as a context manager.
    """

    def __init__(
        self,
        base_url: str,
        http_client: httpx.Client,
        codec: JsonCodec | None = None,
    ):
        self._base_url = base_url
        self._http = http_client
        self._codec = codec or JsonCodec()

    @staticmethod
    def builder() -> "EmqxClientBuilder":
        """Create a new builder."""
        from celine.emqx.builder import EmqxClientBuilder

        return EmqxClientBuilder()

    def __enter__(self) -> "EmqxClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._http.close()

    @property
    def base_url(self) -> str:
        """Get the base URL."""
        return self._base_url

    @property
    def codec(self) -> JsonCodec:
        """Get the JSON codec."""
        return self._codec

    # -------------------------------------------------------------------------
    # HTTP helpers
    # -------------------------------------------------------------------------

    def _send(
        self,
        method: str,
        path: str,
        action: str,
        body: Any = None,
    ) -> httpx.Response:
        """Send one request and fail on transport errors or non-2xx status."""
        url = f"{self._base_url}{path}"
        content = None
        headers = None
        if body is not None:
            content = self._codec.encode(body)
            headers = {"Content-Type": "application/json"}

        logger.debug("%s %s", method, url)

        try:
            response = self._http.request(method, url, content=content, headers=headers)
        except httpx.HTTPError as e:
            logger.warning("Error %s: %s", action, e)
            raise EmqxRequestError(f"Error {action}: {e}") from e

        if not response.is_success:
            message = (
                f"Error {action}: {response.status_code} {response.reason_phrase} "
                f"({method} {url})"
            )
            logger.warning(message)
            raise EmqxRequestError(message)

        return response

    def _get(self, path: str, type_: Any, action: str) -> Any:
        """Make GET request and decode the body into ``type_``."""
        response = self._send("GET", path, action)
        return self._codec.decode(response.content, type_)

    def _post(self, path: str, body: Any, type_: Any, action: str) -> Any:
        """Make POST request with a JSON body and decode the response."""
        response = self._send("POST", path, action, body=body)
        return self._codec.decode(response.content, type_)

    def _delete(self, path: str, action: str) -> None:
        """Make DELETE request."""
        self._send("DELETE", path, action)

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def create_user(self, authenticator_id: AuthenticatorId | str, user: User) -> User:
        """Create a user in the given authenticator chain."""
        created = self._post(
            f"/authentication/{authenticator_id!s}/users",
            user,
            User,
            "creating user",
        )
        logger.info("Created user: %s (%s)", user.username, authenticator_id)
        return created

    def get_user(self, authenticator_id: AuthenticatorId | str, username: str) -> User:
        """Get a user by username."""
        return self._get(
            f"/authentication/{authenticator_id!s}/users/{username}",
            User,
            "fetching user",
        )

    def list_users(self, authenticator_id: AuthenticatorId | str) -> list[User]:
        """List all users of the given authenticator chain."""
        return self._get(
            f"/authentication/{authenticator_id!s}/users",
            list[User],
            "listing users",
        )

    def delete_user(self, authenticator_id: AuthenticatorId | str, username: str) -> None:
        """Delete a user by username."""
        self._delete(
            f"/authentication/{authenticator_id!s}/users/{username}",
            "deleting user",
        )
        logger.info("Deleted user: %s (%s)", username, authenticator_id)

    # -------------------------------------------------------------------------
    # ACL
    # -------------------------------------------------------------------------

    def create_acl(self, acl: AclRule) -> AclRule:
        """Create an ACL rule."""
        created = self._post("/acl", acl, AclRule, "creating ACL")
        logger.info("Created ACL rule: id=%s topic=%s", created.id, created.topic)
        return created

    def get_acl(self, acl_id: int) -> AclRule:
        """Get an ACL rule by ID."""
        return self._get(f"/acl/{acl_id}", AclRule, "fetching ACL")

    def list_acls(self) -> list[AclRule]:
        """List all ACL rules."""
        return self._get("/acl", list[AclRule], "listing ACLs")

    def delete_acl(self, acl_id: int) -> None:
        """Delete an ACL rule by ID."""
        self._delete(f"/acl/{acl_id}", "deleting ACL")
        logger.info("Deleted ACL rule: %s", acl_id)

    # -------------------------------------------------------------------------
    # Clients
    # -------------------------------------------------------------------------

    def list_clients(self) -> list[Client]:
        """List connected clients."""
        return self._get("/clients", list[Client], "listing clients")

    def disconnect_client(self, client_id: str) -> None:
        """Kick a client off the broker."""
        self._delete(f"/clients/{client_id}", "disconnecting client")
        logger.info("Disconnected client: %s", client_id)

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------

    def get_session(self, client_id: str) -> Session:
        """Get the session of a client."""
        return self._get(f"/sessions/{client_id}", Session, "fetching session")

    def delete_session(self, client_id: str) -> None:
        """Delete the session of a client."""
        self._delete(f"/sessions/{client_id}", "deleting session")
        logger.info("Deleted session: %s", client_id)

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def list_subscriptions(self, client_id: str) -> list[Subscription]:
        """List the subscriptions of a client."""
        return self._get(
            f"/subscriptions/{client_id}",
            list[Subscription],
            "listing subscriptions",
        )

    # -------------------------------------------------------------------------
    # Nodes
    # -------------------------------------------------------------------------

    def list_nodes(self) -> list[Node]:
        """List cluster nodes."""
        return self._get("/nodes", list[Node], "listing nodes")
