# models/session.py

"""
Session-scoped login state.

Credentials are a fixed in-memory table; there is no real authentication. On a
successful login the authenticated flag and the role are written to session storage,
so a new `SessionGate` over the same storage picks the session back up.

Only admins may add, edit, delete, or mark attendance. Viewers may import, export, and browse.
"""

from __future__ import annotations

import logging
from enum import Enum

import config
from core.response import ErrorCode, Response
from core.storage import KeyValueStorage

logger = logging.getLogger(__name__)


class Role(str, Enum):
    ADMIN = "admin"
    VIEWER = "viewer"


# (username, password, role)
DEFAULT_CREDENTIALS: list[tuple[str, str, Role]] = [
    ("admin", "admin@center", Role.ADMIN),
    ("viewer", "viewer@center", Role.VIEWER),
]

INVALID_CREDENTIALS_MESSAGE = "بيانات الاعتماد غير صحيحة. حاول مرة أخرى."


class SessionGate:
    def __init__(
        self,
        session_storage: KeyValueStorage,
        credentials: list[tuple[str, str, Role]] | None = None,
    ):
        self._storage = session_storage
        self._credentials = list(DEFAULT_CREDENTIALS if credentials is None else credentials)

    # === properties ===

    @property
    def is_authenticated(self) -> bool:
        return self._storage.get(config.SESSION_KEY_AUTHENTICATED) == "true"

    @property
    def role(self) -> Role | None:
        if not self.is_authenticated:
            return None

        try:
            return Role(self._storage.get(config.SESSION_KEY_ROLE))
        except ValueError:
            return None

    @property
    def can_edit(self) -> bool:
        return self.role is Role.ADMIN

    # === session transitions ===

    def login(self, username: str, password: str) -> Response:
        """
        Checks the credentials and opens a session on a match.

        Args:
            username (str): The entered user name.
            password (str): The entered password.

        Returns:
            Response: A structured response with the following contract:
                - success (bool): True if the username and password matched an entry.
                - detail (str | None): On failure, one generic message for every kind of mismatch.
                - error (ErrorCode | str | None): `ErrorCode.INVALID_CREDENTIALS` on failure.
                - status_code (int | None): 200 on success, 401 on failure.
                - data (dict | None): On success, "role" (Role).

        Notes:
            - Unknown user names and wrong passwords are reported identically.
            - There is no lockout or throttling.
        """
        role = next(
            (r for u, p, r in self._credentials if u == username and p == password),
            None,
        )

        if role is None:
            logger.info("Rejected login attempt")

            return Response.fail(
                detail=INVALID_CREDENTIALS_MESSAGE,
                error=ErrorCode.INVALID_CREDENTIALS,
                status_code=401,
            )

        self._storage.set(config.SESSION_KEY_AUTHENTICATED, "true")
        self._storage.set(config.SESSION_KEY_ROLE, role.value)

        logger.info("User %s logged in as %s", username, role.value)

        return Response.succeed(data={"role": role})

    def logout(self) -> None:
        self._storage.remove(config.SESSION_KEY_AUTHENTICATED)
        self._storage.remove(config.SESSION_KEY_ROLE)

    def require_admin(self) -> None:
        """
        Raises:
            PermissionError: If the current session is not an admin session.
        """
        if not self.can_edit:
            raise PermissionError("This action requires an admin session.")
