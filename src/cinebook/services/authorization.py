"""Role lookup for access control on booking and screening operations."""

import enum
import logging
from collections.abc import Mapping

from cinebook.config import settings

logger = logging.getLogger(__name__)


class Role(enum.IntEnum):
    """User roles, ordered so that a higher role includes the lower ones."""

    BASIC = 1
    STAFF = 2
    ADMIN = 3

    @classmethod
    def parse(cls, value: str) -> "Role":
        return cls[value.strip().upper()]


class RoleDirectory:
    """
    Resolves user ids to roles.

    Role assignments come from configuration; any identified user without
    an explicit assignment is a basic user.
    """

    def __init__(self, assignments: Mapping[str, str | Role] | None = None) -> None:
        source = settings.user_roles if assignments is None else assignments
        self._roles: dict[str, Role] = {}
        for user_id, role in source.items():
            try:
                self._roles[user_id] = role if isinstance(role, Role) else Role.parse(role)
            except KeyError:
                logger.warning(f"Ignoring unknown role {role!r} for user {user_id}")

    def get_role(self, user_id: str | None) -> Role | None:
        if not user_id:
            return None
        return self._roles.get(user_id, Role.BASIC)

    def has_permission(self, user_id: str | None, required_role: Role) -> bool:
        role = self.get_role(user_id)
        if role is None:
            return False
        return role >= required_role
