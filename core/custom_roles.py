# core/custom_roles.py

"""
Custom role lookup.

The permission matrix only ever needs `role_id -> CustomRoleDef`; callers
inject any callable with that shape. `CustomRoleStore` is the in-process
default (the dashboard persists the same records client-side).
"""

from typing import Callable, Dict, List, Optional
from threading import Lock

from core.logging_config import logger
from models.user import CustomRoleDef


CustomRoleLookup = Callable[[str], Optional[CustomRoleDef]]


class CustomRoleStore:
    """
    In-memory custom role registry.

    Thread-safe for concurrent access. Instances are callable, so a store
    can be passed wherever a CustomRoleLookup is expected.
    """

    def __init__(self, roles: Optional[List[CustomRoleDef]] = None):
        self._roles: Dict[str, CustomRoleDef] = {}
        self._lock = Lock()
        for role in roles or []:
            self._roles[role.id] = role

    def __call__(self, role_id: str) -> Optional[CustomRoleDef]:
        return self.get_role(role_id)

    def get_role(self, role_id: str) -> Optional[CustomRoleDef]:
        with self._lock:
            return self._roles.get(role_id)

    def list_roles(self) -> List[CustomRoleDef]:
        with self._lock:
            return list(self._roles.values())

    def add_role(self, role: CustomRoleDef):
        """
        Register a role. An existing role with the same id is replaced.
        """
        with self._lock:
            if role.id in self._roles:
                logger.info(f"Replacing custom role {role.id}")
            self._roles[role.id] = role

    def update_role(self, role_id: str, **changes) -> Optional[CustomRoleDef]:
        """
        Merge `changes` into an existing role.

        Returns:
            The updated role, or None if no role has that id
        """
        with self._lock:
            current = self._roles.get(role_id)
            if current is None:
                return None
            updated = current.model_copy(update=changes)
            self._roles[role_id] = updated
            return updated

    def remove_role(self, role_id: str):
        with self._lock:
            self._roles.pop(role_id, None)

    def clear(self):
        with self._lock:
            self._roles.clear()


# Global store instance
_store = CustomRoleStore()


def get_custom_role_store() -> CustomRoleStore:
    """Get the process-wide custom role store."""
    return _store
