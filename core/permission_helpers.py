from fastapi import Depends, HTTPException
from typing import Dict, Optional

from dependencies.auth import get_current_user, CurrentUser
from core.custom_roles import CustomRoleLookup, get_custom_role_store
from core.logging_config import logger
from core.permissions import ALL, PERMISSIONS
from core.roles import RoleGroups, coerce_role
from models.enums import Role


# -----------------------------------------------------
# Permission evaluation
#   • built-in matrix first
#   • then the custom role's "feature.action" grants
# -----------------------------------------------------
def has_permission(
    role,
    feature: str,
    action: str = "access",
    custom_roles: Optional[CustomRoleLookup] = None,
) -> bool:
    if not role:
        return False

    built_in = coerce_role(role)

    # Super admin = master key
    if built_in == Role.SUPER_ADMIN:
        return True

    feature_perms = PERMISSIONS.get(feature)
    if feature_perms and built_in is not None:
        granted = feature_perms.get(action)
        if granted == ALL:
            return True
        if granted and built_in in granted:
            return True

    if custom_roles is None:
        return False

    try:
        custom = custom_roles(str(role))
    except Exception as e:
        logger.warning(f"Failed to check custom role permissions for {role}: {e}")
        return False

    if custom is None:
        return False
    return f"{feature}.{action}" in custom.permissions


def get_permissions_for_feature(role, feature: str) -> Dict[str, bool]:
    """
    Every action defined for `feature`, mapped to whether `role` holds it.
    Unknown roles and features yield an empty dict.
    """
    built_in = coerce_role(role)
    feature_perms = PERMISSIONS.get(feature)
    if built_in is None or not feature_perms:
        return {}

    if built_in == Role.SUPER_ADMIN:
        return {action: True for action in feature_perms}

    return {
        action: granted == ALL or built_in in granted
        for action, granted in feature_perms.items()
    }


# -----------------------------------------------------
# FastAPI dependency wrapper
# -----------------------------------------------------
def requires_permission(feature: str, action: str = "access"):
    """
    Usage:
        @router.post("/", dependencies=[Depends(requires_permission("stations", "create"))])
    """

    def dependency(current_user: CurrentUser = Depends(get_current_user)):
        if not has_permission(current_user.role, feature, action, get_custom_role_store()):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{feature}.{action}' required"
            )
        return current_user

    return dependency


# ============================================================
# ROLE GROUP HELPERS
# ============================================================

def is_platform_admin(user: CurrentUser) -> bool:
    """SUPER_ADMIN or EVZONE_ADMIN."""
    return coerce_role(user.role) in RoleGroups.PLATFORM_ADMINS


def is_platform_ops(user: CurrentUser) -> bool:
    """Platform admins plus EVZONE_OPERATOR (global station visibility)."""
    return coerce_role(user.role) in RoleGroups.PLATFORM_OPS


def require_platform_admin(user: CurrentUser):
    """Raise exception if user is not a platform admin."""
    if not is_platform_admin(user):
        raise HTTPException(
            status_code=403,
            detail="Platform admin role required"
        )
