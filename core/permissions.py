# ============================================
# CENTRALIZED FEATURE → ACTION → ROLES MAP
# ============================================
from typing import Dict, FrozenSet, Union

from models.enums import Role
from core.roles import RoleGroups


ALL = "ALL"

Permission = Union[FrozenSet[Role], str]

_OPS = RoleGroups.PLATFORM_OPS
_ADMINS = RoleGroups.PLATFORM_ADMINS
_TECHS = RoleGroups.TECHNICIANS


def roles(*members) -> FrozenSet[Role]:
    """Flatten roles and role groups into one frozenset."""
    out = set()
    for member in members:
        if isinstance(member, Role):
            out.add(member)
        else:
            out.update(member)
    return frozenset(out)


PERMISSIONS: Dict[str, Dict[str, Permission]] = {

    # =====================================================
    # CORE FEATURES (multiple roles use these)
    # =====================================================
    "dashboard": {
        "access": ALL,
    },

    "stations": {
        "access": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN, Role.MANAGER),
        "viewAll": _OPS,
        "create": _OPS,
        "edit": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN),
        "delete": _ADMINS,
        "remoteCommands": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN),
    },

    "sessions": {
        "access": roles(_OPS, RoleGroups.STATION_STAFF),
        "viewAll": _OPS,
        "export": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR),
        "refund": _OPS,
        "stopSession": roles(_OPS, Role.STATION_OWNER, Role.STATION_ADMIN, Role.ATTENDANT, Role.CASHIER),
    },

    "incidents": {
        "access": roles(_OPS, RoleGroups.STATION_MANAGERS, _TECHS),
        "viewAll": _OPS,
        "create": roles(_OPS, RoleGroups.STATION_STAFF),
        "assign": _OPS,
        "resolve": roles(_OPS, Role.MANAGER, _TECHS),
        "escalate": _OPS,
    },

    "dispatches": {
        "access": roles(_OPS, Role.MANAGER, _TECHS),
        "viewAll": _OPS,
        "create": _OPS,
        "assign": _OPS,
        "accept": _TECHS,
        "complete": _TECHS,
    },

    "billing": {
        "access": roles(RoleGroups.FINANCIAL_VIEWERS, Role.STATION_OPERATOR),
        "viewAll": _OPS,
        "export": _ADMINS,
        "refund": _OPS,
        "adjustments": _ADMINS,
    },

    "reports": {
        "access": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR, Role.SITE_OWNER),
        "viewAll": _OPS,
        "export": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR, Role.SITE_OWNER),
        "schedule": _OPS,
    },

    "team": {
        "access": roles(Role.STATION_ADMIN, Role.STATION_OPERATOR, Role.STATION_OWNER),
        "viewAll": roles(Role.STATION_ADMIN, Role.STATION_OPERATOR, Role.STATION_OWNER),
        "invite": roles(Role.STATION_ADMIN, Role.STATION_OPERATOR, Role.STATION_OWNER),
        "remove": roles(Role.STATION_ADMIN, Role.STATION_OPERATOR, Role.STATION_OWNER),
        "changeRole": roles(Role.STATION_ADMIN, Role.STATION_OPERATOR, Role.STATION_OWNER),
    },

    "notifications": {
        "access": ALL,
        "viewAll": _OPS,
        "broadcast": _OPS,
        "configure": _OPS,
    },

    # =====================================================
    # ADMIN-HEAVY FEATURES
    # =====================================================
    "users": {
        "access": _ADMINS,
        "viewAll": _ADMINS,
        "create": _ADMINS,
        "edit": _ADMINS,
        "delete": _ADMINS,
        "impersonate": _ADMINS,
        "suspend": _ADMINS,
    },

    "approvals": {
        "access": _OPS,
        "viewAll": _OPS,
        "approve": _OPS,
        "reject": _OPS,
    },

    "auditLogs": {
        "access": _ADMINS,
        "viewAll": _ADMINS,
        "export": _ADMINS,
    },

    "organizations": {
        "access": _ADMINS,
        "viewAll": _ADMINS,
        "create": _ADMINS,
        "edit": _ADMINS,
        "delete": _ADMINS,
    },

    "disputes": {
        "access": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR),
        "viewAll": _OPS,
        "resolve": _OPS,
        "escalate": _ADMINS,
    },

    "rolesMatrix": {
        "access": _ADMINS,
        "edit": _ADMINS,
        "export": _ADMINS,
    },

    # =====================================================
    # OWNER-SPECIFIC FEATURES
    # =====================================================
    "tariffs": {
        "access": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN),
        "edit": roles(Role.STATION_OWNER, Role.STATION_OPERATOR),
    },

    "chargePoints": {
        "access": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN, Role.MANAGER),
        "create": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN),
        "edit": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN),
        "remoteCommands": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN),
    },

    "swapStations": {
        "access": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR),
        "viewAll": _OPS,
        "create": roles(_OPS, Role.STATION_OWNER),
        "edit": roles(_OPS, Role.STATION_OWNER, Role.STATION_OPERATOR),
    },

    "smartCharging": {
        "access": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN),
        "configure": roles(Role.STATION_OWNER, Role.STATION_OPERATOR),
    },

    "earnings": {
        "access": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.SITE_OWNER),
        "export": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.SITE_OWNER),
    },

    "bookings": {
        "access": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN, Role.MANAGER, Role.ATTENDANT),
        "create": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN, Role.MANAGER, Role.ATTENDANT),
        "cancel": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN, Role.MANAGER),
    },

    "addCharger": {
        "access": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN),
        "create": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN),
    },

    "customRoles": {
        "access": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, _ADMINS),
        "create": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, _ADMINS),
        "edit": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, _ADMINS),
        "delete": _ADMINS,
    },

    # =====================================================
    # SITE OWNER FEATURES
    # =====================================================
    "sites": {
        "access": roles(Role.SITE_OWNER, Role.STATION_OWNER, _OPS),
        "viewAll": roles(Role.SITE_OWNER, Role.STATION_OWNER, _OPS),
        "create": roles(Role.SITE_OWNER, Role.STATION_OWNER, _OPS),
        "edit": roles(Role.SITE_OWNER, Role.STATION_OWNER, _OPS),
    },

    "parking": {
        "access": roles(Role.SITE_OWNER, _OPS),
        "view": roles(Role.SITE_OWNER, _OPS),
        "edit": roles(Role.SITE_OWNER, _OPS),
    },

    "tenants": {
        "access": roles(Role.SITE_OWNER, _OPS),
        "view": roles(Role.SITE_OWNER, _OPS),
        "edit": roles(Role.SITE_OWNER, _OPS),
    },

    # =====================================================
    # TECHNICIAN FEATURES
    # =====================================================
    "jobs": {
        "access": _TECHS,
        "accept": _TECHS,
        "complete": _TECHS,
        "viewAvailable": roles(Role.TECHNICIAN_PUBLIC),
    },

    "techRequests": {
        "access": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN, _TECHS),
        "view": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN, _TECHS),
        "create": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN),
        "assign": roles(Role.STATION_OWNER, Role.STATION_OPERATOR, Role.STATION_ADMIN),
        "accept": _TECHS,
    },

    # =====================================================
    # SHARED
    # =====================================================
    "wallet": {
        "access": RoleGroups.ALL_AUTHENTICATED,
        "view": RoleGroups.ALL_AUTHENTICATED,
        "withdraw": roles(
            Role.STATION_OWNER, Role.STATION_OPERATOR, Role.SITE_OWNER,
            Role.TECHNICIAN_ORG, Role.TECHNICIAN_PUBLIC,
        ),
    },

    "settings": {
        "access": ALL,
        "edit": ALL,
    },

    "onboarding": {
        "access": ALL,
    },
}
