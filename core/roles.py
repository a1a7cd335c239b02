# ============================================
# ROLE CATALOGUE, GROUPS AND STATION SCOPING
# ============================================
from typing import Callable, Dict, FrozenSet, Optional

from models.enums import BaseStrEnum, Role
from models.user import CustomRoleDef


def coerce_role(value) -> Optional[Role]:
    """Built-in role for a raw string, or None (custom or unknown ids)."""
    return Role.coerce(value)


# =====================================================
# DISPLAY LABELS
# =====================================================
ROLE_LABELS: Dict[Role, str] = {
    Role.SUPER_ADMIN: "Super Admin",
    Role.EVZONE_ADMIN: "EVzone Admin",
    Role.EVZONE_OPERATOR: "EVzone Ops",
    Role.STATION_OPERATOR: "Station Operator",
    Role.SITE_OWNER: "Site Owner",
    Role.STATION_ADMIN: "Station Admin",
    Role.MANAGER: "Manager",
    Role.ATTENDANT: "Attendant",
    Role.CASHIER: "Cashier",
    Role.TECHNICIAN_ORG: "Technician (Org)",
    Role.TECHNICIAN_PUBLIC: "Technician (Public)",
    Role.STATION_OWNER: "Station Owner",
}

def role_label(
    role,
    custom_roles: Optional[Callable[[str], Optional[CustomRoleDef]]] = None,
) -> str:
    """
    Built-in label first, then the custom role's name, then the raw id.
    """
    if role is None:
        return ""

    built_in = coerce_role(role)
    if built_in is not None:
        return ROLE_LABELS[built_in]

    role_id = str(role)
    if custom_roles is not None:
        custom = custom_roles(role_id)
        if custom is not None:
            return custom.name
    return role_id


# =====================================================
# ROLE GROUPS
# =====================================================
class RoleGroups:
    # Platform admins with full access
    PLATFORM_ADMINS: FrozenSet[Role] = frozenset({Role.SUPER_ADMIN, Role.EVZONE_ADMIN})

    # Platform operators with regional/operational access
    PLATFORM_OPS: FrozenSet[Role] = frozenset({
        Role.SUPER_ADMIN, Role.EVZONE_ADMIN, Role.EVZONE_OPERATOR,
    })

    STATION_MANAGERS: FrozenSet[Role] = frozenset({
        Role.STATION_OPERATOR, Role.STATION_ADMIN, Role.MANAGER, Role.STATION_OWNER,
    })

    STATION_STAFF: FrozenSet[Role] = frozenset({
        Role.STATION_OPERATOR, Role.STATION_ADMIN, Role.MANAGER,
        Role.ATTENDANT, Role.CASHIER, Role.STATION_OWNER,
    })

    TECHNICIANS: FrozenSet[Role] = frozenset({Role.TECHNICIAN_ORG, Role.TECHNICIAN_PUBLIC})

    FINANCIAL_VIEWERS: FrozenSet[Role] = frozenset({
        Role.SUPER_ADMIN, Role.EVZONE_ADMIN, Role.EVZONE_OPERATOR,
        Role.STATION_OPERATOR, Role.SITE_OWNER, Role.STATION_OWNER,
    })

    INCIDENT_MANAGERS: FrozenSet[Role] = frozenset({
        Role.SUPER_ADMIN, Role.EVZONE_ADMIN, Role.EVZONE_OPERATOR,
        Role.STATION_OPERATOR, Role.MANAGER, Role.STATION_OWNER,
    })

    # Excludes CASHIER
    ALL_AUTHENTICATED: FrozenSet[Role] = frozenset({
        Role.SUPER_ADMIN, Role.EVZONE_ADMIN, Role.EVZONE_OPERATOR,
        Role.SITE_OWNER, Role.STATION_ADMIN, Role.MANAGER, Role.ATTENDANT,
        Role.TECHNICIAN_ORG, Role.TECHNICIAN_PUBLIC, Role.STATION_OWNER,
    })


def is_in_group(role, group: FrozenSet[Role]) -> bool:
    role = coerce_role(role)
    return role in group if role is not None else False


# =====================================================
# STATION SCOPING RULE PER ROLE
# =====================================================
class StationScopeRule(BaseStrEnum):
    """How a role's station visibility is decided once the type check passes."""

    platform = "platform"          # global visibility
    ownership = "ownership"        # direct owner, then organization
    assignment = "assignment"      # explicit station id/code list
    unrestricted = "unrestricted"  # gated elsewhere, not by station scoping
    custom = "custom"              # custom role ids: view_all or nothing


ROLE_STATION_RULES: Dict[Role, StationScopeRule] = {
    Role.SUPER_ADMIN: StationScopeRule.platform,
    Role.EVZONE_ADMIN: StationScopeRule.platform,
    Role.EVZONE_OPERATOR: StationScopeRule.platform,

    Role.STATION_OWNER: StationScopeRule.ownership,
    Role.STATION_OPERATOR: StationScopeRule.assignment,

    Role.SITE_OWNER: StationScopeRule.unrestricted,
    Role.STATION_ADMIN: StationScopeRule.unrestricted,
    Role.MANAGER: StationScopeRule.unrestricted,
    Role.ATTENDANT: StationScopeRule.unrestricted,
    Role.CASHIER: StationScopeRule.unrestricted,
    Role.TECHNICIAN_ORG: StationScopeRule.unrestricted,
    Role.TECHNICIAN_PUBLIC: StationScopeRule.unrestricted,
}

_unmapped = set(Role) - set(ROLE_STATION_RULES)
if _unmapped:
    raise RuntimeError(
        f"Station scoping rule missing for roles: {sorted(r.value for r in _unmapped)}"
    )

_platform_rule = {r for r, rule in ROLE_STATION_RULES.items() if rule == StationScopeRule.platform}
if _platform_rule != set(RoleGroups.PLATFORM_OPS):
    raise RuntimeError("Platform station rule must match RoleGroups.PLATFORM_OPS")


def station_rule_for(role) -> StationScopeRule:
    """Built-in roles use ROLE_STATION_RULES; anything else is a custom role."""
    built_in = coerce_role(role)
    if built_in is None:
        return StationScopeRule.custom
    return ROLE_STATION_RULES[built_in]
