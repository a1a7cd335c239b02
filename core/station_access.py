# core/station_access.py

"""
Station access decisions.

`can_access_station` answers "may this actor see this station?" for one
request. Rules are evaluated in a fixed order and the first one that
decides wins:

    1. no role or no station            -> deny
    2. capability / scope type check    -> deny on mismatch (absolute veto)
    3. view-all or platform role        -> allow
    4. STATION_OWNER                    -> direct owner, else organization
    5. STATION_OPERATOR                 -> station id or code is assigned
    6. any other built-in role          -> allow
    7. custom role id                   -> deny (only view_all admits it)

Steps 3-7 dispatch on ROLE_STATION_RULES, which covers every Role.
Nothing in this module raises on missing or malformed fields.
"""

from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from core.capabilities import (
    PolicyLike,
    capability_allows_scope,
    capability_allows_station,
    station_matches_scope,
)
from core.custom_roles import CustomRoleLookup
from core.logging_config import logger
from core.permission_helpers import has_permission
from core.roles import StationScopeRule, station_rule_for
from models.enums import StationScope
from models.station import StationAccessContext, StationAccessTarget
from models.user import UserProfile


StationLike = Union[StationAccessTarget, Mapping[str, Any]]


def _as_target(station: Optional[StationLike]) -> Optional[StationAccessTarget]:
    if station is None:
        return None
    if isinstance(station, StationAccessTarget):
        return station
    try:
        if isinstance(station, Mapping):
            return StationAccessTarget.model_validate(station)
        return StationAccessTarget.model_validate(station, from_attributes=True)
    except ValidationError as e:
        logger.debug(f"Unparsable station record, denying: {e.error_count()} error(s)")
        return None


def _station_type_allowed(
    ctx: StationAccessContext,
    station: StationAccessTarget,
    scope: StationScope,
    unknown_type_policy: PolicyLike,
) -> bool:
    if scope == StationScope.ANY:
        return capability_allows_station(ctx.capability, station.type, unknown_type_policy)
    return (
        capability_allows_scope(ctx.capability, scope)
        and station_matches_scope(station.type, scope, unknown_type_policy)
    )


def _owner_allows(ctx: StationAccessContext, station: StationAccessTarget) -> bool:
    # Direct ownership is the most specific signal
    if ctx.user_id and station.owner_id and ctx.user_id == station.owner_id:
        return True

    # Organization match needs both sides
    if not ctx.org_id or not station.org_id:
        return False
    return ctx.org_id == station.org_id


def _operator_allows(ctx: StationAccessContext, station: StationAccessTarget) -> bool:
    assigned = ctx.assigned_stations
    if not assigned:
        return False
    id_match = bool(station.id) and station.id in assigned
    code_match = bool(station.code) and station.code in assigned
    return id_match or code_match


# -----------------------------------------------------
# Access decision
# -----------------------------------------------------
def can_access_station(
    ctx: StationAccessContext,
    station: Optional[StationLike] = None,
    scope: Union[StationScope, str, None] = StationScope.ANY,
    unknown_type_policy: PolicyLike = None,
) -> bool:
    """
    Decide whether `ctx` may access `station` under `scope`.

    Args:
        ctx: Actor context for this request
        station: Station record (model or API mapping)
        scope: CHARGE, SWAP or ANY (default)
        unknown_type_policy: Override for unclassifiable station types;
            defaults to settings.UNKNOWN_STATION_TYPE_POLICY

    Returns:
        True to allow, False to deny
    """
    if ctx is None or ctx.role is None:
        return False

    target = _as_target(station)
    if target is None:
        return False

    resolved_scope = StationScope.ANY if scope is None else StationScope.coerce(scope)
    if resolved_scope is None:
        logger.debug(f"Unrecognized station scope {scope!r}; denying")
        return False

    if not _station_type_allowed(ctx, target, resolved_scope, unknown_type_policy):
        return False

    if ctx.view_all:
        return True

    rule = station_rule_for(ctx.role)

    if rule == StationScopeRule.platform:
        return True
    if rule == StationScopeRule.ownership:
        return _owner_allows(ctx, target)
    if rule == StationScopeRule.assignment:
        return _operator_allows(ctx, target)
    if rule == StationScopeRule.unrestricted:
        return True
    if rule == StationScopeRule.custom:
        return False

    raise AssertionError(f"Unhandled station scope rule: {rule}")


def filter_accessible_stations(
    ctx: StationAccessContext,
    stations: Optional[Iterable[StationLike]],
    scope: Union[StationScope, str, None] = StationScope.ANY,
    unknown_type_policy: PolicyLike = None,
) -> List[StationLike]:
    """
    Keep the stations `ctx` may access, in input order. The input
    records are returned untouched.
    """
    allowed = []
    for station in stations or []:
        target = _as_target(station)
        if can_access_station(ctx, target, scope, unknown_type_policy):
            allowed.append(station)
            continue

        if target is None:
            logger.debug("Station denied: unparsable record")
            continue
        logger.debug(
            f"Station denied: {target.name or target.id} "
            f"(station owner={target.owner_id}, user={ctx.user_id}, "
            f"station org={target.org_id}, user org={ctx.org_id})"
        )
    return allowed


# -----------------------------------------------------
# Context construction
# -----------------------------------------------------
def build_station_access_context(
    auth_user: Optional[UserProfile],
    me: Optional[UserProfile] = None,
    custom_roles: Optional[CustomRoleLookup] = None,
    feature: str = "stations",
) -> StationAccessContext:
    """
    Derive the access context from the session user and (optionally) the
    /me profile.

    - role: session user
    - user id: profile, then session
    - org id: profile org_id, then profile organization_id, then session
    - assigned stations: profile, then session
    - capability: profile, then session
    - view_all: `feature.viewAll` in the permission matrix
    """
    role = auth_user.role if auth_user else None
    if role is None and me is not None:
        role = me.role

    def first(*values):
        for value in values:
            if value:
                return value
        return None

    user_id = first(me and me.id, auth_user and auth_user.id)
    org_id = first(
        me and me.org_id,
        me and me.organization_id,
        auth_user and auth_user.org_id,
        auth_user and auth_user.organization_id,
    )
    assigned = first(me and me.assigned_stations, auth_user and auth_user.assigned_stations) or []
    capability = first(me and me.owner_capability, auth_user and auth_user.owner_capability)

    return StationAccessContext(
        role=role,
        user_id=user_id,
        org_id=org_id,
        assigned_stations=assigned,
        capability=capability,
        view_all=has_permission(role, feature, "viewAll", custom_roles),
    )
