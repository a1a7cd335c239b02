# core/station_creation.py

"""
Which station kinds (CHARGE / SWAP) a viewer may create right now.

A STATION_OWNER must have picked a capability before either kind is
creatable; until then the creation flow presents both kinds as a choice.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from core.custom_roles import CustomRoleLookup
from core.paths import PATHS
from core.permission_helpers import has_permission
from core.roles import coerce_role
from models.enums import OwnerCapability, Role, StationCreationTarget
from models.user import UserProfile


TARGET_ORDER = (StationCreationTarget.CHARGE, StationCreationTarget.SWAP)


class StationCreationViewerContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: Optional[str] = None
    role: Optional[Role] = None
    owner_capability: Optional[OwnerCapability] = None
    is_station_owner: bool = False
    can_create_stations: bool = False
    can_create_swap_stations: bool = False
    requires_owner_capability_choice: bool = False


def resolve_viewer_context(
    auth_user: Optional[UserProfile] = None,
    me: Optional[UserProfile] = None,
    custom_roles: Optional[CustomRoleLookup] = None,
) -> StationCreationViewerContext:
    """
    Profile (`me`) values take precedence over the session user's.
    """
    raw_role = (me.role if me else None) or (auth_user.role if auth_user else None)
    owner_capability = (
        (me.owner_capability if me else None)
        or (auth_user.owner_capability if auth_user else None)
    )
    user_id = (me.id if me else None) or (auth_user.id if auth_user else None)

    role = coerce_role(raw_role)
    is_station_owner = role == Role.STATION_OWNER

    return StationCreationViewerContext(
        user_id=user_id,
        role=role,
        owner_capability=owner_capability,
        is_station_owner=is_station_owner,
        can_create_stations=has_permission(raw_role, "stations", "create", custom_roles),
        can_create_swap_stations=has_permission(raw_role, "swapStations", "create", custom_roles),
        requires_owner_capability_choice=is_station_owner and owner_capability is None,
    )


def _owner_capability_allows(ctx: StationCreationViewerContext, target: StationCreationTarget) -> bool:
    if ctx.requires_owner_capability_choice or ctx.owner_capability is None:
        return False
    return ctx.owner_capability in (OwnerCapability(target.value), OwnerCapability.BOTH)


def can_create_charge_station(ctx: StationCreationViewerContext) -> bool:
    if not ctx.can_create_stations:
        return False
    if not ctx.is_station_owner:
        return True
    return _owner_capability_allows(ctx, StationCreationTarget.CHARGE)


def can_create_swap_station(ctx: StationCreationViewerContext) -> bool:
    if not ctx.can_create_swap_stations:
        return False
    if not ctx.is_station_owner:
        return True
    return _owner_capability_allows(ctx, StationCreationTarget.SWAP)


def can_create_target(ctx: StationCreationViewerContext, target) -> bool:
    target = StationCreationTarget.coerce(target)
    if target == StationCreationTarget.CHARGE:
        return can_create_charge_station(ctx)
    if target == StationCreationTarget.SWAP:
        return can_create_swap_station(ctx)
    return False


def resolve_allowed_targets(ctx: StationCreationViewerContext) -> List[StationCreationTarget]:
    return [target for target in TARGET_ORDER if can_create_target(ctx, target)]


def resolve_choice_targets(ctx: StationCreationViewerContext) -> List[StationCreationTarget]:
    if ctx.requires_owner_capability_choice:
        return list(TARGET_ORDER)
    return resolve_allowed_targets(ctx)


def station_creation_target_path(target) -> str:
    """Route identifier of the creation flow for `target`."""
    target = StationCreationTarget.coerce(target)
    if target == StationCreationTarget.CHARGE:
        return PATHS.OWNER.ADD_CHARGE_STATION
    if target == StationCreationTarget.SWAP:
        return PATHS.OWNER.ADD_SWAP_STATION
    raise ValueError(f"Unknown station creation target: {target!r}")
