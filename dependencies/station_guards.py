from typing import Optional
from fastapi import Depends, HTTPException

from dependencies.auth import CurrentUser, get_current_user, get_optional_profile
from core.custom_roles import get_custom_role_store
from core.logging_config import logger
from core.station_access import build_station_access_context, can_access_station
from core.station_creation import (
    StationCreationViewerContext,
    can_create_target,
    resolve_viewer_context,
)
from models.enums import StationCreationTarget, StationScope
from models.station import StationAccessContext
from models.user import UserProfile


# ============================================================
# CONTEXT DEPENDENCIES
# ============================================================
def get_station_access_context(
    current_user: CurrentUser = Depends(get_current_user),
    me: Optional[UserProfile] = Depends(get_optional_profile),
) -> StationAccessContext:
    return build_station_access_context(current_user, me, get_custom_role_store())


def get_station_creation_context(
    current_user: CurrentUser = Depends(get_current_user),
    me: Optional[UserProfile] = Depends(get_optional_profile),
) -> StationCreationViewerContext:
    return resolve_viewer_context(current_user, me, get_custom_role_store())


# ============================================================
# STATION-LEVEL GUARDS
# ============================================================
def require_station_access(
    ctx: StationAccessContext,
    station,
    scope=StationScope.ANY,
):
    """
    Raise 404 when there is no station, 403 when `ctx` may not access it.
    """
    if station is None:
        raise HTTPException(status_code=404, detail="Station not found")

    if not can_access_station(ctx, station, scope):
        logger.info(f"Station access denied for user {ctx.user_id} (role={ctx.role})")
        raise HTTPException(
            status_code=403,
            detail="You do not have access to this station"
        )


def require_station_creation(ctx: StationCreationViewerContext, target):
    """
    Raise 409 while a station owner still has to choose a capability,
    403 when `target` is not creatable for `ctx`.
    """
    resolved = StationCreationTarget.coerce(target)
    if resolved is None:
        raise HTTPException(status_code=400, detail=f"Unknown station type: {target}")

    if ctx.requires_owner_capability_choice:
        raise HTTPException(
            status_code=409,
            detail="Choose an owner capability before creating stations"
        )

    if not can_create_target(ctx, resolved):
        raise HTTPException(
            status_code=403,
            detail=f"You cannot create {resolved.value.lower()} stations"
        )
