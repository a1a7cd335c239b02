# tests/test_station_creation.py

"""
Tests for station creation eligibility.
"""

import pytest

from core.custom_roles import CustomRoleStore
from core.paths import PATHS
from core.station_creation import (
    StationCreationViewerContext,
    can_create_charge_station,
    can_create_swap_station,
    resolve_allowed_targets,
    resolve_choice_targets,
    resolve_viewer_context,
    station_creation_target_path,
)
from models import CustomRoleDef, OwnerCapability, Role, StationCreationTarget, UserProfile


CHARGE = StationCreationTarget.CHARGE
SWAP = StationCreationTarget.SWAP


def owner_ctx(capability=None, **overrides):
    """Station owner with both create permissions unless overridden."""
    data = dict(
        user_id="owner-1",
        role=Role.STATION_OWNER,
        owner_capability=capability,
        is_station_owner=True,
        can_create_stations=True,
        can_create_swap_stations=True,
        requires_owner_capability_choice=capability is None,
    )
    data.update(overrides)
    return StationCreationViewerContext(**data)


# ------------------------------------------------------------------
# Viewer context resolution
# ------------------------------------------------------------------
def test_resolve_viewer_context_prefers_profile():
    auth_user = UserProfile(id="session-id", role="STATION_OWNER", owner_capability="CHARGE")
    me = UserProfile(id="profile-id", role="STATION_OWNER", owner_capability="BOTH")

    ctx = resolve_viewer_context(auth_user, me)

    assert ctx.user_id == "profile-id"
    assert ctx.role == Role.STATION_OWNER
    assert ctx.owner_capability == OwnerCapability.BOTH
    assert ctx.is_station_owner is True
    assert ctx.requires_owner_capability_choice is False


def test_resolve_viewer_context_falls_back_to_session():
    auth_user = UserProfile(id="u1", role="STATION_OWNER", owner_capability="SWAP")
    ctx = resolve_viewer_context(auth_user, UserProfile())
    assert ctx.user_id == "u1"
    assert ctx.owner_capability == OwnerCapability.SWAP


def test_resolve_viewer_context_flags_pending_capability_choice():
    ctx = resolve_viewer_context(UserProfile(id="u1", role="STATION_OWNER"))
    assert ctx.requires_owner_capability_choice is True

    ops = resolve_viewer_context(UserProfile(id="u2", role="EVZONE_OPERATOR"))
    assert ops.requires_owner_capability_choice is False


def test_resolve_viewer_context_reads_permission_matrix():
    owner = resolve_viewer_context(UserProfile(id="u1", role="STATION_OWNER", owner_capability="BOTH"))
    assert owner.can_create_stations is False
    assert owner.can_create_swap_stations is True

    ops = resolve_viewer_context(UserProfile(id="u2", role="EVZONE_OPERATOR"))
    assert ops.can_create_stations is True
    assert ops.can_create_swap_stations is True

    manager = resolve_viewer_context(UserProfile(id="u3", role="MANAGER"))
    assert manager.can_create_stations is False
    assert manager.can_create_swap_stations is False


def test_resolve_viewer_context_with_no_records():
    ctx = resolve_viewer_context()
    assert ctx.role is None
    assert resolve_allowed_targets(ctx) == []
    assert resolve_choice_targets(ctx) == []


def test_custom_role_create_grants():
    store = CustomRoleStore([
        CustomRoleDef(id="swap-builder", name="Swap Builder", permissions=["swapStations.create"]),
    ])
    ctx = resolve_viewer_context(UserProfile(id="u9", role="swap-builder"), custom_roles=store)

    assert ctx.is_station_owner is False
    assert resolve_allowed_targets(ctx) == [SWAP]


# ------------------------------------------------------------------
# Direct predicates
# ------------------------------------------------------------------
def test_non_owner_needs_only_the_permission_flag():
    ctx = StationCreationViewerContext(role=Role.EVZONE_ADMIN, can_create_stations=True)
    assert can_create_charge_station(ctx) is True
    assert can_create_swap_station(ctx) is False


@pytest.mark.parametrize("capability, charge, swap", [
    (OwnerCapability.CHARGE, True, False),
    (OwnerCapability.SWAP, False, True),
    (OwnerCapability.BOTH, True, True),
])
def test_owner_capability_limits_creation(capability, charge, swap):
    ctx = owner_ctx(capability)
    assert can_create_charge_station(ctx) is charge
    assert can_create_swap_station(ctx) is swap


def test_owner_without_permission_flag_is_denied():
    ctx = owner_ctx(OwnerCapability.BOTH, can_create_stations=False)
    assert can_create_charge_station(ctx) is False
    assert can_create_swap_station(ctx) is True


def test_owner_pending_choice_cannot_create_directly():
    ctx = owner_ctx(None)
    assert can_create_charge_station(ctx) is False
    assert can_create_swap_station(ctx) is False


# ------------------------------------------------------------------
# Target lists
# ------------------------------------------------------------------
def test_capability_choice_gating():
    """Owner with no capability: nothing creatable yet, but both offered."""
    ctx = owner_ctx(None)
    assert resolve_allowed_targets(ctx) == []
    assert resolve_choice_targets(ctx) == [CHARGE, SWAP]


def test_allowed_targets_keep_charge_then_swap_order():
    assert resolve_allowed_targets(owner_ctx(OwnerCapability.BOTH)) == [CHARGE, SWAP]
    assert resolve_allowed_targets(owner_ctx(OwnerCapability.SWAP)) == [SWAP]


def test_choice_targets_delegate_once_capability_is_set():
    ctx = owner_ctx(OwnerCapability.CHARGE)
    assert resolve_choice_targets(ctx) == [CHARGE]


# ------------------------------------------------------------------
# Routes
# ------------------------------------------------------------------
def test_station_creation_target_path():
    assert station_creation_target_path(CHARGE) == PATHS.OWNER.ADD_CHARGE_STATION
    assert station_creation_target_path("swap") == PATHS.OWNER.ADD_SWAP_STATION


def test_station_creation_target_path_rejects_unknown_target():
    with pytest.raises(ValueError):
        station_creation_target_path("HYDROGEN")
