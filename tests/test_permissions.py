# tests/test_permissions.py

"""
Tests for the permission matrix, role groups and custom role fallback.
"""

import logging

import pytest
from fastapi import HTTPException

from core.custom_roles import CustomRoleStore
from core.permission_helpers import (
    get_permissions_for_feature,
    has_permission,
    is_platform_admin,
    is_platform_ops,
    require_platform_admin,
)
from core.permissions import ALL, PERMISSIONS
from core.roles import (
    ROLE_STATION_RULES,
    RoleGroups,
    StationScopeRule,
    is_in_group,
    role_label,
    station_rule_for,
)
from dependencies.auth import CurrentUser
from models import CustomRoleDef, Role


@pytest.fixture
def custom_roles():
    return CustomRoleStore([
        CustomRoleDef(
            id="regional-lead",
            name="Regional Lead",
            permissions=["stations.viewAll", "reports.access"],
        ),
    ])


# ------------------------------------------------------------------
# Built-in matrix
# ------------------------------------------------------------------
def test_no_role_has_no_permissions():
    assert has_permission(None, "dashboard") is False
    assert has_permission("", "dashboard") is False


def test_super_admin_is_master_key():
    assert has_permission(Role.SUPER_ADMIN, "stations", "delete") is True
    assert has_permission("SUPER_ADMIN", "not-a-feature", "whatever") is True


def test_matrix_lookups():
    assert has_permission(Role.STATION_OWNER, "swapStations", "create") is True
    assert has_permission(Role.STATION_OWNER, "stations", "create") is False
    assert has_permission("evzone_operator", "stations", "viewAll") is True
    assert has_permission(Role.CASHIER, "sessions", "stopSession") is True
    assert has_permission(Role.TECHNICIAN_PUBLIC, "jobs", "viewAvailable") is True
    assert has_permission(Role.TECHNICIAN_ORG, "jobs", "viewAvailable") is False


def test_all_marker_grants_every_built_in_role():
    for role in Role:
        assert has_permission(role, "dashboard") is True


def test_unknown_feature_or_action_denied():
    assert has_permission(Role.EVZONE_ADMIN, "teleport") is False
    assert has_permission(Role.EVZONE_ADMIN, "stations", "teleport") is False


def test_every_matrix_entry_is_all_or_roles():
    for feature, actions in PERMISSIONS.items():
        for action, granted in actions.items():
            assert granted == ALL or all(isinstance(r, Role) for r in granted), (feature, action)


# ------------------------------------------------------------------
# Custom roles
# ------------------------------------------------------------------
def test_custom_role_permissions(custom_roles):
    assert has_permission("regional-lead", "stations", "viewAll", custom_roles) is True
    assert has_permission("regional-lead", "reports", "access", custom_roles) is True
    assert has_permission("regional-lead", "stations", "create", custom_roles) is False


def test_custom_role_needs_lookup():
    assert has_permission("regional-lead", "stations", "viewAll") is False


def test_built_in_role_falls_through_to_lookup(custom_roles):
    assert has_permission(Role.MANAGER, "stations", "create", custom_roles) is False


def test_failing_lookup_is_logged_and_denied(caplog):
    def broken_lookup(role_id):
        raise RuntimeError("store offline")

    with caplog.at_level(logging.WARNING, logger="evzone"):
        assert has_permission("regional-lead", "stations", "viewAll", broken_lookup) is False

    assert "Failed to check custom role permissions" in caplog.text


# ------------------------------------------------------------------
# Per-feature summaries
# ------------------------------------------------------------------
def test_get_permissions_for_feature():
    assert get_permissions_for_feature(Role.STATION_OPERATOR, "swapStations") == {
        "access": True,
        "viewAll": False,
        "create": False,
        "edit": True,
    }


def test_get_permissions_for_feature_super_admin():
    perms = get_permissions_for_feature(Role.SUPER_ADMIN, "swapStations")
    assert set(perms) == {"access", "viewAll", "create", "edit"}
    assert all(perms.values())


def test_get_permissions_for_feature_unknowns():
    assert get_permissions_for_feature(None, "stations") == {}
    assert get_permissions_for_feature("regional-lead", "stations") == {}
    assert get_permissions_for_feature(Role.MANAGER, "teleport") == {}


# ------------------------------------------------------------------
# Role catalogue
# ------------------------------------------------------------------
def test_every_role_has_a_station_rule():
    assert set(ROLE_STATION_RULES) == set(Role)


def test_platform_rule_matches_platform_ops_group():
    platform = {r for r, rule in ROLE_STATION_RULES.items() if rule == StationScopeRule.platform}
    assert platform == set(RoleGroups.PLATFORM_OPS)
    assert ROLE_STATION_RULES[Role.STATION_OWNER] == StationScopeRule.ownership
    assert ROLE_STATION_RULES[Role.STATION_OPERATOR] == StationScopeRule.assignment


def test_is_in_group():
    assert is_in_group("evzone_admin", RoleGroups.PLATFORM_ADMINS) is True
    assert is_in_group(Role.EVZONE_OPERATOR, RoleGroups.PLATFORM_ADMINS) is False
    assert is_in_group(None, RoleGroups.PLATFORM_OPS) is False
    assert is_in_group("regional-lead", RoleGroups.PLATFORM_OPS) is False


def test_role_label(custom_roles):
    assert role_label(Role.TECHNICIAN_ORG) == "Technician (Org)"
    assert role_label("station_owner") == "Station Owner"
    assert role_label("regional-lead", custom_roles) == "Regional Lead"
    assert role_label("regional-lead") == "regional-lead"
    assert role_label(None) == ""


# ------------------------------------------------------------------
# Platform role helpers
# ------------------------------------------------------------------
def test_platform_role_helpers():
    admin = CurrentUser(id="a-1", role="evzone_admin")
    operator = CurrentUser(id="o-1", role="EVZONE_OPERATOR")

    assert is_platform_admin(admin) is True
    assert is_platform_ops(admin) is True
    assert is_platform_admin(operator) is False
    assert is_platform_ops(operator) is True

    require_platform_admin(admin)
    with pytest.raises(HTTPException) as exc:
        require_platform_admin(operator)
    assert exc.value.status_code == 403


def test_station_rule_for_custom_roles():
    assert station_rule_for("station_owner") == StationScopeRule.ownership
    assert station_rule_for("regional-lead") == StationScopeRule.custom
    assert station_rule_for(None) == StationScopeRule.custom
