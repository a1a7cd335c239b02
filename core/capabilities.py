# core/capabilities.py

"""
Station type normalization and capability/scope matching.

Station type strings arrive from several upstream sources ("CHARGING" from
legacy records, "CHARGE" from newer ones, free-form casing). Nothing here
raises: an unrecognized type normalizes to None and the configured
unknown-type policy decides whether it passes.
"""

from typing import Optional, Union

from core.config import settings
from models.enums import (
    OwnerCapability,
    StationScope,
    StationType,
    UnknownTypePolicy,
)


PolicyLike = Union[UnknownTypePolicy, str, None]


# -----------------------------------------------------
# Normalization
# -----------------------------------------------------
def normalize_station_type(raw: Optional[str]) -> Optional[StationType]:
    """Map a raw station type to CHARGE / SWAP / BOTH, or None if unknown."""
    if not raw or not isinstance(raw, str):
        return None

    normalized = raw.strip().upper()
    if normalized in ("CHARGING", "CHARGE"):
        return StationType.CHARGE
    if normalized == "SWAP":
        return StationType.SWAP
    if normalized == "BOTH":
        return StationType.BOTH
    return None


def normalize_owner_capability(raw) -> Optional[OwnerCapability]:
    return OwnerCapability.coerce(raw)


def _unknown_type_allowed(policy: PolicyLike) -> bool:
    resolved = UnknownTypePolicy.coerce(policy) if policy is not None else None
    if resolved is None:
        resolved = settings.UNKNOWN_STATION_TYPE_POLICY
    return resolved == UnknownTypePolicy.allow


def _resolve_scope(scope) -> Optional[StationScope]:
    # None means "no restriction"; an unrecognized scope resolves to None
    if scope is None:
        return StationScope.ANY
    return StationScope.coerce(scope)


def _unrestricted(capability) -> bool:
    capability = normalize_owner_capability(capability)
    return capability is None or capability == OwnerCapability.BOTH


# -----------------------------------------------------
# Capability vs. station type
# -----------------------------------------------------
def capability_allows_station(
    capability,
    station_type: Optional[str],
    unknown_type_policy: PolicyLike = None,
) -> bool:
    """
    Absent or BOTH capability passes everything. Otherwise the station's
    normalized type must equal the capability or be BOTH.
    """
    if _unrestricted(capability):
        return True

    normalized_type = normalize_station_type(station_type)
    if normalized_type is None:
        return _unknown_type_allowed(unknown_type_policy)

    capability = normalize_owner_capability(capability)
    return normalized_type in (StationType(capability.value), StationType.BOTH)


def capability_allows_scope(capability, scope) -> bool:
    """Compare the capability against the requested scope, not the station."""
    if _unrestricted(capability):
        return True

    scope = _resolve_scope(scope)
    if scope is None:
        return False
    if scope == StationScope.ANY:
        return True

    return normalize_owner_capability(capability).value == scope.value


def station_matches_scope(
    station_type: Optional[str],
    scope,
    unknown_type_policy: PolicyLike = None,
) -> bool:
    scope = _resolve_scope(scope)
    if scope is None:
        return False
    if scope == StationScope.ANY:
        return True

    normalized_type = normalize_station_type(station_type)
    if normalized_type is None:
        return _unknown_type_allowed(unknown_type_policy)

    return normalized_type in (StationType(scope.value), StationType.BOTH)


# -----------------------------------------------------
# Convenience specializations
# -----------------------------------------------------
def capability_allows_charge(capability) -> bool:
    return capability_allows_station(capability, StationType.CHARGE.value)


def capability_allows_swap(capability) -> bool:
    return capability_allows_station(capability, StationType.SWAP.value)
