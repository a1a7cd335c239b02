from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]

    @classmethod
    def coerce(cls, value):
        """
        Case-insensitive, whitespace-tolerant lookup that never raises.
        Returns the matching member or None.
        """
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().upper()
        for item in cls:
            if item.value.upper() == key:
                return item
        return None


# -----------------------------------------------------
# ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Actor role supplied by the authentication layer."""

    SUPER_ADMIN = "SUPER_ADMIN"
    EVZONE_ADMIN = "EVZONE_ADMIN"
    EVZONE_OPERATOR = "EVZONE_OPERATOR"
    SITE_OWNER = "SITE_OWNER"
    STATION_OPERATOR = "STATION_OPERATOR"
    STATION_ADMIN = "STATION_ADMIN"
    MANAGER = "MANAGER"
    ATTENDANT = "ATTENDANT"
    CASHIER = "CASHIER"
    TECHNICIAN_ORG = "TECHNICIAN_ORG"
    TECHNICIAN_PUBLIC = "TECHNICIAN_PUBLIC"
    STATION_OWNER = "STATION_OWNER"


# -----------------------------------------------------
# OWNER CAPABILITY
# -----------------------------------------------------
class OwnerCapability(BaseStrEnum):
    """Station kinds a STATION_OWNER is entitled to operate."""

    CHARGE = "CHARGE"
    SWAP = "SWAP"
    BOTH = "BOTH"

    @classmethod
    def coerce(cls, value):
        # Legacy profiles stored "CHARGING"
        if isinstance(value, str) and value.strip().upper() == "CHARGING":
            return cls.CHARGE
        return super().coerce(value)


# -----------------------------------------------------
# STATION TYPE (normalized)
# -----------------------------------------------------
class StationType(BaseStrEnum):
    """Canonical station type after normalization."""

    CHARGE = "CHARGE"
    SWAP = "SWAP"
    BOTH = "BOTH"


# -----------------------------------------------------
# STATION SCOPE
# -----------------------------------------------------
class StationScope(BaseStrEnum):
    """Per-request restriction on the station type being checked."""

    CHARGE = "CHARGE"
    SWAP = "SWAP"
    ANY = "ANY"


# -----------------------------------------------------
# STATION CREATION TARGET
# -----------------------------------------------------
class StationCreationTarget(BaseStrEnum):
    """Station kinds offered by the creation flow."""

    CHARGE = "CHARGE"
    SWAP = "SWAP"


# -----------------------------------------------------
# ACCESSIBLE SITE SOURCE
# -----------------------------------------------------
class SiteSource(BaseStrEnum):
    """How a viewer reaches a site. OWNED outranks RENTED."""

    OWNED = "OWNED"
    RENTED = "RENTED"


# -----------------------------------------------------
# APPLICATION (LEASE) STATUS
# -----------------------------------------------------
class ApplicationStatus(BaseStrEnum):
    """Lifecycle of a site lease application."""

    DRAFT = "DRAFT"
    PENDING_REVIEW = "PENDING_REVIEW"
    INFO_REQUESTED = "INFO_REQUESTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    NEGOTIATING = "NEGOTIATING"
    TERMS_AGREED = "TERMS_AGREED"
    AWAITING_DEPOSIT = "AWAITING_DEPOSIT"
    DEPOSIT_PAID = "DEPOSIT_PAID"
    LEASE_DRAFTING = "LEASE_DRAFTING"
    LEASE_PENDING_SIGNATURE = "LEASE_PENDING_SIGNATURE"
    LEASE_SIGNED = "LEASE_SIGNED"
    COMPLIANCE_CHECK = "COMPLIANCE_CHECK"
    COMPLETED = "COMPLETED"
    WITHDRAWN = "WITHDRAWN"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"


# -----------------------------------------------------
# UNKNOWN STATION TYPE POLICY
# -----------------------------------------------------
class UnknownTypePolicy(BaseStrEnum):
    """What type/scope checks do when a station type cannot be classified."""

    allow = "allow"
    deny = "deny"
