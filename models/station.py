# models/station.py

from typing import FrozenSet, Optional, Union
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from models.enums import OwnerCapability, Role


RECORD_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    coerce_numbers_to_str=True,
    frozen=True,
)


# -------------------------------------------------
# Access context (built fresh for every check)
# -------------------------------------------------
class StationAccessContext(BaseModel):
    """
    Who is asking. Built-in role strings are matched case-insensitively.
    Any other non-empty role id is kept as-is (a custom role); those are
    granted access only through `view_all`.
    """
    model_config = RECORD_CONFIG

    role: Optional[Union[Role, str]] = None
    user_id: Optional[str] = None
    org_id: Optional[str] = None
    assigned_stations: FrozenSet[str] = frozenset()
    capability: Optional[OwnerCapability] = None
    view_all: bool = False

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, v):
        built_in = Role.coerce(v)
        if built_in is not None:
            return built_in
        if isinstance(v, str) and v.strip():
            return v.strip()
        return None

    @field_validator("capability", mode="before")
    @classmethod
    def normalize_capability(cls, v):
        return OwnerCapability.coerce(v)

    @field_validator("assigned_stations", mode="before")
    @classmethod
    def normalize_assigned_stations(cls, v):
        if v is None:
            return frozenset()
        if isinstance(v, str):
            v = [v]
        return frozenset(str(item) for item in v if item not in (None, ""))

    @field_validator("view_all", mode="before")
    @classmethod
    def normalize_view_all(cls, v):
        return bool(v)


# -------------------------------------------------
# Station under test
# -------------------------------------------------
class StationAccessTarget(BaseModel):
    """
    The station being checked. `type` is the raw upstream string
    ("CHARGING", "charge", "SWAP", ...) and is normalized at check time.
    """
    model_config = RECORD_CONFIG

    id: Optional[str] = None
    code: Optional[str] = None
    name: Optional[str] = None
    org_id: Optional[str] = None
    type: Optional[str] = None
    owner_id: Optional[str] = None
