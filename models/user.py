# models/user.py

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from models.enums import OwnerCapability


# ===============================================================
# VIEWER RECORDS
# ===============================================================

class UserProfile(BaseModel):
    """
    Session user or /me profile record.

    `role` stays a raw string so custom role ids survive until they reach
    the permission matrix; access contexts coerce it to `Role`.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    id: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    owner_capability: Optional[OwnerCapability] = None
    org_id: Optional[str] = None
    organization_id: Optional[str] = None
    assigned_stations: List[str] = Field(default_factory=list)
    status: Optional[str] = None

    @field_validator("owner_capability", mode="before")
    @classmethod
    def normalize_capability(cls, v):
        return OwnerCapability.coerce(v)

    @field_validator("assigned_stations", mode="before")
    @classmethod
    def normalize_assigned_stations(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v


class CustomRoleDef(BaseModel):
    """Operator-defined role. Permissions are stored as 'feature.action'."""

    id: str
    name: str
    permissions: List[str] = Field(default_factory=list)
    description: Optional[str] = None
