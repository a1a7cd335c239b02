# models/site.py

from typing import Any, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from models.enums import SiteSource


RECORD_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    coerce_numbers_to_str=True,
)


# -------------------------------------------------
# Site (as returned by the sites API)
# -------------------------------------------------
class Site(BaseModel):
    model_config = RECORD_CONFIG

    id: str
    name: Optional[str] = None
    address: Optional[str] = None

    # Left untyped: upstream sends numbers, numeric strings or nothing.
    latitude: Any = None
    longitude: Any = None

    owner_id: Optional[str] = None
    organization_id: Optional[str] = None


# -------------------------------------------------
# Application (site lease)
# -------------------------------------------------
class Application(BaseModel):
    """
    A lease application against a site. Only `status` values in the active
    rental set make the site reachable as RENTED.
    """
    model_config = RECORD_CONFIG

    id: str
    site_id: Optional[str] = None
    operator_id: Optional[str] = None
    tenant_id: Optional[str] = None
    organization_id: Optional[str] = None
    org_id: Optional[str] = None
    status: Optional[str] = None
    site: Optional[Site] = None


# -------------------------------------------------
# Resolved view-model
# -------------------------------------------------
class AccessibleSiteOption(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    name: str
    address: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    source: SiteSource
    owner_id: Optional[str] = None
    organization_id: Optional[str] = None
    application_id: Optional[str] = None
    lease_status: Optional[str] = None
