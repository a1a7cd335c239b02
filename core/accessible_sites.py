# core/accessible_sites.py

"""
Merge the sites a viewer owns with the sites they lease into one list.

A site appears at most once. OWNED always wins over RENTED for the same
site id, whatever order the records arrive in.
"""

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from core.logging_config import logger
from models.enums import ApplicationStatus, SiteSource
from models.site import AccessibleSiteOption, Application, Site


ACTIVE_RENTAL_STATUSES = frozenset({
    ApplicationStatus.LEASE_SIGNED.value,
    ApplicationStatus.COMPLETED.value,
})

UNNAMED_SITE = "Unnamed Site"

SiteLike = Union[Site, Mapping[str, Any]]
ApplicationLike = Union[Application, Mapping[str, Any]]


def normalize_status(status: Optional[str]) -> str:
    return (status or "").strip().upper()


def to_number_or_none(value: Any) -> Optional[float]:
    """Finite int/float only; bools, strings, NaN and infinities become None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return value


def _parse(model, record) -> Optional[Any]:
    """Validate `record` as `model`; unparsable records are skipped."""
    if isinstance(record, model):
        return record
    try:
        if isinstance(record, Mapping):
            return model.model_validate(record)
        return model.model_validate(record, from_attributes=True)
    except ValidationError as e:
        logger.debug(f"Skipping unparsable {model.__name__} record: {e.error_count()} error(s)")
        return None


def to_site_option(
    site: Site,
    source: SiteSource,
    application_id: Optional[str] = None,
    lease_status: Optional[str] = None,
) -> AccessibleSiteOption:
    return AccessibleSiteOption(
        id=site.id,
        name=site.name or UNNAMED_SITE,
        address=site.address or "",
        latitude=to_number_or_none(site.latitude),
        longitude=to_number_or_none(site.longitude),
        source=source,
        owner_id=site.owner_id,
        organization_id=site.organization_id,
        application_id=application_id,
        lease_status=lease_status,
    )


def is_owned_by_viewer(site: Site, viewer_id: Optional[str], viewer_org_id: Optional[str]) -> bool:
    if viewer_id and site.owner_id == viewer_id:
        return True
    if viewer_org_id and site.organization_id and site.organization_id == viewer_org_id:
        return True
    return False


def application_org_id(application: Application) -> Optional[str]:
    """organization_id, then org_id, then the embedded site's organization."""
    if application.organization_id:
        return application.organization_id
    if application.org_id:
        return application.org_id
    if application.site is not None and application.site.organization_id:
        return application.site.organization_id
    return None


def is_rented_by_viewer(
    application: Application,
    viewer_id: Optional[str],
    viewer_org_id: Optional[str],
) -> bool:
    linked_by_user = bool(
        viewer_id
        and (application.operator_id == viewer_id or application.tenant_id == viewer_id)
    )
    app_org_id = application_org_id(application)
    linked_by_org = bool(viewer_org_id and app_org_id and app_org_id == viewer_org_id)
    return linked_by_user or linked_by_org


def _sort_key(option: AccessibleSiteOption):
    # Case-insensitive, lowercase first on ties ("a" before "A")
    return (option.name.casefold(), option.name.swapcase())


def build_accessible_sites(
    sites: Optional[Iterable[SiteLike]] = None,
    applications: Optional[Iterable[ApplicationLike]] = None,
    viewer_id: Optional[str] = None,
    viewer_org_id: Optional[str] = None,
    scope_to_owner: bool = True,
) -> List[AccessibleSiteOption]:
    """
    Build the viewer's accessible sites, sorted by display name.

    Args:
        sites: Site records known to the caller
        applications: Lease applications; only LEASE_SIGNED / COMPLETED count
        viewer_id: Viewer's user id
        viewer_org_id: Viewer's organization id
        scope_to_owner: When False every site and every active lease is
            included regardless of who the viewer is

    Returns:
        One AccessibleSiteOption per site id
    """
    site_records = [site for site in (_parse(Site, raw) for raw in sites or []) if site is not None]
    by_id: Dict[str, AccessibleSiteOption] = {}
    site_by_id: Dict[str, Site] = {site.id: site for site in site_records}

    for site in site_records:
        if scope_to_owner and not is_owned_by_viewer(site, viewer_id, viewer_org_id):
            continue
        by_id[site.id] = to_site_option(site, SiteSource.OWNED)

    for raw_application in applications or []:
        application = _parse(Application, raw_application)
        if application is None:
            continue

        lease_status = normalize_status(application.status)
        if lease_status not in ACTIVE_RENTAL_STATUSES:
            continue
        if scope_to_owner and not is_rented_by_viewer(application, viewer_id, viewer_org_id):
            continue

        candidate = application.site
        if candidate is None and application.site_id:
            candidate = site_by_id.get(application.site_id)
        if candidate is None:
            continue

        existing = by_id.get(candidate.id)
        if existing is not None and existing.source == SiteSource.OWNED:
            continue

        by_id[candidate.id] = to_site_option(
            candidate,
            SiteSource.RENTED,
            application_id=application.id,
            lease_status=lease_status,
        )

    return sorted(by_id.values(), key=_sort_key)
