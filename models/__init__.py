# -------------------------
# Enums
# -------------------------
from .enums import (
    ApplicationStatus,
    OwnerCapability,
    Role,
    SiteSource,
    StationCreationTarget,
    StationScope,
    StationType,
    UnknownTypePolicy,
)

# -------------------------
# Station Models
# -------------------------
from .station import (
    StationAccessContext,
    StationAccessTarget,
)

# -------------------------
# Site / Lease Models
# -------------------------
from .site import (
    AccessibleSiteOption,
    Application,
    Site,
)

# -------------------------
# Viewer Models
# -------------------------
from .user import (
    CustomRoleDef,
    UserProfile,
)
