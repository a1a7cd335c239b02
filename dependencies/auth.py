from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from pydantic import ValidationError

from models.user import UserProfile


# ============================================================
# Current User Model (session identity)
# ============================================================
class CurrentUser(UserProfile):
    """
    The authenticated session user. Token verification happens upstream;
    the host application's auth middleware stores the result on
    `request.state.user` (as this model or a plain dict).
    """
    id: str
    email: Optional[str] = None


# ============================================================
# CURRENT USER RESOLUTION
# ============================================================
def get_current_user(request: Request) -> CurrentUser:

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Authentication required",
    )

    raw = getattr(request.state, "user", None)
    if raw is None:
        raise unauthorized

    if isinstance(raw, CurrentUser):
        return raw

    try:
        if isinstance(raw, UserProfile):
            return CurrentUser.model_validate(raw.model_dump())
        return CurrentUser.model_validate(raw)
    except ValidationError:
        raise unauthorized


def get_optional_profile(request: Request) -> Optional[UserProfile]:
    """
    The /me profile record, when the host application has loaded one onto
    `request.state.profile`. Profile values outrank session values.
    """
    raw = getattr(request.state, "profile", None)
    if raw is None:
        return None
    if isinstance(raw, UserProfile):
        return raw
    return UserProfile.model_validate(raw)


# ============================================================
# ROLE CHECKER (basic role list guard)
# ============================================================
def requires_role(allowed_roles: list[str]):
    """
    SUPER_ADMIN passes every role guard.
    """
    allowed = {str(r).upper() for r in allowed_roles}

    def checker(current_user: CurrentUser = Depends(get_current_user)):
        role = (current_user.role or "").strip().upper()
        if role == "SUPER_ADMIN":
            return current_user
        if role not in allowed:
            raise HTTPException(
                status_code=403,
                detail=f"Requires one of: {sorted(allowed)}",
            )
        return current_user
    return checker


# ============================================================
# PERMISSION CHECK (DELEGATES TO permission_helpers)
# ============================================================
def requires_permission(feature: str, action: str = "access"):
    """
    Thin wrapper so routes can import guards from dependencies.auth.
    Real RBAC logic lives in core.permission_helpers.
    """
    from core.permission_helpers import requires_permission as new_checker
    return new_checker(feature, action)
