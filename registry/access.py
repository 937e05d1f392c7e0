"""
Role classification and route access decisions.

Everything here is a local, fast-path convenience for routing: the token's
signature is NOT verified and the backend re-authorizes every API call.
The one property that matters is fail-safe to least privilege - a malformed
or tampered token must never classify as anything above AUTHENTICATED.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from jose import JWTError, jwt

from models.auth import ORG_ADMIN_ROLE_NAME, Role, UserRole

logger = logging.getLogger(__name__)


class RouteCategory(str, Enum):
    ADMIN_ONLY = "admin_only"
    AUTHENTICATED_ONLY = "authenticated_only"
    PUBLIC = "public"


SIGN_IN_PATH = "/sign-in"
HOME_PATH = "/dashboard"

# Signed-in users are bounced off these back to the dashboard
PUBLIC_PATHS = ("/sign-in", "/sign-up", "/forgot-password", "/reset-password")
ADMIN_PATHS = ("/admin", "/api/admin")
PROTECTED_PATHS = ("/dashboard", "/institutions", "/aidois", "/profile", "/api")
# Under /api but reachable without a credential
OPEN_API_PATHS = ("/api/auth",)


def classify_role(user_role: Any) -> Role:
    """
    Classify a wire role ({admin?, authenticated?, other?}) into a Role.

    admin must be literally True; other must be exactly "OrgAdmin".
    Anything else - including junk - is AUTHENTICATED.
    """
    if isinstance(user_role, UserRole):
        user_role = user_role.model_dump()
    if not isinstance(user_role, Mapping):
        return Role.AUTHENTICATED

    if user_role.get("admin") is True:
        return Role.ADMIN
    if user_role.get("other") == ORG_ADMIN_ROLE_NAME:
        return Role.ORG_ADMIN
    return Role.AUTHENTICATED


def read_claims(token: Any) -> Optional[dict]:
    """Unverified claims payload of a token, or None if it can't be read."""
    if not isinstance(token, str) or not token:
        return None
    try:
        claims = jwt.get_unverified_claims(token)
    except (JWTError, ValueError, TypeError, RecursionError) as e:
        logger.debug("Unreadable credential: %s", type(e).__name__)
        return None
    if not isinstance(claims, dict):
        return None
    return claims


def decode_role(token: Any) -> Role:
    """Role claimed by a token. Never raises; unreadable means AUTHENTICATED."""
    claims = read_claims(token)
    if claims is None:
        return Role.AUTHENTICATED
    return classify_role(claims.get("user_role"))


def can_access(role: Optional[Role], category: RouteCategory) -> bool:
    """
    May this role enter a route of this category?

    role is None when no credential is present at all - distinct from a
    credential that classified as AUTHENTICATED.
    """
    if category == RouteCategory.ADMIN_ONLY:
        return role is Role.ADMIN
    if category == RouteCategory.AUTHENTICATED_ONLY:
        return role is not None
    return True


def _matches(path: str, prefixes: tuple) -> bool:
    return any(path == p or path.startswith(p.rstrip("/") + "/") for p in prefixes)


def route_category(path: str) -> RouteCategory:
    """Which category a request path falls under."""
    if _matches(path, ADMIN_PATHS):
        return RouteCategory.ADMIN_ONLY
    if _matches(path, OPEN_API_PATHS):
        return RouteCategory.PUBLIC
    if _matches(path, PROTECTED_PATHS):
        return RouteCategory.AUTHENTICATED_ONLY
    return RouteCategory.PUBLIC


@dataclass(frozen=True)
class NavigationDecision:
    """Outcome of the route guard for one request."""
    allow: bool
    redirect_to: Optional[str] = None
    role: Optional[Role] = None
    # 401 when there is no credential, 403 when the role falls short
    status: int = 200


def resolve_navigation(path: str, token: Optional[str]) -> NavigationDecision:
    """
    Route guard. Recomputed on every request, nothing cached.

    - public auth pages: signed-in users go to the dashboard
    - admin routes: admins only; others go to the dashboard, anonymous to sign-in
    - protected routes: any credential; anonymous to sign-in
    """
    role = decode_role(token) if token else None

    if _matches(path, PUBLIC_PATHS):
        if role is not None:
            return NavigationDecision(allow=False, redirect_to=HOME_PATH, role=role, status=302)
        return NavigationDecision(allow=True)

    category = route_category(path)
    if can_access(role, category):
        return NavigationDecision(allow=True, role=role)

    if role is None:
        return NavigationDecision(allow=False, redirect_to=SIGN_IN_PATH, status=401)
    return NavigationDecision(allow=False, redirect_to=HOME_PATH, role=role, status=403)
