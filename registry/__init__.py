"""
Registry - the portal's decision logic, free of I/O.

Modules:
- scoring: AIDOI eligibility rubric (five sections, 105 points, eligible at 60)
- access: token -> role classification and route guard decisions
- stats: admin dashboard derivations (pending approvals, counts, rankings)
- suffix: AIDOI suffix / target URL derivation for minting
"""

from .scoring import (
    ELIGIBILITY_THRESHOLD,
    EligibilityResult,
    score,
    completion,
    item_points,
)
from .access import (
    RouteCategory,
    NavigationDecision,
    classify_role,
    decode_role,
    read_claims,
    can_access,
    route_category,
    resolve_navigation,
)
from .stats import (
    pending_users,
    org_admins,
    organization_for_admin,
    users_by_role,
    top_organizations,
    compute_admin_stats,
)
from .suffix import slugify_title, build_suffix, default_target_url

__all__ = [
    # scoring
    'ELIGIBILITY_THRESHOLD',
    'EligibilityResult',
    'score',
    'completion',
    'item_points',
    # access
    'RouteCategory',
    'NavigationDecision',
    'classify_role',
    'decode_role',
    'read_claims',
    'can_access',
    'route_category',
    'resolve_navigation',
    # stats
    'pending_users',
    'org_admins',
    'organization_for_admin',
    'users_by_role',
    'top_organizations',
    'compute_admin_stats',
    # suffix
    'slugify_title',
    'build_suffix',
    'default_target_url',
]
