"""
Admin dashboard derivations over user, organization and AIDOI listings.
"""

from collections import Counter
from typing import Iterable, Optional

from models import AdminStats, AdminUser, Aidoi, AidoiStatus, Organization, OrganizationCount, Role
from .access import classify_role

OTHER_RESOURCE_TYPE = "Other"


def pending_users(users: Iterable[AdminUser]) -> list[AdminUser]:
    """Verified, unbanned users still on the plain authenticated role."""
    return [
        u for u in users
        if classify_role(u.role) is Role.AUTHENTICATED and u.verified and not u.banned
    ]


def org_admins(users: Iterable[AdminUser]) -> list[AdminUser]:
    return [u for u in users if classify_role(u.role) is Role.ORG_ADMIN]


def organization_for_admin(organizations: Iterable[Organization], admin_id: str) -> Optional[Organization]:
    for org in organizations:
        if org.admin_id == admin_id:
            return org
    return None


def users_by_role(users: Iterable[AdminUser]) -> dict[str, int]:
    counts = Counter(classify_role(u.role).value for u in users)
    return {role.value: counts.get(role.value, 0) for role in Role}


def top_organizations(
    aidois: Iterable[Aidoi],
    organizations: Iterable[Organization],
    limit: int = 10,
) -> list[OrganizationCount]:
    """Organizations ranked by AIDOI count, highest first."""
    names = {o.id: o.legal_name for o in organizations}
    counts = Counter(a.organization_id for a in aidois)

    ranked = [
        OrganizationCount(
            organization_id=org_id,
            organization_name=names.get(org_id) or org_id,
            count=count,
        )
        for org_id, count in counts.items()
    ]
    ranked.sort(key=lambda c: c.count, reverse=True)
    return ranked[:limit]


def compute_admin_stats(
    users: list[AdminUser],
    organizations: list[Organization],
    aidois: list[Aidoi],
    total_users: Optional[int] = None,
    total_organizations: Optional[int] = None,
    total_aidois: Optional[int] = None,
    top: int = 10,
) -> AdminStats:
    """
    Dashboard statistics.

    Totals default to the listing sizes; pass the backend's page totals when
    the listings are only the first page.
    """
    by_status = Counter(a.status.value for a in aidois)
    by_type = Counter(
        a.metadata.resource_type.value if a.metadata.resource_type else OTHER_RESOURCE_TYPE
        for a in aidois
    )

    return AdminStats(
        total_users=total_users if total_users is not None else len(users),
        total_organizations=total_organizations if total_organizations is not None else len(organizations),
        total_aidois=total_aidois if total_aidois is not None else len(aidois),
        active_aidois=by_status.get(AidoiStatus.ACTIVE.value, 0),
        inactive_aidois=by_status.get(AidoiStatus.INACTIVE.value, 0),
        active_organizations=sum(1 for o in organizations if o.is_active),
        pending_approvals=len(pending_users(users)),
        users_by_role=users_by_role(users),
        aidois_by_status={s.value: by_status.get(s.value, 0) for s in AidoiStatus},
        aidois_by_resource_type=dict(by_type),
        top_organizations_by_aidois=top_organizations(aidois, organizations, limit=top),
    )
