"""
Admin dashboard statistics - computed, never stored.
"""

from pydantic import BaseModel, Field


class OrganizationCount(BaseModel):
    organization_id: str
    organization_name: str
    count: int = 0


class AdminStats(BaseModel):
    total_users: int = 0
    total_organizations: int = 0
    total_aidois: int = 0
    active_aidois: int = 0
    inactive_aidois: int = 0
    active_organizations: int = 0
    pending_approvals: int = 0

    users_by_role: dict[str, int] = Field(default_factory=dict)
    aidois_by_status: dict[str, int] = Field(default_factory=dict)
    aidois_by_resource_type: dict[str, int] = Field(default_factory=dict)
    top_organizations_by_aidois: list[OrganizationCount] = Field(default_factory=list)
