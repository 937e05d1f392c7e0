"""
Per-user account records: profile and API keys.
"""

from datetime import datetime
from typing import Optional
from pydantic import Field

from .base import WireModel, BaseEntity


class Profile(BaseEntity):
    user_id: str
    organization_id: Optional[str] = None


class ProfileUpdate(WireModel):
    id: str = Field(min_length=1)
    organization_id: Optional[str] = None


class ApiKey(BaseEntity):
    """Only the hash is ever returned; the token is shown once at creation."""
    organization_id: str
    org_admin_id: str = ""
    key_hash: str = ""
    expires_at: Optional[datetime] = None
    rate_limit: Optional[int] = None
    is_active: bool = True


class ApiKeyCreate(WireModel):
    organization_id: str = Field(min_length=1)
    org_admin_id: Optional[str] = None


class ApiKeyToken(WireModel):
    api_key_token: str
