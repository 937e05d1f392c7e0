"""
Base entity classes.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class WireModel(BaseModel):
    """Base for every shape exchanged with the backend."""
    model_config = ConfigDict(
        extra="ignore",  # Backend may add fields before we know about them
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    def to_payload(self) -> dict:
        """Request body form - unset optionals are left out."""
        return self.model_dump(mode="json", exclude_none=True)


class AuditMixin(WireModel):
    """Audit fields stamped by the backend on every record."""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: str = ""
    updated_by: str = ""


class BaseEntity(AuditMixin):
    """
    Base for all backend records.

    The backend owns identity and audit fields; we only carry them.
    """
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(min_length=1)
