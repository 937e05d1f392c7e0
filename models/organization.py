"""
Organization - an institution that owns an AIDOI prefix.
"""

from enum import Enum
from typing import Optional
from pydantic import Field

from .base import WireModel, BaseEntity


class LegalStatus(str, Enum):
    NONPROFIT = "nonprofit"
    FORPROFIT = "forprofit"
    GOVERNMENT = "government"
    ACADEMIC = "academic"
    NGO = "ngo"
    OTHER = "other"

    @property
    def label(self) -> str:
        return LEGAL_STATUS_LABELS[self]


LEGAL_STATUS_LABELS = {
    LegalStatus.ACADEMIC: "University / Academic",
    LegalStatus.FORPROFIT: "Corporate R&D",
    LegalStatus.NONPROFIT: "Non-Profit",
    LegalStatus.GOVERNMENT: "Government",
    LegalStatus.NGO: "NGO",
    LegalStatus.OTHER: "Independent Lab / Other",
}


class PrefixStatus(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"
    RETIRED = "retired"


class Address(WireModel):
    street: str
    city: str
    state: Optional[str] = None
    postal_code: int
    country: str


class AidoiPrefix(WireModel):
    """The registry prefix every AIDOI of this organization lives under."""
    value: str
    status: PrefixStatus = PrefixStatus.ACTIVE


class Organization(BaseEntity):
    legal_name: str
    short_name: str = ""
    legal_status: LegalStatus = LegalStatus.OTHER
    address: Optional[Address] = None
    website: str = ""
    admin_id: str = ""
    tech_id: Optional[str] = None
    billing_id: Optional[str] = None
    prefix: Optional[AidoiPrefix] = None

    @property
    def is_active(self) -> bool:
        return self.prefix is not None and self.prefix.status == PrefixStatus.ACTIVE

    def full_aidoi(self, suffix: str) -> str:
        """prefix/suffix, or just the suffix while no prefix is assigned."""
        if self.prefix is None or not self.prefix.value:
            return suffix
        return f"{self.prefix.value}/{suffix}"


class OrganizationCreate(WireModel):
    legal_name: str = Field(min_length=1)
    short_name: str = Field(min_length=1)
    legal_status: LegalStatus
    address: Address
    website: str = ""


class OrganizationUpdate(WireModel):
    id: str = Field(min_length=1)
    legal_name: Optional[str] = None
    short_name: Optional[str] = None
    legal_status: Optional[LegalStatus] = None
    address: Optional[Address] = None
    website: Optional[str] = None
    admin_id: Optional[str] = None
    tech_id: Optional[str] = None
    billing_id: Optional[str] = None
    prefix: Optional[AidoiPrefix] = None
