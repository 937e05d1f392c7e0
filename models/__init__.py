"""
Domain models - single source of truth for every backend shape.

Design principles:
- Every wire shape defined once
- Field names match the backend exactly
- Validation at the boundary
- Unknown backend fields are ignored, not rejected
"""

from .base import WireModel, AuditMixin, BaseEntity
from .rubric import (
    RubricAnswer,
    StageLevel,
    YesPartialNo,
    FullyPartialNot,
    RubricSection,
    SECTIONS,
    RUBRIC_FIELDS,
    MAX_TOTAL,
)
from .aidoi import (
    Aidoi,
    AidoiAuthor,
    AidoiCreate,
    AidoiMetadata,
    AidoiMinted,
    AidoiResourceType,
    AidoiStatus,
    AidoiUpdate,
)
from .auth import (
    Role,
    UserRole,
    Claims,
    User,
    AdminUser,
    UserUpdate,
    LoginRequest,
    LoginResult,
    RegisterRequest,
    VerifyAccountRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    ChangePasswordRequest,
)
from .organization import (
    Address,
    AidoiPrefix,
    LegalStatus,
    Organization,
    OrganizationCreate,
    OrganizationUpdate,
    PrefixStatus,
)
from .account import Profile, ProfileUpdate, ApiKey, ApiKeyCreate, ApiKeyToken
from .common import ApiResponse, Page
from .stats import AdminStats, OrganizationCount

__all__ = [
    # Base
    "WireModel",
    "AuditMixin",
    "BaseEntity",
    # Rubric
    "RubricAnswer",
    "StageLevel",
    "YesPartialNo",
    "FullyPartialNot",
    "RubricSection",
    "SECTIONS",
    "RUBRIC_FIELDS",
    "MAX_TOTAL",
    # AIDOI
    "Aidoi",
    "AidoiAuthor",
    "AidoiCreate",
    "AidoiMetadata",
    "AidoiMinted",
    "AidoiResourceType",
    "AidoiStatus",
    "AidoiUpdate",
    # Auth
    "Role",
    "UserRole",
    "Claims",
    "User",
    "AdminUser",
    "UserUpdate",
    "LoginRequest",
    "LoginResult",
    "RegisterRequest",
    "VerifyAccountRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "ChangePasswordRequest",
    # Organization
    "Address",
    "AidoiPrefix",
    "LegalStatus",
    "Organization",
    "OrganizationCreate",
    "OrganizationUpdate",
    "PrefixStatus",
    # Account
    "Profile",
    "ProfileUpdate",
    "ApiKey",
    "ApiKeyCreate",
    "ApiKeyToken",
    # Envelopes
    "ApiResponse",
    "Page",
    # Stats
    "AdminStats",
    "OrganizationCount",
]
