"""
Users, roles and credentials.
"""

from enum import Enum
from typing import Optional
from pydantic import Field, StrictBool

from .base import WireModel

ORG_ADMIN_ROLE_NAME = "OrgAdmin"


class Role(str, Enum):
    """
    The closed set of role classifications.

    The wire form (UserRole) is a loose bag of optional fields; everything
    that reads it classifies into exactly one of these.
    """
    ADMIN = "admin"
    ORG_ADMIN = "orgAdmin"
    AUTHENTICATED = "authenticated"

    @property
    def label(self) -> str:
        return _ROLE_LABELS[self]

    @property
    def is_admin(self) -> bool:
        return self is Role.ADMIN

    def to_user_role(self) -> "UserRole":
        """Wire form the backend expects when assigning this role."""
        if self is Role.ADMIN:
            return UserRole(admin=True)
        if self is Role.ORG_ADMIN:
            return UserRole(other=ORG_ADMIN_ROLE_NAME)
        return UserRole(authenticated=True)


_ROLE_LABELS = {
    Role.ADMIN: "Admin",
    Role.ORG_ADMIN: "Org Admin",
    Role.AUTHENTICATED: "Authenticated",
}


class UserRole(WireModel):
    """Role as the backend sends it: {admin?, authenticated?, other?}."""
    admin: Optional[StrictBool] = None
    authenticated: Optional[StrictBool] = None
    other: Optional[str] = None


class Claims(WireModel):
    """Claims payload carried in the auth token."""
    user_id: str = ""
    user_role: UserRole = Field(default_factory=UserRole)
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    exp: Optional[int] = None
    api_key: Optional[str] = None


class User(WireModel):
    """The signed-in user as returned by /login."""
    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    role: UserRole = Field(default_factory=UserRole)
    is_active: bool = True

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class AdminUser(WireModel):
    """Full user record as returned by GET /user (backend UserResponseDto)."""
    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    verified: bool = False
    role: UserRole = Field(default_factory=UserRole)
    reset_pwd_token: Optional[str] = None
    reset_pwd_count: int = 0
    activation_token: Optional[str] = None
    activation_count: int = 0
    is_logged_out: bool = False
    banned: bool = False

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class UserUpdate(WireModel):
    """Admin-only user edits. Unset fields are left untouched."""
    id: str = Field(min_length=1)
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[UserRole] = None
    verified: Optional[bool] = None
    banned: Optional[bool] = None


class LoginRequest(WireModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RegisterRequest(WireModel):
    email: str = Field(min_length=1)
    first_name: str = ""
    last_name: str = ""
    password: str = Field(min_length=1)

    @classmethod
    def from_full_name(cls, full_name: str, **kwargs) -> "RegisterRequest":
        """Split "First Middle Last" into first + rest, like the sign-up form."""
        parts = full_name.split()
        first = parts[0] if parts else ""
        last = " ".join(parts[1:])
        return cls(first_name=first, last_name=last, **kwargs)


class VerifyAccountRequest(WireModel):
    email: str = Field(min_length=1)
    token: str = Field(min_length=1)


class ForgotPasswordRequest(WireModel):
    email: str = Field(min_length=1)


class ResetPasswordRequest(WireModel):
    email: str = Field(min_length=1)
    token: str = Field(min_length=1)
    new_password: str = Field(min_length=1)


class ChangePasswordRequest(WireModel):
    old_pwd: str = Field(min_length=1)
    new_pwd: str = Field(min_length=1)


class LoginResult(WireModel):
    """A successful login: the user plus the token from x-auth-token."""
    user: User
    token: str = ""
    refresh_token: Optional[str] = None
