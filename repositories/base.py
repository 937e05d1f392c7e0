"""
Repository base classes - define the interface.

The backend is the system of record; repositories are thin, typed views
of its endpoints. Failures surface to the caller as BackendError - there
is no retry layer.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar, Optional

from models import (
    AdminUser,
    Aidoi,
    AidoiCreate,
    AidoiUpdate,
    ApiKey,
    ApiKeyCreate,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    LoginRequest,
    LoginResult,
    Organization,
    OrganizationCreate,
    OrganizationUpdate,
    Page,
    Profile,
    ProfileUpdate,
    RegisterRequest,
    ResetPasswordRequest,
    UserUpdate,
    VerifyAccountRequest,
)

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 10


class BackendError(Exception):
    """The backend refused or failed a request."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def to_dict(self) -> dict:
        return {"error": self.message, "status": self.status_code}


class NotAuthenticated(BackendError):
    """401 - credential missing, expired or revoked."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, status_code=401)


class BaseRepository(ABC, Generic[T]):
    """Abstract base for backend record repositories."""

    @abstractmethod
    def get(self, id: str) -> Optional[T]:
        """Get record by ID. None if the backend has no such record."""
        pass

    @abstractmethod
    def list(self, page: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Page[T]:
        """One page of records, 0-based."""
        pass

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Delete record by ID. Returns True if deleted."""
        pass


class UserRepository(BaseRepository[AdminUser]):
    """Repository for users (admin view)."""

    @abstractmethod
    def update(self, update: UserUpdate) -> AdminUser:
        """Apply admin edits (role, ban, verification, names)."""
        pass


class OrganizationRepository(BaseRepository[Organization]):

    @abstractmethod
    def create(self, data: OrganizationCreate) -> Organization:
        pass

    @abstractmethod
    def update(self, update: OrganizationUpdate) -> Organization:
        pass


class AidoiRepository(BaseRepository[Aidoi]):
    """
    Repository for AIDOI records.

    Implementations must send freshly computed scores with every create and
    update - the backend stores them but never recomputes.
    """

    @abstractmethod
    def create(self, data: AidoiCreate) -> Aidoi:
        pass

    @abstractmethod
    def update(self, update: AidoiUpdate) -> Aidoi:
        pass


class ApiKeyRepository(ABC):

    @abstractmethod
    def list(self, page: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Page[ApiKey]:
        pass

    @abstractmethod
    def create(self, data: ApiKeyCreate) -> str:
        """Create a key. Returns the plaintext token - shown once, never again."""
        pass

    @abstractmethod
    def delete(self, id: str) -> bool:
        pass


class ProfileRepository(ABC):

    @abstractmethod
    def mine(self) -> Optional[Profile]:
        """The caller's own profile."""
        pass

    @abstractmethod
    def get(self, id: str) -> Optional[Profile]:
        pass

    @abstractmethod
    def update(self, update: ProfileUpdate) -> Profile:
        pass


class AuthGateway(ABC):
    """Account lifecycle endpoints."""

    @abstractmethod
    def login(self, request: LoginRequest) -> LoginResult:
        pass

    @abstractmethod
    def logout(self, email: str) -> None:
        pass

    @abstractmethod
    def register(self, request: RegisterRequest) -> None:
        pass

    @abstractmethod
    def verify_account(self, request: VerifyAccountRequest) -> None:
        pass

    @abstractmethod
    def forgot_password(self, request: ForgotPasswordRequest) -> None:
        pass

    @abstractmethod
    def reset_password(self, request: ResetPasswordRequest) -> None:
        pass

    @abstractmethod
    def change_password(self, request: ChangePasswordRequest) -> None:
        pass


class Repository(ABC):
    """
    Aggregate repository - provides access to all record repositories.

    This is what consumers use. Backend implementations provide
    concrete versions of each sub-repository.
    """

    @property
    @abstractmethod
    def users(self) -> UserRepository:
        pass

    @property
    @abstractmethod
    def organizations(self) -> OrganizationRepository:
        pass

    @property
    @abstractmethod
    def aidois(self) -> AidoiRepository:
        pass

    @property
    @abstractmethod
    def api_keys(self) -> ApiKeyRepository:
        pass

    @property
    @abstractmethod
    def profiles(self) -> ProfileRepository:
        pass

    @property
    @abstractmethod
    def auth(self) -> AuthGateway:
        pass
