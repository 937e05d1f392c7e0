"""
REST backend - the AIDOI registry API over HTTP.

Every reply is wrapped as {success, message, data}; list endpoints take
0-based page/limit and return {records, has_next, current_page, total}.
The caller's credential travels as `Authorization: Bearer <token>`.
"""

import logging
from typing import Any, Optional

import requests

from models import (
    AdminUser,
    Aidoi,
    AidoiCreate,
    AidoiUpdate,
    ApiKey,
    ApiKeyCreate,
    ApiKeyToken,
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
from .base import (
    DEFAULT_PAGE_SIZE,
    AidoiRepository,
    ApiKeyRepository,
    AuthGateway,
    BackendError,
    NotAuthenticated,
    OrganizationRepository,
    ProfileRepository,
    Repository,
    UserRepository,
)

logger = logging.getLogger(__name__)

AUTH_TOKEN_HEADER = "x-auth-token"


class ApiClient:
    """Thin requests wrapper: base URL, bearer token, timeout, error mapping."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> dict:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def request(self, method: str, path: str, params: dict = None, json: Any = None) -> requests.Response:
        """Send a request; HTTP errors come back as BackendError."""
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise BackendError(f"Backend unreachable: {e}", status_code=502) from e

        if resp.status_code >= 400:
            message = _error_message(resp)
            logger.warning("%s %s -> %s: %s", method, path, resp.status_code, message)
            if resp.status_code == 401:
                raise NotAuthenticated(message)
            raise BackendError(message, status_code=resp.status_code)

        return resp

    def call(self, method: str, path: str, params: dict = None, json: Any = None) -> Any:
        """Send a request and unwrap the {success, message, data} envelope."""
        body = _json_body(self.request(method, path, params=params, json=json))
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body


def _json_body(resp: requests.Response) -> Any:
    if not resp.content:
        return None
    try:
        return resp.json()
    except ValueError as e:
        raise BackendError(f"Backend sent invalid JSON: {e}", status_code=502) from e


def _error_message(resp: requests.Response) -> str:
    """Backend's own message when it sent one, else the HTTP reason."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return resp.reason or f"HTTP {resp.status_code}"


def _page_params(page: int, limit: int) -> dict:
    return {"page": page, "limit": limit}


class _RestResource:
    """Shared get/list/delete for /{resource} and /{resource}/{id}."""

    path: str = ""
    model: type = None

    def __init__(self, client: ApiClient):
        self._client = client

    def get(self, id: str):
        try:
            data = self._client.call("GET", f"{self.path}/{id}")
        except BackendError as e:
            if e.status_code == 404:
                return None
            raise
        if data is None:
            return None
        return self.model.model_validate(data)

    def list(self, page: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Page:
        data = self._client.call("GET", self.path, params=_page_params(page, limit))
        return Page[self.model].model_validate(data or {})

    def delete(self, id: str) -> bool:
        try:
            self._client.call("DELETE", f"{self.path}/{id}")
        except BackendError as e:
            if e.status_code == 404:
                return False
            raise
        return True


class RestUserRepository(_RestResource, UserRepository):
    path = "/user"
    model = AdminUser

    def update(self, update: UserUpdate) -> AdminUser:
        data = self._client.call("PUT", self.path, json=update.to_payload())
        return AdminUser.model_validate(data)

    def delete(self, id: str) -> bool:
        # Users are deleted by body, not by path
        try:
            self._client.call("DELETE", self.path, json={"user_id": id})
        except BackendError as e:
            if e.status_code == 404:
                return False
            raise
        return True


class RestOrganizationRepository(_RestResource, OrganizationRepository):
    path = "/organization"
    model = Organization

    def create(self, data: OrganizationCreate) -> Organization:
        return Organization.model_validate(self._client.call("POST", self.path, json=data.to_payload()))

    def update(self, update: OrganizationUpdate) -> Organization:
        return Organization.model_validate(self._client.call("PUT", self.path, json=update.to_payload()))


class RestAidoiRepository(_RestResource, AidoiRepository):
    path = "/aidoi"
    model = Aidoi

    def create(self, data: AidoiCreate) -> Aidoi:
        data.metadata.refresh_scores()
        return Aidoi.model_validate(self._client.call("POST", self.path, json=data.to_payload()))

    def update(self, update: AidoiUpdate) -> Aidoi:
        if update.metadata is not None:
            update.metadata.refresh_scores()
        return Aidoi.model_validate(self._client.call("PUT", self.path, json=update.to_payload()))


class RestApiKeyRepository(ApiKeyRepository):
    path = "/api-key"

    def __init__(self, client: ApiClient):
        self._client = client

    def list(self, page: int = 0, limit: int = DEFAULT_PAGE_SIZE) -> Page[ApiKey]:
        data = self._client.call("GET", self.path, params=_page_params(page, limit))
        return Page[ApiKey].model_validate(data or {})

    def create(self, data: ApiKeyCreate) -> str:
        created = self._client.call("POST", self.path, json=data.to_payload())
        return ApiKeyToken.model_validate(created).api_key_token

    def delete(self, id: str) -> bool:
        try:
            self._client.call("DELETE", f"{self.path}/{id}")
        except BackendError as e:
            if e.status_code == 404:
                return False
            raise
        return True


class RestProfileRepository(ProfileRepository):
    path = "/profile"

    def __init__(self, client: ApiClient):
        self._client = client

    def mine(self) -> Optional[Profile]:
        # Backend scopes /profile listings to the caller
        data = self._client.call("GET", self.path, params=_page_params(0, 1))
        page = Page[Profile].model_validate(data or {})
        return page.records[0] if page.records else None

    def get(self, id: str) -> Optional[Profile]:
        try:
            data = self._client.call("GET", f"{self.path}/{id}")
        except BackendError as e:
            if e.status_code == 404:
                return None
            raise
        return Profile.model_validate(data) if data else None

    def update(self, update: ProfileUpdate) -> Profile:
        return Profile.model_validate(self._client.call("PUT", self.path, json=update.to_payload()))


class RestAuthGateway(AuthGateway):

    def __init__(self, client: ApiClient):
        self._client = client

    def login(self, request: LoginRequest) -> LoginResult:
        resp = self._client.request("POST", "/login", json=request.to_payload())
        body = _json_body(resp) or {}
        token = resp.headers.get(AUTH_TOKEN_HEADER, "")
        if not token:
            raise BackendError("Login response carried no token", status_code=502)
        return LoginResult(user=body.get("user") or {}, token=token, refresh_token=body.get("refresh_token"))

    def logout(self, email: str) -> None:
        self._client.call("POST", "/logout", json={"email": email})

    def register(self, request: RegisterRequest) -> None:
        self._client.call("POST", "/register", json=request.to_payload())

    def verify_account(self, request: VerifyAccountRequest) -> None:
        self._client.call("POST", "/activate-account", json=request.to_payload())

    def forgot_password(self, request: ForgotPasswordRequest) -> None:
        self._client.call("POST", "/forgot-password", json=request.to_payload())

    def reset_password(self, request: ResetPasswordRequest) -> None:
        self._client.call("POST", "/reset-password", json=request.to_payload())

    def change_password(self, request: ChangePasswordRequest) -> None:
        self._client.call("POST", "/change-pwd", json=request.to_payload())


class RestRepository(Repository):
    """REST backend implementation, bound to one caller's credential."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.client = ApiClient(base_url, token=token, timeout=timeout, session=session)
        self._users = RestUserRepository(self.client)
        self._organizations = RestOrganizationRepository(self.client)
        self._aidois = RestAidoiRepository(self.client)
        self._api_keys = RestApiKeyRepository(self.client)
        self._profiles = RestProfileRepository(self.client)
        self._auth = RestAuthGateway(self.client)

    @property
    def users(self) -> UserRepository:
        return self._users

    @property
    def organizations(self) -> OrganizationRepository:
        return self._organizations

    @property
    def aidois(self) -> AidoiRepository:
        return self._aidois

    @property
    def api_keys(self) -> ApiKeyRepository:
        return self._api_keys

    @property
    def profiles(self) -> ProfileRepository:
        return self._profiles

    @property
    def auth(self) -> AuthGateway:
        return self._auth
