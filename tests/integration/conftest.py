"""
Integration test fixtures.

Integration tests:
- Test component boundaries
- Drive the Flask app through its test client
- Back it with an in-memory repository, never the network
- Should be deterministic
"""

import pytest

from app import create_app
from config import PortalConfig
from models import (
    AdminUser,
    Aidoi,
    ApiKey,
    LoginResult,
    Organization,
    Page,
    Profile,
    User,
)
from repositories import BackendError, NotAuthenticated
from repositories.base import (
    AidoiRepository,
    ApiKeyRepository,
    AuthGateway,
    OrganizationRepository,
    ProfileRepository,
    Repository,
    UserRepository,
)


class _Store:
    """Dict-backed record store shared by the fake repositories."""

    def __init__(self):
        self.records = {}

    def get(self, id):
        return self.records.get(id)

    def list(self, page=0, limit=10):
        values = list(self.records.values())
        chunk = values[page * limit:(page + 1) * limit]
        return Page(
            records=chunk,
            has_next=(page + 1) * limit < len(values),
            current_page=page,
            total=len(values),
        )

    def delete(self, id):
        return self.records.pop(id, None) is not None

    def put(self, record):
        self.records[record.id] = record
        return record

    def apply(self, update):
        """Merge the set fields of an *Update model into the stored record."""
        existing = self.records.get(update.id)
        if existing is None:
            raise BackendError("Record not found", status_code=404)
        changes = update.model_dump(exclude_none=True)
        merged = existing.model_validate({**existing.model_dump(), **changes})
        return self.put(merged)


class FakeUsers(_Store, UserRepository):

    def update(self, update):
        self.last_update = update
        return self.apply(update)


class FakeOrganizations(_Store, OrganizationRepository):

    def create(self, data):
        org = Organization(id=f"org-{len(self.records) + 1}", **data.model_dump())
        return self.put(org)

    def update(self, update):
        return self.apply(update)


class FakeAidois(_Store, AidoiRepository):

    def __init__(self):
        super().__init__()
        self.last_create = None

    def create(self, data):
        self.last_create = data
        payload = data.to_payload()
        return self.put(Aidoi(id=f"aidoi-{len(self.records) + 1}", **payload))

    def update(self, update):
        self.last_update = update
        existing = self.records.get(update.id)
        if existing is None:
            raise BackendError("Record not found", status_code=404)
        changes = {k: v for k, v in update.to_payload().items() if k != "id"}
        merged = Aidoi.model_validate({**existing.model_dump(mode="json"), **changes})
        return self.put(merged)


class FakeApiKeys(_Store, ApiKeyRepository):

    def create(self, data):
        key = ApiKey(id=f"key-{len(self.records) + 1}", organization_id=data.organization_id, key_hash="hash")
        self.put(key)
        return f"plain-{key.id}"


class FakeProfiles(ProfileRepository):

    def __init__(self):
        self.profile = None

    def mine(self):
        return self.profile

    def get(self, id):
        if self.profile is not None and self.profile.id == id:
            return self.profile
        return None

    def update(self, update):
        self.profile = self.profile.model_copy(update={"organization_id": update.organization_id})
        return self.profile


class FakeAuth(AuthGateway):

    def __init__(self):
        self.tokens = {}           # email -> token handed out on login
        self.logout_error = None
        self.calls = []

    def login(self, request):
        self.calls.append(("login", request))
        token = self.tokens.get(request.email)
        if token is None:
            raise NotAuthenticated("Invalid credentials")
        return LoginResult(user=User(id="user-1", email=request.email), token=token)

    def logout(self, email):
        self.calls.append(("logout", email))
        if self.logout_error is not None:
            raise self.logout_error

    def register(self, request):
        self.calls.append(("register", request))

    def verify_account(self, request):
        self.calls.append(("verify_account", request))

    def forgot_password(self, request):
        self.calls.append(("forgot_password", request))

    def reset_password(self, request):
        self.calls.append(("reset_password", request))

    def change_password(self, request):
        self.calls.append(("change_password", request))


class FakeRepository(Repository):
    """In-memory stand-in for the registry backend."""

    def __init__(self):
        self._users = FakeUsers()
        self._organizations = FakeOrganizations()
        self._aidois = FakeAidois()
        self._api_keys = FakeApiKeys()
        self._profiles = FakeProfiles()
        self._auth = FakeAuth()
        self.tokens_seen = []

    @property
    def users(self):
        return self._users

    @property
    def organizations(self):
        return self._organizations

    @property
    def aidois(self):
        return self._aidois

    @property
    def api_keys(self):
        return self._api_keys

    @property
    def profiles(self):
        return self._profiles

    @property
    def auth(self):
        return self._auth


@pytest.fixture
def fake_repo():
    return FakeRepository()


@pytest.fixture
def portal_config():
    return PortalConfig(api_base_url="http://backend.test/api", token_cookie="aidoi_token")


@pytest.fixture
def app(fake_repo, portal_config):
    def factory(token):
        fake_repo.tokens_seen.append(token)
        return fake_repo

    flask_app = create_app(portal_config, repository_factory=factory)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def as_admin(admin_token):
    return bearer(admin_token)


@pytest.fixture
def as_org_admin(org_admin_token):
    return bearer(org_admin_token)


@pytest.fixture
def as_user(user_token):
    return bearer(user_token)


@pytest.fixture
def seeded(fake_repo):
    """A small registry: users in every state, two organizations, three AIDOIs."""
    users = [
        AdminUser(id="u-admin", email="root@example.org", role={"admin": True}, verified=True),
        AdminUser(id="u-oa", email="oa@example.org", first_name="Olive", role={"other": "OrgAdmin"}, verified=True),
        AdminUser(id="u-wait", email="wait@example.org", first_name="Walt", verified=True),
        AdminUser(id="u-new", email="new@example.org", verified=False),
        AdminUser(id="u-ban", email="ban@example.org", verified=True, banned=True),
    ]
    for user in users:
        fake_repo.users.put(user)

    fake_repo.organizations.put(Organization(
        id="org-a", legal_name="Alpha Institute", admin_id="u-oa",
        prefix={"value": "10.1111", "status": "active"},
    ))
    fake_repo.organizations.put(Organization(id="org-b", legal_name="Beta Lab"))

    for i, org_id in enumerate(["org-a", "org-a", "org-b"], start=1):
        fake_repo.aidois.put(Aidoi(
            id=f"aidoi-{i}",
            organization_id=org_id,
            suffix=f"object-{i}",
            metadata={"title": f"Object {i}", "resource_type": "dataset"},
        ))

    fake_repo.profiles.profile = Profile(id="p-1", user_id="user-1", organization_id="org-a")
    return fake_repo
