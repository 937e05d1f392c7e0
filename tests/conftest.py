"""
Root test configuration.

Test organization:
- unit/        Fast, isolated, no I/O - models and registry logic
- integration/ Component boundaries - Flask test client, REST backend
               against a mocked requests.Session

Run specific levels:
    pytest tests/unit -v           # Fast feedback loop
    pytest tests/integration -v    # Before commit
    pytest tests -v                # Everything
"""

import sys
import time
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from jose import jwt

from models.rubric import SECTIONS

TEST_SECRET = "test-secret-not-verified-client-side"


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast isolated tests")
    config.addinivalue_line("markers", "integration: Component boundary tests")
    config.addinivalue_line("markers", "slow: Tests that take > 1s")


def _mint_token(user_role=None, **claims) -> str:
    """Signed token carrying the given role - signature is irrelevant to the portal."""
    payload = {
        "user_id": "user-1",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.org",
        "exp": 4102444800,  # 2100-01-01
    }
    payload.update(claims)
    payload["user_role"] = {} if user_role is None else user_role
    return jwt.encode(payload, TEST_SECRET, algorithm="HS256")


@pytest.fixture
def mint_token():
    """Factory: mint_token({"admin": True}, email=...) -> token."""
    return _mint_token


@pytest.fixture
def admin_token():
    return _mint_token({"admin": True})


@pytest.fixture
def org_admin_token():
    return _mint_token({"other": "OrgAdmin"})


@pytest.fixture
def user_token():
    return _mint_token({"authenticated": True})


# === Rubric answer sets ===

def answers_for(**per_section) -> dict:
    """Build a full answer set: section key -> value used for all its items."""
    answers = {}
    for section in SECTIONS:
        value = per_section.get(section.key)
        for name in section.field_names:
            answers[name] = value
    return answers


@pytest.fixture
def lowest_answers():
    return answers_for(b="d", c="no", d="not", e="no", f="no")


@pytest.fixture
def highest_answers():
    return answers_for(b="a", c="yes", d="fully", e="yes", f="yes")


@pytest.fixture
def middle_answers():
    return answers_for(b="b", c="partial", d="partial", e="partial", f="partial")


@pytest.fixture
def scenario_answers():
    """24 + 20 + 15 + 9 + 0 = 68, in the older capitalized spelling."""
    return answers_for(b="B", c="Yes", d="Fully", e="Partial", f="No")


@pytest.fixture
def make_answers():
    """Factory: make_answers(b="a", c="yes", ...) -> full answer dict."""
    return answers_for


# === Timing ===

@pytest.fixture
def benchmark(request):
    """
    Time repeated calls of a function; returns the last result.

        results = benchmark(score, answers, rounds=1000)

    Per-call time is printed (visible with pytest -s).
    """
    def run(fn, *args, rounds=1, **kwargs):
        started = time.perf_counter()
        for _ in range(rounds):
            result = fn(*args, **kwargs)
        per_call = (time.perf_counter() - started) / rounds
        print(f"\n  [{request.node.name}] {per_call * 1e6:.1f}us/call over {rounds}")
        return result

    return run
