"""
Unit test fixtures.

All unit tests should be:
- Fast (< 100ms)
- Isolated (no network, no files)
- Deterministic (same result every time)

Rubric answer sets live in the root conftest; integration tests use them too.
"""

import pytest


@pytest.fixture
def admin_user_data():
    """Raw GET /user record."""
    return {
        "id": "u-1",
        "email": "grace@example.org",
        "first_name": "Grace",
        "last_name": "Hopper",
        "verified": True,
        "role": {"authenticated": True},
        "reset_pwd_count": 0,
        "activation_count": 1,
        "is_logged_out": False,
        "banned": False,
    }


@pytest.fixture
def organization_data():
    return {
        "id": "org-1",
        "legal_name": "Analytical Engines Ltd",
        "short_name": "AEL",
        "legal_status": "academic",
        "address": {
            "street": "1 Babbage Way",
            "city": "London",
            "postal_code": 12345,
            "country": "UK",
        },
        "website": "https://ael.example.org",
        "admin_id": "u-2",
        "prefix": {"value": "10.5555", "status": "active"},
        "created_at": "2025-01-15T12:00:00Z",
        "updated_at": "2025-01-15T12:00:00Z",
        "created_by": "u-2",
        "updated_by": "u-2",
    }
