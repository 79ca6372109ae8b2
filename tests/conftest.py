# Test configuration

import os

import pytest

# Never reach out to a real pattern registry from the test suite
os.environ.setdefault("PATTERN_REGISTRY_ENABLED", "false")

from validation_builder.session import BuilderSession, reset_session  # noqa: E402


@pytest.fixture(autouse=True)
def fresh_global_session():
    """Each test starts with no global session."""
    reset_session()
    yield
    reset_session()


@pytest.fixture
def session():
    """Standalone session with the default type name."""
    return BuilderSession(type_name="MyDto")


@pytest.fixture
def user_sample():
    """Sample document covering nesting, arrays and object types."""
    return {
        "id": "u-1",
        "profile": {"age": 31, "active": True, "nickname": None},
        "permissions": ["read", "write"],
        "roles": [
            {"name": "admin", "level": 3, "scopes": ["all"]},
            {"name": "viewer", "level": 1, "scopes": []},
        ],
        "audit": {
            "history": [
                {"action": "create", "at": "2024-01-01", "meta": {"ip": "10.0.0.1"}},
            ],
        },
        "attachments": [],
    }
