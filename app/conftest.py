"""
Project-wide pytest configuration.

This module tunes settings for tests, auto-marks tests by file name and
provides fixtures shared by every app. App-specific fixtures are defined in
each app's tests/conftest.py.
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken


def pytest_configure():
    from django.conf import settings

    # Use fast password hasher for tests (PBKDF2 is slow)
    settings.PASSWORD_HASHERS = [
        "django.contrib.auth.hashers.MD5PasswordHasher",
    ]

    # Test clients speak plain HTTP; the production HTTPS redirect would 301 them
    settings.SECURE_SSL_REDIRECT = False


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_views.py, test_services.py, test_tasks.py, etc. → integration
    - test_validators.py, test_keys.py, test_models.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    integration_patterns = [
        "test_views.py",
        "test_services.py",
        "test_tasks.py",
        "test_upload_orchestrator.py",
        "test_transcoder.py",
        "test_object_store.py",
    ]

    unit_patterns = [
        "test_models.py",
        "test_serializers.py",
        "test_validators.py",
        "test_keys.py",
        "test_exceptions.py",
        "test_conf.py",
    ]

    for item in items:
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration"}:
            continue

        filename = str(item.fspath).split("/")[-1]

        if any(pattern in filename for pattern in integration_patterns):
            item.add_marker(pytest.mark.integration)
        elif any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            # Default: integration (safe for Django where most tests hit DB)
            item.add_marker(pytest.mark.integration)


# =============================================================================
# Users and API Clients
# =============================================================================


def _jwt_client(user) -> APIClient:
    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


@pytest.fixture
def api_client() -> APIClient:
    """Return unauthenticated API client."""
    return APIClient()


@pytest.fixture
def user(db):
    from posts.tests.factories import UserFactory

    return UserFactory()


@pytest.fixture
def other_user(db):
    from posts.tests.factories import UserFactory

    return UserFactory()


@pytest.fixture
def staff_user(db):
    from posts.tests.factories import UserFactory

    return UserFactory(is_staff=True)


@pytest.fixture
def authenticated_client(user) -> APIClient:
    """Return API client authenticated with JWT token."""
    return _jwt_client(user)


@pytest.fixture
def other_client(other_user) -> APIClient:
    return _jwt_client(other_user)


@pytest.fixture
def staff_client(staff_user) -> APIClient:
    return _jwt_client(staff_user)
