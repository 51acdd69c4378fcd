"""Shared pytest fixtures.

Every test gets database access; API clients are provided per role.
"""

from __future__ import annotations

import pytest

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group

from rest_framework.test import APIClient

from modules.core.permissions import Role

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db) -> None:
    """Enable DB access for every test."""


@pytest.fixture()
def api_client() -> APIClient:
    """Anonymous API client."""
    return APIClient()


def make_user(username: str, *roles: Role):
    user = User.objects.create_user(username=username, password="testpass123")
    for role in roles:
        group, _ = Group.objects.get_or_create(name=role.value)
        user.groups.add(group)
    return user


def _client_for(user) -> APIClient:
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def admin_api_client() -> APIClient:
    """Client authenticated as a ROLE_ADMIN user."""
    return _client_for(make_user("admin-test", Role.ADMIN))


@pytest.fixture()
def user_api_client() -> APIClient:
    """Client authenticated as a ROLE_USER user."""
    return _client_for(make_user("user-test", Role.USER))


@pytest.fixture()
def no_role_api_client() -> APIClient:
    """Client authenticated as a user without any role."""
    return _client_for(make_user("norole-test"))
