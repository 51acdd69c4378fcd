"""Unit tests for role resolution and the role guard."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser, Group

from modules.core.authentication import AUTH0_ROLES_CLAIM, Auth0User
from modules.core.permissions import HasAnyRole, Role, roles_required, user_roles

pytestmark = pytest.mark.unit

User = get_user_model()


def _request(user):
    return SimpleNamespace(user=user)


class TestUserRoles:
    def test_anonymous_has_no_roles(self):
        assert user_roles(AnonymousUser()) == frozenset()

    def test_superuser_is_admin(self):
        user = User.objects.create_superuser("root", password="x")
        assert Role.ADMIN in user_roles(user)

    def test_group_membership(self):
        user = User.objects.create_user("ana", password="x")
        user.groups.add(Group.objects.create(name="ROLE_USER"))
        user.groups.add(Group.objects.create(name="marketing"))
        assert user_roles(user) == frozenset({Role.USER})

    def test_auth0_claim(self):
        user = Auth0User({"sub": "auth0|1", AUTH0_ROLES_CLAIM: ["ROLE_ADMIN", "ROLE_X"]})
        assert user_roles(user) == frozenset({Role.ADMIN})

    def test_auth0_claim_as_string(self):
        user = Auth0User({"sub": "auth0|1", AUTH0_ROLES_CLAIM: "ROLE_USER"})
        assert user_roles(user) == frozenset({Role.USER})


class TestRolesRequired:
    def test_builds_bound_subclass(self):
        permission = roles_required(Role.ADMIN, Role.USER)
        assert issubclass(permission, HasAnyRole)
        assert permission.allowed_roles == frozenset({Role.ADMIN, Role.USER})
        assert permission.__name__ == "HasAdminOrUserRole"

    def test_grants_matching_role(self):
        permission = roles_required(Role.ADMIN)()
        user = Auth0User({"sub": "a", AUTH0_ROLES_CLAIM: ["ROLE_ADMIN"]})
        assert permission.has_permission(_request(user), view=None) is True

    def test_denies_other_role(self):
        permission = roles_required(Role.ADMIN)()
        user = Auth0User({"sub": "u", AUTH0_ROLES_CLAIM: ["ROLE_USER"]})
        assert permission.has_permission(_request(user), view=None) is False

    def test_denies_anonymous(self):
        permission = roles_required(Role.ADMIN, Role.USER)()
        assert permission.has_permission(_request(AnonymousUser()), view=None) is False
