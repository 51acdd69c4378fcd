"""Integration tests for JWT authentication.

Validates:
  - /health is public (plain Django view, no DRF).
  - /api/me returns 401 without, or with an invalid, token.
  - A SimpleJWT token obtained from /api/auth/token authenticates and
    carries the user's roles.
"""

import pytest

from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group

pytestmark = pytest.mark.integration

User = get_user_model()


class TestPublicEndpoints:
    def test_health_is_public(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["services"]["database"]["status"] == "up"


class TestProtectedEndpoints:
    def test_no_token_returns_401(self, api_client):
        response = api_client.get("/api/me")
        assert response.status_code == 401

    def test_invalid_token_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer invalid.token.here")
        response = api_client.get("/api/me")
        assert response.status_code == 401

    def test_malformed_auth_header_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Token some-token")
        response = api_client.get("/api/me")
        assert response.status_code == 401

    def test_empty_bearer_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer ")
        response = api_client.get("/api/me")
        assert response.status_code == 401

    def test_401_includes_www_authenticate_header(self, api_client):
        response = api_client.get("/api/me")
        assert response.status_code == 401
        assert "Bearer" in response.get("WWW-Authenticate", "")

    def test_401_body_uses_mensaje_key(self, api_client):
        response = api_client.get("/api/me")
        assert "mensaje" in response.json()


class TestTokenFlow:
    def test_obtained_token_authenticates_with_roles(self, api_client):
        user = User.objects.create_user(username="jwtadmin", password="testpass123")
        user.groups.add(Group.objects.create(name="ROLE_ADMIN"))

        token = api_client.post(
            "/api/auth/token",
            {"username": "jwtadmin", "password": "testpass123"},
            format="json",
        )
        assert token.status_code == 200

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {token.json()['access']}")
        response = api_client.get("/api/me")
        assert response.status_code == 200
        assert response.json() == {"user": "jwtadmin", "roles": ["ROLE_ADMIN"]}

    def test_token_grants_admin_operations(self, api_client):
        user = User.objects.create_user(username="jwtadmin2", password="testpass123")
        user.groups.add(Group.objects.create(name="ROLE_ADMIN"))
        access = api_client.post(
            "/api/auth/token",
            {"username": "jwtadmin2", "password": "testpass123"},
            format="json",
        ).json()["access"]

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")
        response = api_client.post(
            "/api/clientes", {"name": "Ana", "email": "ana@x.com"}, format="json"
        )
        assert response.status_code == 201
