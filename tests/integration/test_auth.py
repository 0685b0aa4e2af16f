"""Integration tests for JWT authentication on catalog writes.

Validates:
  - /health is public (plain Django view, no DRF).
  - Catalog writes return 401 without a token, with an invalid token,
    or with a malformed Authorization header.
  - A SimpleJWT access token for an Admin user can write.
"""

import pytest
from django.contrib.auth.models import Group

from rest_framework_simplejwt.tokens import RefreshToken

from modules.core.permissions import ADMIN_ROLE

pytestmark = pytest.mark.integration

URL = "/api/products"
PAYLOAD = {"name": "Token Product", "quantity": 1, "price": "9.90"}


class TestPublicEndpoints:
    def test_health_is_public(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestProtectedEndpoints:
    """Catalog writes require a valid JWT (Fail Closed)."""

    def test_no_token_returns_401(self, api_client):
        response = api_client.post(URL, PAYLOAD, format="json")
        assert response.status_code == 401

    def test_invalid_token_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer invalid.token.here")
        response = api_client.post(URL, PAYLOAD, format="json")
        assert response.status_code == 401

    def test_malformed_auth_header_returns_401(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Token some-token")
        response = api_client.post(URL, PAYLOAD, format="json")
        assert response.status_code == 401

    def test_401_includes_www_authenticate_header(self, api_client):
        response = api_client.post(URL, PAYLOAD, format="json")
        assert response.status_code == 401
        assert "Bearer" in response.get("WWW-Authenticate", "")


class TestSimpleJWT:
    def test_admin_token_can_create(self, api_client, django_user_model):
        user = django_user_model.objects.create_user(
            username="jwt-admin", password="testpass123"
        )
        user.groups.add(Group.objects.create(name=ADMIN_ROLE))
        access = str(RefreshToken.for_user(user).access_token)
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {access}")

        response = api_client.post(URL, PAYLOAD, format="json")

        assert response.status_code == 200
        assert response.data["flag"] is True

    def test_token_endpoint_issues_pair(self, api_client, django_user_model):
        django_user_model.objects.create_user(username="login", password="testpass123")
        response = api_client.post(
            "/api/auth/token/",
            {"username": "login", "password": "testpass123"},
            format="json",
        )
        assert response.status_code == 200
        assert "access" in response.data
        assert "refresh" in response.data
