"""Unit tests for the Auth0 bearer-token backend."""

from __future__ import annotations

from unittest.mock import patch

import jwt as pyjwt
import pytest
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.test import APIRequestFactory

from modules.core.authentication import Auth0JSONWebTokenAuthentication, Auth0User

pytestmark = pytest.mark.unit

SIGNING_KEY = "unit-test-signing-key-with-enough-bytes-0123456789"


def _token(**claims) -> str:
    return pyjwt.encode(claims, SIGNING_KEY, algorithm="HS256")


def _request(authorization=None):
    extra = {"HTTP_AUTHORIZATION": authorization} if authorization else {}
    return APIRequestFactory().post("/api/products", **extra)


@pytest.fixture()
def auth0_settings(settings):
    settings.AUTH0_DOMAIN = "tenant.example.com"
    settings.AUTH0_AUDIENCE = "product-api"
    return settings


class TestAuthenticate:
    def test_no_header_is_anonymous(self):
        assert Auth0JSONWebTokenAuthentication().authenticate(_request()) is None

    def test_malformed_header(self):
        with pytest.raises(AuthenticationFailed):
            Auth0JSONWebTokenAuthentication().authenticate(_request("Token abc def"))

    def test_disabled_without_tenant(self, settings):
        settings.AUTH0_DOMAIN = ""
        token = _token(iss="https://tenant.example.com/")
        request = _request(f"Bearer {token}")
        assert Auth0JSONWebTokenAuthentication().authenticate(request) is None

    def test_foreign_issuer_left_to_next_backend(self, auth0_settings):
        request = _request(f"Bearer {_token(iss='https://elsewhere/')}")
        assert Auth0JSONWebTokenAuthentication().authenticate(request) is None

    def test_tenant_token_yields_auth0_user(self, auth0_settings):
        token = _token(iss="https://tenant.example.com/")
        claims = {"sub": "auth0|42", "roles": ["Admin"]}

        with patch.object(
            Auth0JSONWebTokenAuthentication, "verify", return_value=claims
        ):
            user, raw = Auth0JSONWebTokenAuthentication().authenticate(
                _request(f"Bearer {token}")
            )

        assert raw == token
        assert user.sub == "auth0|42"
        assert user.has_role("Admin")

    def test_rejected_signature_is_401(self, auth0_settings):
        token = _token(iss="https://tenant.example.com/")
        with patch(
            "modules.core.authentication._jwks_client",
            side_effect=pyjwt.PyJWKClientError("unreachable"),
        ):
            with pytest.raises(AuthenticationFailed):
                Auth0JSONWebTokenAuthentication().authenticate(
                    _request(f"Bearer {token}")
                )


class TestAuth0User:
    def test_custom_roles_claim(self, settings):
        settings.AUTH0_ROLES_CLAIM = "https://shop/roles"
        user = Auth0User({"sub": "auth0|7", "https://shop/roles": ["Admin"]})
        assert user.roles == ["Admin"]
        assert user.has_role("Admin")

    def test_not_staff(self):
        assert Auth0User({"sub": "auth0|8"}).is_staff is False
