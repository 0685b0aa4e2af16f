"""Bearer-token authentication against an Auth0 tenant.

Catalog writes are gated on the ``Admin`` role.  When ``AUTH0_DOMAIN`` and
``AUTH0_AUDIENCE`` are configured, tokens issued by that tenant are verified
here (RS256 signature via the tenant JWKS, audience, issuer) and turned into
an ``Auth0User`` carrying its roles.  Any other bearer token is left for
the next backend in ``DEFAULT_AUTHENTICATION_CLASSES`` (SimpleJWT).

The accepted algorithm comes from settings only, never from the token
header.
"""

from functools import lru_cache

import jwt as pyjwt
import structlog
from django.conf import settings
from jwt import PyJWKClient
from jwt.exceptions import PyJWTError

from rest_framework.authentication import BaseAuthentication, get_authorization_header
from rest_framework.exceptions import AuthenticationFailed

logger = structlog.get_logger(__name__)


def auth0_issuer() -> str:
    domain = settings.AUTH0_DOMAIN
    return f"https://{domain}/" if domain else ""


def auth0_enabled() -> bool:
    return bool(settings.AUTH0_DOMAIN and settings.AUTH0_AUDIENCE)


@lru_cache(maxsize=None)
def _jwks_client(domain: str) -> PyJWKClient:
    return PyJWKClient(
        f"https://{domain}/.well-known/jwks.json",
        cache_jwk_set=True,
        lifespan=settings.AUTH0_JWKS_CACHE_SECONDS,
    )


class Auth0User:
    """Principal built from verified Auth0 claims; no local ``User`` row.

    Roles are read from ``AUTH0_ROLES_CLAIM``; Auth0 RBAC ``permissions``
    count as roles too.
    """

    is_authenticated = True
    is_active = True
    is_staff = False

    def __init__(self, claims: dict):
        self.claims = claims
        self.sub: str = claims.get("sub", "")
        self.roles: list[str] = list(claims.get(settings.AUTH0_ROLES_CLAIM, []))
        self.permissions: list[str] = list(claims.get("permissions", []))

    def has_role(self, role: str) -> bool:
        return role in self.roles or role in self.permissions

    def __str__(self) -> str:
        return self.sub


class Auth0JSONWebTokenAuthentication(BaseAuthentication):
    keyword = "Bearer"

    def authenticate(self, request):
        parts = get_authorization_header(request).split()
        if not parts:
            return None
        if len(parts) != 2 or parts[0].lower() != self.keyword.lower().encode():
            raise AuthenticationFailed("Invalid Authorization header format.")

        token = parts[1].decode("latin-1")
        if not auth0_enabled() or self.unverified_issuer(token) != auth0_issuer():
            return None

        user = Auth0User(self.verify(token))
        logger.info("auth0_authenticated", sub=user.sub, roles=user.roles)
        return (user, token)

    def authenticate_header(self, request):
        return f'{self.keyword} realm="api"'

    @staticmethod
    def unverified_issuer(token: str) -> str:
        """``iss`` claim read without verification, used only for routing."""
        try:
            claims = pyjwt.decode(token, options={"verify_signature": False})
        except PyJWTError:
            return ""
        return claims.get("iss", "")

    @staticmethod
    def verify(token: str) -> dict:
        try:
            key = _jwks_client(settings.AUTH0_DOMAIN).get_signing_key_from_jwt(token)
            return pyjwt.decode(
                token,
                key.key,
                algorithms=[settings.AUTH0_ALGORITHM],
                audience=settings.AUTH0_AUDIENCE,
                issuer=auth0_issuer(),
            )
        except PyJWTError as exc:
            logger.warning("auth0_token_rejected", error=str(exc))
            raise AuthenticationFailed(f"Token validation failed: {exc}") from exc
