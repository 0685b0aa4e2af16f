from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.contrib.auth.models import Group
from django.core.cache import cache

from rest_framework.test import APIClient

from modules.core.permissions import ADMIN_ROLE
from modules.products.models import Product

User = get_user_model()


@pytest.fixture(autouse=True)
def _use_db(db):
    """Automatically use the test database for all tests."""


@pytest.fixture(autouse=True)
def _reset_throttles():
    """Throttle counters live in the cache; start every test from zero."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture()
def api_client():
    """DRF APIClient for testing API endpoints."""
    return APIClient()


@pytest.fixture()
def user_client():
    """APIClient authenticated as a plain user (no Admin role)."""
    client = APIClient()
    user = User.objects.create_user(username="shopper", password="testpass123")
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def admin_client():
    """APIClient authenticated as a member of the Admin group."""
    client = APIClient()
    user = User.objects.create_user(username="catalog-admin", password="testpass123")
    group, _ = Group.objects.get_or_create(name=ADMIN_ROLE)
    user.groups.add(group)
    client.force_authenticate(user=user)
    return client


@pytest.fixture()
def make_product():
    """Factory persisting a Product with sensible defaults."""

    def _make(**overrides) -> Product:
        defaults = {
            "name": "Product 1",
            "quantity": 10,
            "price": Decimal("100.70"),
        }
        defaults.update(overrides)
        return Product.objects.create(**defaults)

    return _make
