"""Composition entrypoint for the products module.

Views call ``build_product_repository`` once per request.  Each call
returns a fresh repository bound to the database alias chosen by the
router for that request, so no store handle outlives the request or is
shared between concurrent requests.
"""

from __future__ import annotations

from django.db import router

from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository


def build_product_repository(for_write: bool = False) -> IProductRepository:
    if for_write:
        using = router.db_for_write(Product)
    else:
        using = router.db_for_read(Product)
    return ProductDjangoRepository(using=using)
