"""Product repository interface.

``IRepository[Product]`` already carries the six catalog operations;
this alias exists so views and the composition layer depend on a
product-specific contract rather than on the generic one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product entity.

    Business rules implementations must enforce:

    - ``create`` refuses a name already held by a persisted product.
    - ``update`` and ``delete`` require an existing ``id``.
    """
