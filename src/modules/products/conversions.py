"""Pure mapping between the ``Product`` entity and ``ProductDTO``."""

from __future__ import annotations

from typing import Iterable, List

from modules.products.dtos import ProductDTO
from modules.products.models import Product


def to_entity(dto: ProductDTO) -> Product:
    """Copy the DTO fields onto an unsaved entity.

    An ``id`` of ``0`` (or below) leaves the primary key unset so the
    store assigns one on insert.
    """
    return Product(
        id=dto.id if dto.id > 0 else None,
        name=dto.name,
        quantity=dto.quantity,
        price=dto.price,
    )


def from_entity(product: Product) -> ProductDTO:
    """Unsaved entities (no primary key yet) map to ``id=0``."""
    return ProductDTO(
        id=product.id or 0,
        name=product.name,
        quantity=product.quantity,
        price=product.price,
    )


def from_entities(products: Iterable[Product]) -> List[ProductDTO]:
    return [from_entity(p) for p in products]
