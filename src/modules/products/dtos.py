"""Product transfer object.

Framework-agnostic boundary representation using Pydantic v2.  The DTO
is immutable (``frozen=True``) and is never persisted: it only carries
``id``, ``name``, ``quantity`` and ``price`` across the HTTP boundary.

``id`` defaults to ``0``, meaning "not persisted yet".  Required-field
checks happen in the DRF serializers before a DTO is built.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class ProductDTO(BaseModel):
    """Immutable ``(id, name, quantity, price)`` tuple."""

    model_config = ConfigDict(frozen=True)

    id: int = 0
    name: str
    quantity: int
    price: Decimal

