"""Unit tests for ProductDTO and the entity/DTO conversions.

Covers:
- ProductDTO: defaults, coercion, frozen immutability.
- to_entity: field copy, unset id for new products.
- from_entity / from_entities: single and sequence mapping.
- Round trip entity -> DTO -> entity.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from modules.products.conversions import from_entities, from_entity, to_entity
from modules.products.dtos import ProductDTO
from modules.products.models import Product

pytestmark = pytest.mark.unit


# ===========================================================================
# ProductDTO
# ===========================================================================


class TestProductDTO:
    def test_id_defaults_to_zero(self):
        dto = ProductDTO(name="Widget", quantity=1, price=Decimal("1.50"))
        assert dto.id == 0

    def test_price_coerced_to_decimal(self):
        dto = ProductDTO(name="Widget", quantity=1, price="100.70")
        assert dto.price == Decimal("100.70")

    def test_missing_name_rejected(self):
        with pytest.raises(ValidationError):
            ProductDTO(quantity=1, price=Decimal("1.00"))

    def test_frozen(self):
        dto = ProductDTO(id=1, name="Widget", quantity=1, price=Decimal("1.00"))
        with pytest.raises(ValidationError):
            dto.name = "Other"


# ===========================================================================
# to_entity
# ===========================================================================


class TestToEntity:
    def test_copies_fields(self):
        dto = ProductDTO(id=7, name="Widget", quantity=4, price=Decimal("9.99"))
        entity = to_entity(dto)
        assert isinstance(entity, Product)
        assert entity.id == 7
        assert entity.name == "Widget"
        assert entity.quantity == 4
        assert entity.price == Decimal("9.99")

    def test_zero_id_leaves_pk_unset(self):
        dto = ProductDTO(name="New", quantity=1, price=Decimal("1.00"))
        assert to_entity(dto).id is None

    def test_entity_is_not_saved(self):
        dto = ProductDTO(name="New", quantity=1, price=Decimal("1.00"))
        to_entity(dto)
        assert Product.objects.count() == 0


# ===========================================================================
# from_entity / from_entities
# ===========================================================================


class TestFromEntity:
    def test_single(self, make_product):
        product = make_product(name="Lamp", quantity=2, price=Decimal("15.00"))
        dto = from_entity(product)
        assert dto == ProductDTO(
            id=product.id, name="Lamp", quantity=2, price=Decimal("15.00")
        )

    def test_sequence(self, make_product):
        products = [make_product(name="A"), make_product(name="B")]
        dtos = from_entities(products)
        assert [d.name for d in dtos] == ["A", "B"]
        assert all(isinstance(d, ProductDTO) for d in dtos)

    def test_empty_sequence(self):
        assert from_entities([]) == []


class TestRoundTrip:
    def test_entity_survives_round_trip(self, make_product):
        product = make_product(name="Round", quantity=5, price=Decimal("100.70"))
        again = to_entity(from_entity(product))
        assert again.id == product.id
        assert again.name == product.name
        assert again.quantity == product.quantity
        assert again.price == product.price

    def test_unsaved_entity_survives_round_trip(self):
        product = Product(name="Draft", quantity=1, price=Decimal("1.00"))

        dto = from_entity(product)
        again = to_entity(dto)

        assert dto.id == 0
        assert again.id is None
        assert again.name == "Draft"
        assert again.price == Decimal("1.00")
