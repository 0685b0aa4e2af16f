"""Product DRF serializers for API input/output.

Serializers only check the structure of an inbound transfer object
(required, non-blank fields and their types).  Business rules live in
the repository, which receives entities built from ``ProductDTO``.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers

from modules.products.dtos import ProductDTO


class ProductSerializer(serializers.Serializer):
    """Read/write serializer for the ``{id, name, quantity, price}`` resource."""

    id = serializers.IntegerField(required=False, default=0, min_value=0)
    name = serializers.CharField(max_length=255)
    quantity = serializers.IntegerField()
    price = serializers.DecimalField(
        max_digits=18, decimal_places=2, coerce_to_string=False
    )

    def to_dto(self) -> ProductDTO:
        return ProductDTO(**self.validated_data)


class ProductUpdateSerializer(ProductSerializer):
    """Updates address an existing row, so ``id`` is mandatory."""

    id = serializers.IntegerField(min_value=1)


class ProductDeleteSerializer(ProductSerializer):
    """Deletes only need a positive ``id``; other fields are informational."""

    id = serializers.IntegerField(min_value=1)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)
    quantity = serializers.IntegerField(required=False, default=0)
    price = serializers.DecimalField(
        max_digits=18,
        decimal_places=2,
        coerce_to_string=False,
        required=False,
        default=Decimal("0"),
    )

    def validate(self, attrs):
        if not attrs.get("name"):
            attrs["name"] = f"Product with id {attrs['id']}"
        return attrs
