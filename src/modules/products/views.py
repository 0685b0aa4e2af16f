"""Product API views (request handlers).

Each handler validates the inbound transfer object, converts it to an
entity, calls the repository obtained from the composition layer, and
maps the returned ``Outcome`` to an HTTP response:

- mutation ``flag`` true -> 200 ``{flag, message}``
- mutation ``flag`` false -> 400 ``{flag, message}``
- read with nothing found -> 404 with a ``text/plain`` message
- read that hit an infrastructure fault -> 500 ``{flag, message}``

Reads are anonymous; writes require the Admin role.
"""

from __future__ import annotations

import structlog
from django.http import HttpResponse
from rest_framework import status
from rest_framework.permissions import SAFE_METHODS, AllowAny, IsAuthenticated
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from modules.core.permissions import IsAdminRole
from modules.core.responses import Outcome
from modules.products.container import build_product_repository
from modules.products.conversions import from_entities, from_entity, to_entity
from modules.products.serializers import (
    ProductDeleteSerializer,
    ProductSerializer,
    ProductUpdateSerializer,
)

logger = structlog.get_logger(__name__)


def _outcome_response(outcome: Outcome) -> Response:
    code = status.HTTP_200_OK if outcome.flag else status.HTTP_400_BAD_REQUEST
    return Response(outcome.as_envelope(), status=code)


def _not_found_response(message: str) -> HttpResponse:
    return HttpResponse(
        message, status=status.HTTP_404_NOT_FOUND, content_type="text/plain"
    )


def _fault_response(outcome: Outcome) -> Response:
    return Response(
        outcome.as_envelope(), status=status.HTTP_500_INTERNAL_SERVER_ERROR
    )


class ProductAPIView(APIView):
    """Shared wiring: anonymous reads, Admin-only writes, per-request repository."""

    def get_permissions(self):
        if self.request.method in SAFE_METHODS:
            return [AllowAny()]
        return [IsAuthenticated(), IsAdminRole()]

    def initial(self, request: Request, *args, **kwargs) -> None:
        super().initial(request, *args, **kwargs)
        self.repository = build_product_repository(
            for_write=request.method not in SAFE_METHODS
        )


class ProductListView(ProductAPIView):
    """``/api/products``: list, create, update, delete."""

    def get(self, request: Request) -> HttpResponse:
        """GET /api/products"""
        outcome = self.repository.get_all()
        if not outcome.flag:
            return _fault_response(outcome)
        if not outcome.data:
            logger.info("product.list_empty")
            return _not_found_response("No products detected in the database")

        items = from_entities(outcome.data)
        if not items:
            return _not_found_response("No product found")
        return Response(ProductSerializer(items, many=True).data)

    def post(self, request: Request) -> Response:
        """POST /api/products"""
        serializer = ProductSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        entity = to_entity(serializer.to_dto())
        return _outcome_response(self.repository.create(entity))

    def put(self, request: Request) -> Response:
        """PUT /api/products"""
        serializer = ProductUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        entity = to_entity(serializer.to_dto())
        return _outcome_response(self.repository.update(entity))

    def delete(self, request: Request) -> Response:
        """DELETE /api/products"""
        serializer = ProductDeleteSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        entity = to_entity(serializer.to_dto())
        return _outcome_response(self.repository.delete(entity))


class ProductDetailView(ProductAPIView):
    """``/api/products/<id>``: single-product read."""

    def get(self, request: Request, id: int) -> HttpResponse:
        """GET /api/products/{id}"""
        outcome = self.repository.find_by_id(id)
        if not outcome.flag:
            return _fault_response(outcome)
        if outcome.data is None:
            logger.info("product.not_found", product_id=id)
            return _not_found_response(f"No product found with id: {id}")
        return Response(ProductSerializer(from_entity(outcome.data)).data)
