"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.  Every
method answers with an ``Outcome``; store faults (``DatabaseError``) are
handed to the exception sink and replaced by a generic message, so the
view never sees a raw fault.

The repository is bound to one database alias, supplied by the
composition layer for the lifetime of a single request.
"""

from __future__ import annotations

from typing import List, Optional

import structlog
from django.db import DEFAULT_DB_ALIAS, DatabaseError, IntegrityError, transaction

from modules.core.logs import log_exception
from modules.core.repositories.interfaces import Predicate
from modules.core.responses import FailureKind, Outcome
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def __init__(self, using: str = DEFAULT_DB_ALIAS) -> None:
        self._using = using

    @property
    def _products(self):
        return Product.objects.using(self._using)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def create(self, entity: Product) -> Outcome[Product]:
        """Insert ``entity`` unless its name is already taken.

        The UNIQUE index on ``name`` backs up the look-up below: a
        concurrent insert that wins the race surfaces here as an
        ``IntegrityError`` and is reported as the same duplicate.
        """
        log = logger.bind(name=entity.name)
        try:
            # Full scan; the UNIQUE index on name keeps it correct under load.
            existing = self.get_by_predicate(lambda p: p.name == entity.name)
            if not existing.flag:
                return Outcome.fail(
                    "Error occurred adding new product", FailureKind.INFRASTRUCTURE
                )
            if existing.data is not None:
                log.info("product.duplicate_name", existing_id=existing.data.id)
                return self._duplicate(entity)

            entity.pk = None
            with transaction.atomic(using=self._using):
                entity.save(using=self._using, force_insert=True)
        except IntegrityError:
            log.warning("product.duplicate_name_on_insert")
            return self._duplicate(entity)
        except DatabaseError as exc:
            log_exception(exc, operation="product.create", name=entity.name)
            return Outcome.fail(
                "Error occurred adding new product", FailureKind.INFRASTRUCTURE
            )

        if entity.id is not None and entity.id > 0:
            log.info("product.created", product_id=entity.id)
            return Outcome.ok(f"{entity.name} added to database successfully", entity)

        log.error("product.create_without_id")
        return Outcome.fail(
            f"Error occurred while adding {entity.name}", FailureKind.INFRASTRUCTURE
        )

    def update(self, entity: Product) -> Outcome[Product]:
        """Replace every field of the stored row matching ``entity.id``."""
        log = logger.bind(product_id=entity.id, name=entity.name)
        try:
            current = self.find_by_id(entity.id)
            if not current.flag:
                return Outcome.fail(
                    "Error occurred updating product", FailureKind.INFRASTRUCTURE
                )
            if current.data is None:
                log.info("product.not_found", operation="update")
                return self._not_found(entity)

            # The fetched row only proves existence; every column is
            # overwritten from the incoming entity under the same pk.
            with transaction.atomic(using=self._using):
                updated = self._products.filter(pk=entity.pk).update(
                    name=entity.name,
                    quantity=entity.quantity,
                    price=entity.price,
                )
            if not updated:
                log.info("product.deleted_before_update")
                return self._not_found(entity)
        except IntegrityError:
            log.warning("product.duplicate_name_on_update")
            return self._duplicate(entity)
        except DatabaseError as exc:
            log_exception(exc, operation="product.update", product_id=entity.id)
            return Outcome.fail(
                "Error occurred updating product", FailureKind.INFRASTRUCTURE
            )

        log.info("product.updated")
        return Outcome.ok(f"{entity.name} is updated successfully", entity)

    def delete(self, entity: Product) -> Outcome[Product]:
        """Remove the stored row matching ``entity.id``.

        Messages echo the supplied entity's name, not the stored one.
        """
        log = logger.bind(product_id=entity.id, name=entity.name)
        try:
            current = self.find_by_id(entity.id)
            if not current.flag:
                return Outcome.fail(
                    "Error occurred deleting product", FailureKind.INFRASTRUCTURE
                )
            if current.data is None:
                log.info("product.not_found", operation="delete")
                return self._not_found(entity)

            with transaction.atomic(using=self._using):
                current.data.delete(using=self._using)
        except DatabaseError as exc:
            log_exception(exc, operation="product.delete", product_id=entity.id)
            return Outcome.fail(
                "Error occurred deleting product", FailureKind.INFRASTRUCTURE
            )

        log.info("product.deleted")
        return Outcome.ok(f"{entity.name} deleted successfully", entity)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_id(self, id: Optional[int]) -> Outcome[Optional[Product]]:
        """Retrieve a product by primary key; ``data`` is ``None`` if absent."""
        if id is None:
            return Outcome.ok(data=None)
        try:
            product = self._products.filter(pk=id).first()
        except DatabaseError as exc:
            log_exception(exc, operation="product.find_by_id", product_id=id)
            return Outcome.fail(
                "Error occurred retrieving product", FailureKind.INFRASTRUCTURE
            )
        return Outcome.ok(data=product)

    def get_all(self) -> Outcome[List[Product]]:
        """Return every product as a plain list, detached from the QuerySet."""
        try:
            products = list(self._products.all())
        except DatabaseError as exc:
            log_exception(exc, operation="product.get_all")
            return Outcome.fail(
                "Error occurred retrieving products", FailureKind.INFRASTRUCTURE
            )
        return Outcome.ok(data=products)

    def get_by_predicate(
        self, predicate: Predicate[Product]
    ) -> Outcome[Optional[Product]]:
        """Return the first product for which ``predicate`` is true.

        ``predicate`` is a plain callable over entity fields, evaluated
        row by row in primary-key order.
        """
        try:
            match = next(
                (p for p in self._products.iterator() if predicate(p)),
                None,
            )
        except DatabaseError as exc:
            log_exception(exc, operation="product.get_by_predicate")
            return Outcome.fail(
                "Error occurred retrieving product", FailureKind.INFRASTRUCTURE
            )
        return Outcome.ok(data=match)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _duplicate(entity: Product) -> Outcome[Product]:
        return Outcome.fail(f"{entity.name} already added", FailureKind.BUSINESS_RULE)

    @staticmethod
    def _not_found(entity: Product) -> Outcome[Product]:
        return Outcome.fail(f"{entity.name} not found", FailureKind.BUSINESS_RULE)
