"""Product entity.

``name`` is the business key: no two persisted products may share it.
The repository checks this before inserting, and ``unique=True`` creates
a UNIQUE INDEX so that two concurrent inserts cannot both succeed.
``id`` is assigned by the store on first insert and never changes.
"""

from __future__ import annotations

from django.db import models


class Product(models.Model):
    id = models.AutoField(primary_key=True)
    name = models.CharField(max_length=255, unique=True)
    quantity = models.IntegerField()
    price = models.DecimalField(max_digits=18, decimal_places=2)

    class Meta:
        db_table = "products"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.id} - {self.name}"
