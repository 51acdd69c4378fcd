"""Cliente model.

Only ``name``, ``email`` and ``phone`` are client-writable.  ``id`` and the
timestamps inherited from ``TimestampedModel`` belong to the persistence
layer.  Payload validation lives in ``modules.clientes.validation``, not in
model-field annotations.
"""

from __future__ import annotations

from django.db import models

from modules.core.models import TimestampedModel

CLIENT_WRITABLE_FIELDS = ("name", "email", "phone")


class Cliente(TimestampedModel):
    """Customer record."""

    id = models.BigAutoField(primary_key=True)
    name = models.CharField(max_length=255)
    email = models.EmailField(max_length=254, unique=True)
    phone = models.CharField(max_length=20, blank=True, default="")

    class Meta:
        db_table = "clientes"
        ordering = ["id"]

    def __str__(self) -> str:
        return f"{self.name} (#{self.id})"
