"""Django ORM implementation of the Cliente repository.

Missing rows are reported as ``None``.  Database errors propagate as
``django.db.DatabaseError``; the service layer decides how to translate
them.
"""

from __future__ import annotations

from typing import List, Optional

import structlog

from modules.clientes.models import Cliente
from modules.clientes.repositories.interfaces import IClienteRepository

logger = structlog.get_logger(__name__)


class ClienteDjangoRepository(IClienteRepository):
    """Concrete Cliente repository backed by Django ORM."""

    def get_by_id(self, id: int) -> Optional[Cliente]:
        return Cliente.objects.filter(pk=id).first()

    def list(self) -> List[Cliente]:
        return list(Cliente.objects.all())

    def save(self, entity: Cliente) -> Cliente:
        """Persist (insert or update) a cliente."""
        is_new = entity._state.adding
        entity.save()
        logger.debug("cliente.row_saved", cliente_id=entity.pk, is_new=is_new)
        return entity

    def delete(self, entity: Cliente) -> None:
        cliente_id = entity.pk
        entity.delete()
        logger.debug("cliente.row_deleted", cliente_id=cliente_id)
