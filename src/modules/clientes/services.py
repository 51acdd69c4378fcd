"""Cliente persistence service.

The single collaborator the HTTP handler talks to for storage: find-all,
find-by-id, save and delete.  Delegates to the injected
``IClienteRepository`` and converts every ``django.db.DatabaseError``
(integrity, operational, programming...) into ``DataAccessError`` chained
to the driver error.  Writes run inside ``transaction.atomic``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Optional

import structlog
from django.db import DatabaseError, transaction

from modules.core.exceptions import DataAccessError

if TYPE_CHECKING:
    from modules.clientes.models import Cliente
    from modules.clientes.repositories.interfaces import IClienteRepository

logger = structlog.get_logger(__name__)


class ClienteService:
    """Application service for Cliente storage.

    Receives an ``IClienteRepository`` via constructor injection.
    Holds no per-request state, so one instance serves the whole process.
    """

    def __init__(self, repository: IClienteRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_all(self) -> List[Cliente]:
        try:
            return self._repo.list()
        except DatabaseError as exc:
            logger.error("cliente.data_access_failed", operation="find_all", error=str(exc))
            raise DataAccessError("Could not list clientes") from exc

    def find_by_id(self, id: int) -> Optional[Cliente]:
        try:
            return self._repo.get_by_id(id)
        except DatabaseError as exc:
            logger.error(
                "cliente.data_access_failed",
                operation="find_by_id",
                cliente_id=id,
                error=str(exc),
            )
            raise DataAccessError(f"Could not load cliente {id}") from exc

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def save(self, cliente: Cliente) -> Cliente:
        """Insert or update ``cliente``; returns it with its assigned id."""
        is_new = cliente.pk is None
        try:
            with transaction.atomic():
                cliente = self._repo.save(cliente)
        except DatabaseError as exc:
            logger.error(
                "cliente.data_access_failed",
                operation="save",
                cliente_id=cliente.pk,
                error=str(exc),
            )
            raise DataAccessError("Could not save cliente") from exc
        logger.info("cliente.saved", cliente_id=cliente.pk, is_new=is_new)
        return cliente

    def delete(self, cliente: Cliente) -> None:
        cliente_id = cliente.pk
        try:
            with transaction.atomic():
                self._repo.delete(cliente)
        except DatabaseError as exc:
            logger.error(
                "cliente.data_access_failed",
                operation="delete",
                cliente_id=cliente_id,
                error=str(exc),
            )
            raise DataAccessError(f"Could not delete cliente {cliente_id}") from exc
        logger.info("cliente.deleted", cliente_id=cliente_id)
