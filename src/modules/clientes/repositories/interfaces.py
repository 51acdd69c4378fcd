"""Cliente repository interface."""

from __future__ import annotations

from typing import TYPE_CHECKING

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.clientes.models import Cliente


class IClienteRepository(IRepository["Cliente"]):
    """Repository contract for the Cliente entity."""
