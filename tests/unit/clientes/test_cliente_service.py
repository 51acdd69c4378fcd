"""Unit tests for ClienteService.

Covers:
- Delegation to the injected repository.
- Translation of ``DatabaseError`` into ``DataAccessError`` with the
  driver error as most specific cause.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from django.db import IntegrityError, OperationalError

from modules.clientes.models import Cliente
from modules.clientes.services import ClienteService
from modules.core.exceptions import DataAccessError

pytestmark = pytest.mark.unit


@pytest.fixture()
def mock_repo():
    return MagicMock()


@pytest.fixture()
def service(mock_repo):
    return ClienteService(repository=mock_repo)


def _cliente(**overrides) -> Cliente:
    defaults = {"name": "Ana", "email": "ana@example.com", "phone": "123"}
    defaults.update(overrides)
    return Cliente(**defaults)


# ===========================================================================
# Queries
# ===========================================================================


class TestFindAll:
    def test_returns_repository_list(self, service, mock_repo):
        clientes = [_cliente(id=1), _cliente(id=2, email="b@example.com")]
        mock_repo.list.return_value = clientes
        assert service.find_all() == clientes

    def test_database_error_becomes_data_access_error(self, service, mock_repo):
        mock_repo.list.side_effect = OperationalError("no such table: clientes")
        with pytest.raises(DataAccessError) as excinfo:
            service.find_all()
        assert isinstance(excinfo.value.most_specific_cause, OperationalError)
        assert "no such table: clientes" in excinfo.value.detail


class TestFindById:
    def test_returns_record(self, service, mock_repo):
        cliente = _cliente(id=5)
        mock_repo.get_by_id.return_value = cliente
        assert service.find_by_id(5) is cliente
        mock_repo.get_by_id.assert_called_once_with(5)

    def test_returns_none_when_absent(self, service, mock_repo):
        mock_repo.get_by_id.return_value = None
        assert service.find_by_id(999999) is None

    def test_database_error_becomes_data_access_error(self, service, mock_repo):
        mock_repo.get_by_id.side_effect = OperationalError("database is locked")
        with pytest.raises(DataAccessError, match="Could not load cliente 5"):
            service.find_by_id(5)


# ===========================================================================
# Commands
# ===========================================================================


class TestSave:
    def test_returns_saved_entity(self, service, mock_repo):
        cliente = _cliente()
        mock_repo.save.side_effect = lambda c: c
        assert service.save(cliente) is cliente
        mock_repo.save.assert_called_once_with(cliente)

    def test_integrity_error_becomes_data_access_error(self, service, mock_repo):
        mock_repo.save.side_effect = IntegrityError("UNIQUE constraint failed: clientes.email")
        with pytest.raises(DataAccessError) as excinfo:
            service.save(_cliente())
        assert excinfo.value.detail == (
            "Could not save cliente: UNIQUE constraint failed: clientes.email"
        )


class TestDelete:
    def test_delegates_to_repository(self, service, mock_repo):
        cliente = _cliente(id=3)
        service.delete(cliente)
        mock_repo.delete.assert_called_once_with(cliente)

    def test_database_error_becomes_data_access_error(self, service, mock_repo):
        mock_repo.delete.side_effect = OperationalError("disk I/O error")
        with pytest.raises(DataAccessError, match="Could not delete cliente 3"):
            service.delete(_cliente(id=3))
