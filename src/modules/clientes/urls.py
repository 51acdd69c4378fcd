"""Cliente URL configuration.

The persistence service and the payload validator are built once, when
this module is imported at startup, and handed to every view instance.
"""

from __future__ import annotations

from django.urls import path

from modules.clientes.repositories.django_repository import ClienteDjangoRepository
from modules.clientes.services import ClienteService
from modules.clientes.validation import ClienteValidator
from modules.clientes.views import ClienteViewSet

service = ClienteService(repository=ClienteDjangoRepository())
validator = ClienteValidator.from_settings()

cliente_list = ClienteViewSet.as_view(
    {"get": "list", "post": "create"}, service=service, validator=validator
)
cliente_detail = ClienteViewSet.as_view(
    {"get": "retrieve", "put": "update", "delete": "destroy"},
    service=service,
    validator=validator,
)

urlpatterns = [
    path("clientes", cliente_list, name="cliente-list"),
    path("clientes/<int:pk>", cliente_detail, name="cliente-detail"),
]
