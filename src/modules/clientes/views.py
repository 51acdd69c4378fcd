"""Cliente API views.

Exposes ``ClienteService`` over HTTP.  The service and the payload
validator are passed in when the URL configuration builds the views
(``ClienteViewSet.as_view(..., service=..., validator=...)``); the view
never looks them up on its own.

Outcome mapping:

* validation failure   -> 400 ``{"errors": [...]}``
* missing record       -> 404 ``{"mensaje": ...}``
* ``DataAccessError``  -> 500 ``{"mensaje": ..., "error": ...}``
"""

from __future__ import annotations

from typing import List, Optional

import structlog
from drf_spectacular.utils import (
    OpenApiResponse,
    extend_schema,
    extend_schema_view,
    inline_serializer,
)
from rest_framework import serializers, status
from rest_framework.permissions import AllowAny, BasePermission
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.clientes.models import CLIENT_WRITABLE_FIELDS, Cliente
from modules.clientes.serializers import ClienteSerializer
from modules.clientes.services import ClienteService
from modules.clientes.validation import ClienteValidator, FieldError
from modules.core.exceptions import (
    QUERY_ERROR_MESSAGE,
    DataAccessError,
    data_access_error_body,
)
from modules.core.permissions import Role, roles_required

logger = structlog.get_logger(__name__)

SAVE_ERROR_MESSAGE = "Error saving the customer in the database"
UPDATE_ERROR_MESSAGE = "Error updating the customer in the database"
DELETE_ERROR_MESSAGE = "Error deleting the customer from the database"

NOT_FOUND_MESSAGE = "Customer ID: {id} does not exist in the database!"
EDIT_NOT_FOUND_MESSAGE = (
    "Error: could not edit, customer ID: {id} does not exist in the database!"
)
DELETE_NOT_FOUND_MESSAGE = (
    "Error: could not delete, customer ID: {id} does not exist in the database!"
)

CREATED_MESSAGE = "Customer saved successfully!"
UPDATED_MESSAGE = "Customer updated successfully!"
DELETED_MESSAGE = "Customer deleted successfully!"

_cliente_input = inline_serializer(
    name="ClienteInput",
    fields={
        "name": serializers.CharField(),
        "email": serializers.EmailField(),
        "phone": serializers.CharField(required=False),
    },
)
_cliente_envelope = inline_serializer(
    name="ClienteEnvelope",
    fields={"mensaje": serializers.CharField(), "cliente": ClienteSerializer()},
)
_mensaje = inline_serializer(name="Mensaje", fields={"mensaje": serializers.CharField()})
_errors = inline_serializer(
    name="FieldErrors", fields={"errors": serializers.ListField(child=serializers.CharField())}
)
_failure = inline_serializer(
    name="DataAccessFailure",
    fields={"mensaje": serializers.CharField(), "error": serializers.CharField()},
)


@extend_schema_view(
    list=extend_schema(
        summary="List every customer",
        responses={200: ClienteSerializer(many=True), 500: _failure},
        auth=[],
    ),
    retrieve=extend_schema(
        summary="Fetch a customer by id",
        responses={200: ClienteSerializer, 404: _mensaje, 500: _failure},
    ),
    create=extend_schema(
        summary="Create a customer",
        request=_cliente_input,
        responses={201: _cliente_envelope, 400: _errors, 500: _failure},
    ),
    update=extend_schema(
        summary="Replace name, email and phone of a customer",
        request=_cliente_input,
        responses={
            201: OpenApiResponse(_cliente_envelope, description="Updated."),
            400: _errors,
            404: _mensaje,
            500: _failure,
        },
    ),
    destroy=extend_schema(
        summary="Delete a customer",
        responses={200: _mensaje, 404: _mensaje, 500: _failure},
    ),
)
class ClienteViewSet(ViewSet):
    """CRUD handler for the Cliente resource.

    Each action declares the roles it accepts in ``permission_classes_by_action``.
    """

    service: Optional[ClienteService] = None
    validator: Optional[ClienteValidator] = None

    permission_classes_by_action = {
        "list": [AllowAny],
        "retrieve": [roles_required(Role.ADMIN, Role.USER)],
        "create": [roles_required(Role.ADMIN)],
        "update": [roles_required(Role.ADMIN)],
        "destroy": [roles_required(Role.ADMIN)],
    }

    def get_permissions(self) -> List[BasePermission]:
        classes = self.permission_classes_by_action.get(
            self.action, self.permission_classes
        )
        return [permission() for permission in classes]

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    def list(self, request: Request) -> Response:
        """GET /api/clientes"""
        try:
            clientes = self.service.find_all()
        except DataAccessError as exc:
            return self._data_access_failure(QUERY_ERROR_MESSAGE, exc)
        return Response(ClienteSerializer(clientes, many=True).data)

    def retrieve(self, request: Request, pk: int | None = None) -> Response:
        """GET /api/clientes/{pk}"""
        cliente_id = int(pk)
        try:
            cliente = self.service.find_by_id(cliente_id)
        except DataAccessError as exc:
            return self._data_access_failure(QUERY_ERROR_MESSAGE, exc)

        if cliente is None:
            return self._not_found(NOT_FOUND_MESSAGE, cliente_id)
        return Response(ClienteSerializer(cliente).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/clientes"""
        dto, errors = self.validator.parse(request.data)
        if errors:
            return self._invalid(errors)

        cliente = Cliente(**dto.model_dump(include=set(CLIENT_WRITABLE_FIELDS)))
        try:
            cliente = self.service.save(cliente)
        except DataAccessError as exc:
            return self._data_access_failure(SAVE_ERROR_MESSAGE, exc)

        logger.info("cliente.created", cliente_id=cliente.pk)
        return Response(
            {"mensaje": CREATED_MESSAGE, "cliente": ClienteSerializer(cliente).data},
            status=status.HTTP_201_CREATED,
        )

    def update(self, request: Request, pk: int | None = None) -> Response:
        """PUT /api/clientes/{pk}

        Answers 201 on success, like create.
        """
        cliente_id = int(pk)
        try:
            current = self.service.find_by_id(cliente_id)
        except DataAccessError as exc:
            return self._data_access_failure(QUERY_ERROR_MESSAGE, exc)

        dto, errors = self.validator.parse(request.data)
        if errors:
            return self._invalid(errors)

        if current is None:
            return self._not_found(EDIT_NOT_FOUND_MESSAGE, cliente_id)

        for field in CLIENT_WRITABLE_FIELDS:
            setattr(current, field, getattr(dto, field))
        try:
            updated = self.service.save(current)
        except DataAccessError as exc:
            return self._data_access_failure(UPDATE_ERROR_MESSAGE, exc)

        logger.info("cliente.updated", cliente_id=updated.pk)
        return Response(
            {"mensaje": UPDATED_MESSAGE, "cliente": ClienteSerializer(updated).data},
            status=status.HTTP_201_CREATED,
        )

    def destroy(self, request: Request, pk: int | None = None) -> Response:
        """DELETE /api/clientes/{pk}"""
        cliente_id = int(pk)
        try:
            current = self.service.find_by_id(cliente_id)
        except DataAccessError as exc:
            return self._data_access_failure(QUERY_ERROR_MESSAGE, exc)

        if current is None:
            return self._not_found(DELETE_NOT_FOUND_MESSAGE, cliente_id)

        try:
            self.service.delete(current)
        except DataAccessError as exc:
            return self._data_access_failure(DELETE_ERROR_MESSAGE, exc)

        return Response({"mensaje": DELETED_MESSAGE}, status=status.HTTP_200_OK)

    # ------------------------------------------------------------------
    # Response helpers
    # ------------------------------------------------------------------

    def _invalid(self, errors: List[FieldError]) -> Response:
        logger.info(
            "cliente.validation_failed",
            action=self.action,
            fields=[error.field for error in errors],
        )
        return Response(
            {"errors": [error.render() for error in errors]},
            status=status.HTTP_400_BAD_REQUEST,
        )

    def _not_found(self, template: str, cliente_id: int) -> Response:
        logger.info("cliente.not_found", action=self.action, cliente_id=cliente_id)
        return Response(
            {"mensaje": template.format(id=cliente_id)},
            status=status.HTTP_404_NOT_FOUND,
        )

    def _data_access_failure(self, mensaje: str, exc: DataAccessError) -> Response:
        logger.error("cliente.request_failed", action=self.action, error=exc.detail)
        return Response(
            data_access_error_body(mensaje, exc),
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
