"""Validation engine for Cliente payloads.

Evaluates ``ClientePayloadDTO`` against a decoded request body and reports
one ``FieldError`` per offending field, in field declaration order.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from django.conf import settings
from pydantic import ValidationError

from modules.clientes.dtos import ClientePayloadDTO

BODY_FIELD = "body"

_REQUIRED_MESSAGE = "must not be empty"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str

    def render(self) -> str:
        return f"Field '{self.field}' {self.message}"


def _message_for(error: dict[str, Any]) -> str:
    kind = error["type"]
    if kind == "missing":
        return _REQUIRED_MESSAGE
    if kind == "string_type":
        return _REQUIRED_MESSAGE if error.get("input") is None else "must be a string"
    if kind == "string_too_long":
        return f"size must be between 0 and {error['ctx']['max_length']}"
    return error["msg"]


class ClienteValidator:
    """Schema-driven validator producing per-field constraint violations."""

    def __init__(self, phone_required: bool = False) -> None:
        self.phone_required = phone_required

    @classmethod
    def from_settings(cls) -> ClienteValidator:
        return cls(phone_required=settings.CLIENTES_PHONE_REQUIRED)

    def validate(self, payload: Any) -> List[FieldError]:
        """Return the field errors of ``payload`` (empty when valid)."""
        _, errors = self.parse(payload)
        return errors

    def parse(self, payload: Any) -> Tuple[Optional[ClientePayloadDTO], List[FieldError]]:
        """Validate and, on success, return the DTO built from ``payload``."""
        if not isinstance(payload, Mapping):
            return None, [FieldError(BODY_FIELD, "must be a JSON object")]
        try:
            dto = ClientePayloadDTO.model_validate(
                payload, context={"phone_required": self.phone_required}
            )
        except ValidationError as exc:
            return None, self._field_errors(exc)
        return dto, []

    @staticmethod
    def _field_errors(exc: ValidationError) -> List[FieldError]:
        errors: List[FieldError] = []
        seen: set[str] = set()
        for error in exc.errors():
            field = str(error["loc"][0]) if error["loc"] else BODY_FIELD
            if field in seen:
                continue
            seen.add(field)
            errors.append(FieldError(field, _message_for(error)))
        return errors
