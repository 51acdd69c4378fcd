"""Cliente DTOs.

Framework-agnostic input contract for create/update requests, built with
Pydantic v2.  The DTO is the field schema evaluated by
``modules.clientes.validation.ClienteValidator``; it is immutable
(``frozen=True``) and ignores unknown keys, so an ``id`` or timestamp sent
by the client never reaches the persisted record.

Constraint messages follow Bean-Validation wording (``must not be empty``,
``must be a well-formed email address``) and are raised as
``PydanticCustomError`` so the validator can render them verbatim.
"""

from __future__ import annotations

import re
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
)
from pydantic_core import PydanticCustomError

NAME_MAX_LENGTH = 255
PHONE_MAX_LENGTH = 20

PHONE_PATTERN = re.compile(r"^[0-9+()\-.\s]+$")


class ClientePayloadDTO(BaseModel):
    """Client-writable fields of a Cliente.

    ``phone`` is optional unless the validation context carries
    ``phone_required=True``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(max_length=NAME_MAX_LENGTH)
    email: EmailStr
    phone: str | None = Field(
        default=None, max_length=PHONE_MAX_LENGTH, validate_default=True
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("blank", "must not be empty")
        return value

    @field_validator("email", mode="wrap")
    @classmethod
    def well_formed_email(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> str:
        if not isinstance(value, str):
            return handler(value)
        if not value.strip():
            raise PydanticCustomError("blank", "must not be empty")
        try:
            address = handler(value)
        except ValidationError:
            raise PydanticCustomError(
                "email", "must be a well-formed email address"
            ) from None
        # EmailStr also accepts "Name <addr>" and lowercases the domain
        if address.lower() != value.lower():
            raise PydanticCustomError("email", "must be a well-formed email address")
        return value

    @field_validator("phone")
    @classmethod
    def phone_format(cls, value: str | None, info: ValidationInfo) -> str:
        required = bool(info.context and info.context.get("phone_required"))
        if not value or not value.strip():
            if required:
                raise PydanticCustomError("blank", "must not be empty")
            return ""
        if not PHONE_PATTERN.match(value):
            raise PydanticCustomError("phone", "must be a valid phone number")
        return value
