# app/schemas.py
"""Pydantic v2 schemas for request validation and template data."""

import re
from collections.abc import Iterable
from datetime import datetime
from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

# Brazilian mobile format: (11) 91234-5678
PHONE_PATTERN = re.compile(r"\([0-9]{2}\) [0-9]{5}-[0-9]{4}")

NAME_REQUIRED = "Campo nome é obrigatório"
NAME_TOO_SHORT = "O nome deve ter no mínimo 03 caracteres."
EMAIL_REQUIRED = "Campo e-mail é obrigatório."
EMAIL_INVALID = "Deve ser um e-mail válido."
PHONE_INVALID = "Deve enviar um telefone válido"
BODY_INVALID = "Dados do contato inválidos."

# (field alias, pydantic error type) -> message shown to the client
ERROR_MESSAGES: dict[tuple[str, str], str] = {
    ("nome", "missing"): NAME_REQUIRED,
    ("nome", "string_type"): NAME_REQUIRED,
    ("nome", "string_too_short"): NAME_TOO_SHORT,
    ("email", "missing"): EMAIL_REQUIRED,
    ("email", "string_type"): EMAIL_REQUIRED,
    ("email", "value_error"): EMAIL_INVALID,
    ("telefone", "value_error"): PHONE_INVALID,
}


class ContactValidationError(Exception):
    """Raised when a submitted contact violates one or more rules."""

    def __init__(self, messages: list[str]):
        super().__init__("; ".join(messages))
        self.messages = messages


class ContactCreate(BaseModel):
    """Schema for a submitted contact, keyed by the form field names."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., alias="nome", min_length=3)
    email: str = Field(..., alias="email")
    phone: str = Field(..., alias="telefone")

    @field_validator("email")
    @classmethod
    def validate_email_syntax(cls, v: str) -> str:
        """Check address syntax, keeping the address exactly as submitted."""
        try:
            validate_email(v, check_deliverability=False)
        except EmailNotValidError as exc:
            raise ValueError(EMAIL_INVALID) from exc
        return v

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        """Validate phone number format."""
        if not PHONE_PATTERN.fullmatch(v):
            raise ValueError(PHONE_INVALID)
        return v


class ContactRead(BaseModel):
    """Schema for reading contact data."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    phone: str
    created_at: datetime | None = None


def error_messages(errors: Iterable[dict[str, Any]]) -> list[str]:
    """Translate pydantic error dicts into client messages, keeping their order."""
    messages = []
    for error in errors:
        loc = error.get("loc") or ()
        if not loc:
            messages.append(BODY_INVALID)
            continue
        key = (str(loc[0]), error["type"])
        messages.append(ERROR_MESSAGES.get(key, error["msg"]))
    return messages


def parse_contact(payload: Any) -> ContactCreate:
    """
    Validate an incoming payload.

    Raises:
        ContactValidationError: with one message per violated rule, in field
            declaration order (name, email, phone).
    """
    try:
        return ContactCreate.model_validate(payload)
    except ValidationError as exc:
        raise ContactValidationError(error_messages(exc.errors())) from exc
