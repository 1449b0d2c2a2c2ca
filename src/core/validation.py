"""Validaciones de entrada compartidas por los servicios.

Cada función devuelve `None` si el valor es válido o lanza `InvalidInput`
indicando el campo y el motivo. Son funciones puras: no hacen I/O.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from core.errors import InvalidInput

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_RE = re.compile(r"^\+?[1-9]\d{1,14}$")


def validate_email(email: Any, field: str = "email") -> None:
    if not isinstance(email, str) or not EMAIL_RE.fullmatch(email):
        raise InvalidInput(field, "invalid email format")


def validate_phone_number(phone: Any, field: str = "phone") -> None:
    """Formato E.164 laxo: `+` opcional, 2-15 dígitos, sin 0 inicial."""

    if not isinstance(phone, str) or not PHONE_RE.fullmatch(phone):
        raise InvalidInput(field, "invalid phone number format")


def require_fields(data: Any, required: Sequence[str]) -> None:
    """Exige que `data` sea un mapping y que cada clave requerida sea truthy.

    Valores falsy ("", 0, None, False, contenedores vacíos) cuentan como
    ausentes. Se reporta el primer campo que falta.
    """

    if not isinstance(data, Mapping):
        raise InvalidInput("data", "must be a non-null mapping")
    for name in required:
        if not data.get(name):
            raise InvalidInput(name, "missing required field")


class Validator:
    """Fachada inyectable sobre las funciones del módulo."""

    email = staticmethod(validate_email)
    phone_number = staticmethod(validate_phone_number)
    data = staticmethod(require_fields)
