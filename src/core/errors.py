"""Jerarquía de errores del Core.

Reglas:
- Todo error propio hereda de `OrderLinkError`, así la CLI captura una sola base.
- Validación y locator fallan antes de cualquier llamada de red.
- Los errores HTTP conservan el status y el mensaje remoto.
"""

from __future__ import annotations

from typing import Any


class OrderLinkError(Exception):
    """Base de todos los errores de orderlink."""


class InvalidInput(OrderLinkError):
    """Fallo de validación local (no se hizo ninguna llamada de red)."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Invalid {field}: {reason}")


class ServiceNotFound(OrderLinkError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Service not found: {name}")


class TransportError(OrderLinkError):
    """Fallo de red o cuerpo de respuesta no decodificable."""


class RemoteRequestFailed(OrderLinkError):
    """Respuesta no-2xx de la API remota."""

    def __init__(self, status_code: int, message: str, body: Any = None) -> None:
        self.status_code = status_code
        self.message = message
        self.body = body
        super().__init__(f"Request failed with status {status_code}: {message}")


class CustomerResolutionError(OrderLinkError):
    """Fallo en get-or-create de cliente.

    `stage` indica dónde falló (`lookup` o `create`); el error original
    queda en `cause`.
    """

    LOOKUP = "lookup"
    CREATE = "create"

    def __init__(self, stage: str, cause: Exception) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"Failed to get or create customer by email: {cause}")


class OrderPipelineError(OrderLinkError):
    """La API respondió 2xx pero sin los campos que el flujo necesita."""
