"""Servicio base: logging y propagación de errores uniformes.

Todos los métodos públicos de los servicios de dominio pasan su llamada
remota por `run`, así cada operación deja el mismo rastro en el log.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, TypeVar

from core.interfaces.api import RemoteAPI
from core.validation import Validator

T = TypeVar("T")


class BaseService:
    def __init__(
        self,
        api: RemoteAPI,
        validator: Validator | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.api = api
        self.validator = validator or Validator()
        self.logger = logger or logging.getLogger(f"orderlink.services.{type(self).__name__}")

    async def run(self, operation: Callable[[], Awaitable[T]], label: str) -> T:
        """Ejecuta `operation` y registra el resultado.

        En caso de fallo se registra y se relanza la misma excepción.
        """

        try:
            result = await operation()
        except Exception as exc:
            self.logger.error("Error during %s: %s", label, exc)
            raise
        self.logger.info("%s successful: %s", label, result)
        return result


def strip_empty(data: dict[str, Any]) -> dict[str, Any]:
    """Quita claves con `None` antes de enviarlas como formulario."""

    return {key: value for key, value in data.items() if value is not None}
