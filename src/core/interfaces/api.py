"""Contrato del cliente HTTP que consumen los servicios de dominio.

Por qué Protocol:
- Contrato estructural (duck typing) sin herencia rígida.
- Los tests pueden inyectar un fake en memoria sin tocar la red.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RemoteAPI(Protocol):
    """Verbos CRUD sobre una API REST con cuerpo form-encoded y respuesta JSON.

    Reglas de diseño:
    - Todos los métodos son asíncronos porque hacen I/O.
    - `headers` permite cabeceras extra para una sola llamada.
    """

    async def get(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any: ...

    async def post(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any: ...

    async def put(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any: ...

    async def patch(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any: ...

    async def delete(
        self,
        endpoint: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any: ...
