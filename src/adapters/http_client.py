"""Wrapper de httpx para las APIs de facturación y mensajería.

Por qué un wrapper:
- Estandariza timeouts, autenticación Basic, cabeceras y codificación
  form-urlencoded para todos los servicios.
- Traduce fallos de red y respuestas no-2xx a la jerarquía de `core.errors`.
- Facilita testeo: se puede sustituir el transporte por uno simulado.

No reintenta: un fallo se registra y se propaga.
"""

from __future__ import annotations

import base64
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any
from urllib.parse import quote, urlencode

import httpx

from core.domain.models import ClientConfig
from core.errors import RemoteRequestFailed, TransportError

logger = logging.getLogger("orderlink.http")


@dataclass(frozen=True)
class RequestEnvelope:
    """Petición lista para enviarse. Vive lo que dura una llamada."""

    method: str
    url: str
    headers: Mapping[str, str]
    body: str | None = None


def build_async_client(
    config: ClientConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con el timeout de la configuración."""

    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout_seconds),
        follow_redirects=True,
        transport=transport,
    )


def basic_auth_header(sid: str, secret: str | None) -> str:
    token = base64.b64encode(f"{sid}:{secret or ''}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def _form_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


def encode_form(data: Mapping[str, Any]) -> str:
    """Codifica pares `key=value` unidos por `&`.

    No hay soporte de objetos anidados: el llamador aplana claves como
    `address[line1]` antes de llegar aquí.
    """

    pairs = [(str(key), _form_value(value)) for key, value in data.items()]
    return urlencode(pairs, quote_via=quote)


def _remote_error_message(response: httpx.Response) -> tuple[str, Any]:
    try:
        body = response.json()
    except ValueError:
        text = response.text
        return (text or f"HTTP {response.status_code}"), text

    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"]), body
        if isinstance(error, str) and error:
            return error, body
        if body.get("message"):
            return str(body["message"]), body
    return response.text, body


class ApiClient:
    """Cliente REST con Basic Auth, cuerpo form-encoded y respuesta JSON.

    Las cabeceras se construyen una vez y se comparten (solo lectura) entre
    todas las llamadas del cliente.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport
        headers = {
            "Authorization": basic_auth_header(config.api_key_sid, config.api_key_secret),
            "Content-Type": config.content_type,
            "User-Agent": config.user_agent,
        }
        headers.update(config.extra_headers)
        self._headers = MappingProxyType(headers)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def headers(self) -> Mapping[str, str]:
        return self._headers

    def build_url(self, endpoint: str, params: Mapping[str, Any] | None = None) -> str:
        url = f"{self._config.base_url}{endpoint}"
        if params:
            query = encode_form(params)
            if query:
                url = f"{url}?{query}"
        return url

    def build_request(
        self,
        method: str,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> RequestEnvelope:
        merged: Mapping[str, str] = self._headers
        if headers:
            merged = MappingProxyType({**self._headers, **headers})
        body = encode_form(data) if data is not None else None
        return RequestEnvelope(
            method=method.upper(),
            url=self.build_url(endpoint, params),
            headers=merged,
            body=body,
        )

    async def request(
        self,
        method: str,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        params: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        envelope = self.build_request(method, endpoint, data=data, params=params, headers=headers)
        logger.debug("%s %s body=%s", envelope.method, envelope.url, envelope.body)

        try:
            async with build_async_client(self._config, transport=self._transport) as client:
                response = await client.request(
                    envelope.method,
                    envelope.url,
                    headers=dict(envelope.headers),
                    content=envelope.body,
                )
        except httpx.HTTPError as exc:
            message = str(exc) or type(exc).__name__
            logger.error("Error in API request %s %s: %s", envelope.method, envelope.url, message)
            raise TransportError(message) from exc

        return self._decode(envelope, response)

    def _decode(self, envelope: RequestEnvelope, response: httpx.Response) -> Any:
        status = response.status_code
        if 200 <= status < 300:
            # 204 / cuerpo vacío: no hay JSON que decodificar.
            if not response.content:
                return None
            try:
                payload = response.json()
            except ValueError as exc:
                logger.error("Non-JSON response from %s: %s", envelope.url, exc)
                raise TransportError(f"Invalid JSON response: {exc}") from exc
            logger.debug("Request successful: %s", payload)
            return payload

        message, body = _remote_error_message(response)
        error = RemoteRequestFailed(status, message, body)
        logger.error("Error in API request %s %s: %s", envelope.method, envelope.url, error)
        raise error

    async def get(
        self,
        endpoint: str,
        params: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.request("GET", endpoint, params=params, headers=headers)

    async def post(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.request("POST", endpoint, data=data if data is not None else {}, headers=headers)

    async def put(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.request("PUT", endpoint, data=data if data is not None else {}, headers=headers)

    async def patch(
        self,
        endpoint: str,
        data: Mapping[str, Any] | None = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.request("PATCH", endpoint, data=data if data is not None else {}, headers=headers)

    async def delete(
        self,
        endpoint: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        return await self.request("DELETE", endpoint, headers=headers)
