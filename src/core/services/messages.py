"""Servicio de SMS sobre la API de mensajería (`Messages.json`)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from core.errors import InvalidInput
from core.services.base import BaseService


def render_body(template: str, placeholders: Mapping[str, Any] | None = None) -> str:
    """Sustituye cada `{clave}` por su valor (todas las apariciones).

    Los tokens sin clave correspondiente quedan tal cual.
    """

    body = template
    for key, value in (placeholders or {}).items():
        body = body.replace(f"{{{key}}}", str(value))
    return body


class MessageService(BaseService):
    def __init__(self, *args: Any, phone_number: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._endpoint = "Messages.json"
        self._phone_number: str | None = None
        if phone_number is not None:
            self.phone_number = phone_number

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @endpoint.setter
    def endpoint(self, value: str) -> None:
        self._endpoint = value

    @property
    def phone_number(self) -> str | None:
        """Número remitente por defecto."""

        return self._phone_number

    @phone_number.setter
    def phone_number(self, value: str) -> None:
        self.validator.phone_number(value, "From")
        self._phone_number = value

    async def send(
        self,
        data: Mapping[str, Any],
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        self.validator.data(data, ["To", "From", "Body"])
        self.validator.phone_number(data["To"], "To")
        self.validator.phone_number(data["From"], "From")
        return await self.run(
            lambda: self.api.post(self.endpoint, data, headers=headers),
            "Send message",
        )

    async def create(
        self,
        to: str,
        body_template: str,
        placeholders: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        data = {
            "To": to,
            "From": self.phone_number,
            "Body": render_body(body_template, placeholders),
        }
        return await self.send(data)

    async def list(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.run(
            lambda: self.api.get(self.endpoint, params or {}),
            "List messages",
        )

    async def get_by_sid(self, sid: str) -> dict[str, Any]:
        """GET `Messages/{sid}.json`: el sufijo `.json` del endpoint no se repite."""

        if not sid:
            raise InvalidInput("sid", "message SID is required")
        resource = self.endpoint.removesuffix(".json")
        return await self.run(
            lambda: self.api.get(f"{resource}/{sid}.json"),
            "Retrieve message by SID",
        )
