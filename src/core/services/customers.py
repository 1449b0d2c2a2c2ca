"""Servicio de clientes sobre la API de facturación (`customers`)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from core.domain.models import Address
from core.errors import CustomerResolutionError, InvalidInput
from core.services.base import BaseService, strip_empty

DESCRIPTION_MAX_LENGTH = 350

_ADDRESS_PARTS = ("line1", "city", "state", "postal_code")


def flatten_address(address: Address | Mapping[str, Any]) -> dict[str, Any]:
    """`{"line1": ...}` -> `{"address[line1]": ...}`; partes vacías se omiten."""

    if isinstance(address, Address):
        parts: Mapping[str, Any] = address.model_dump()
    elif isinstance(address, Mapping):
        parts = address
    else:
        raise InvalidInput("address", "must be a mapping")
    flat = {f"address[{part}]": parts.get(part) for part in _ADDRESS_PARTS}
    return strip_empty(flat)


class CustomerService(BaseService):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._endpoint = "customers"

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @endpoint.setter
    def endpoint(self, value: str) -> None:
        self._endpoint = value

    async def get_by_email(self, email: str) -> dict[str, Any]:
        """Busca clientes por email. Devuelve el sobre `{"data": [...]}` tal cual."""

        self.validator.email(email)
        return await self.run(
            lambda: self.api.get(self.endpoint, {"email": email}),
            "Retrieve customer by email",
        )

    async def create(
        self,
        data: Mapping[str, Any],
        headers: Mapping[str, str] | None = None,
    ) -> dict[str, Any]:
        self.validator.data(data, ["email"])
        self.validator.email(data["email"])

        payload = dict(data)
        address = payload.pop("address", None)
        if address:
            payload.update(flatten_address(address))

        description = payload.get("description")
        if isinstance(description, str) and len(description) > DESCRIPTION_MAX_LENGTH:
            payload["description"] = description[:DESCRIPTION_MAX_LENGTH]

        self.logger.debug("create - data being sent: %s", payload)
        return await self.run(
            lambda: self.api.post(self.endpoint, payload, headers=headers),
            "Create customer",
        )

    async def get_or_create_by_email(
        self,
        email: str,
        data: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Devuelve el primer cliente con ese email o crea uno nuevo.

        Cualquier fallo sale como `CustomerResolutionError`, con `stage`
        indicando si falló la búsqueda o la creación.
        """

        try:
            found = await self.get_by_email(email)
        except Exception as exc:
            raise CustomerResolutionError(CustomerResolutionError.LOOKUP, exc) from exc

        matches = found.get("data") if isinstance(found, Mapping) else None
        if matches:
            return matches[0]

        try:
            return await self.create(data if data else {"email": email})
        except Exception as exc:
            raise CustomerResolutionError(CustomerResolutionError.CREATE, exc) from exc
