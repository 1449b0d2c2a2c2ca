"""Servicio de facturas sobre la API de facturación.

Endpoints:
- `invoices` (CRUD + `invoices/{id}/finalize`)
- `invoiceitems` (líneas de factura)
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from core.services.base import BaseService


class InvoiceService(BaseService):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._endpoint = "invoices"
        self._invoice_items_endpoint = "invoiceitems"

    @property
    def endpoint(self) -> str:
        return self._endpoint

    @endpoint.setter
    def endpoint(self, value: str) -> None:
        self._endpoint = value

    @property
    def invoice_items_endpoint(self) -> str:
        return self._invoice_items_endpoint

    @invoice_items_endpoint.setter
    def invoice_items_endpoint(self, value: str) -> None:
        self._invoice_items_endpoint = value

    async def create_invoice_item(self, data: Mapping[str, Any]) -> dict[str, Any]:
        self.validator.data(data, ["customer", "amount", "currency"])
        return await self.run(
            lambda: self.api.post(self.invoice_items_endpoint, data),
            "Create invoice item",
        )

    async def create(self, data: Mapping[str, Any]) -> dict[str, Any]:
        self.validator.data(data, ["customer"])
        return await self.run(
            lambda: self.api.post(self.endpoint, data),
            "Create invoice",
        )

    async def finalize_invoice(self, invoice_id: str) -> dict[str, Any]:
        self.validator.data({"id": invoice_id}, ["id"])
        return await self.run(
            lambda: self.api.post(f"{self.endpoint}/{invoice_id}/finalize", {}),
            "Finalize invoice",
        )

    async def get_by_id(self, invoice_id: str) -> dict[str, Any]:
        self.validator.data({"id": invoice_id}, ["id"])
        return await self.run(
            lambda: self.api.get(f"{self.endpoint}/{invoice_id}"),
            "Retrieve invoice by ID",
        )

    async def update(self, invoice_id: str, data: Mapping[str, Any]) -> dict[str, Any]:
        """Actualiza una factura. `data` puede ir vacío, pero debe ser un mapping."""

        self.validator.data({"id": invoice_id}, ["id"])
        self.validator.data(data, [])
        return await self.run(
            lambda: self.api.patch(f"{self.endpoint}/{invoice_id}", data),
            "Update invoice",
        )

    async def delete(self, invoice_id: str) -> dict[str, Any] | None:
        self.validator.data({"id": invoice_id}, ["id"])
        return await self.run(
            lambda: self.api.delete(f"{self.endpoint}/{invoice_id}"),
            "Delete invoice",
        )

    async def list(self, params: Mapping[str, Any] | None = None) -> dict[str, Any]:
        return await self.run(
            lambda: self.api.get(self.endpoint, params or {}),
            "List invoices",
        )
