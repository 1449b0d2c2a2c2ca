"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Validación estricta en el borde (config de clientes, ítems de pedido)
  sin acoplar el Core a librerías de I/O.
- Los registros remotos (Customer, Invoice, Message) NO se modelan: el Core
  solo da forma a los campos salientes y devuelve el JSON decodificado tal cual.
"""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class ClientConfig(BaseModel):
    """Configuración inmutable de un cliente HTTP.

    Enumera las opciones reconocidas; no hay mapa abierto de "extras"
    salvo `extra_headers`, que se fusiona sobre las cabeceras base.
    """

    model_config = ConfigDict(frozen=True)

    api_key_sid: str = Field(
        ...,
        min_length=1,
        description="Identificador de la credencial (usuario de Basic Auth).",
    )
    api_key_secret: str | None = Field(
        default=None,
        description="Secreto de la credencial. Algunas APIs usan solo el SID.",
    )
    base_url: str = Field(
        ...,
        min_length=8,
        description="URL base; los endpoints se concatenan tal cual.",
    )
    extra_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Cabeceras adicionales (prevalecen sobre las base).",
    )
    content_type: str = Field(
        default=FORM_CONTENT_TYPE,
        min_length=1,
        description="Content-Type de las peticiones.",
    )
    timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="orderlink/0.1",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )


class Address(BaseModel):
    model_config = ConfigDict(extra="ignore")

    line1: str | None = None
    city: str | None = None
    state: str | None = None
    postal_code: str | None = None


class OrderItem(BaseModel):
    """Ítem de pedido ya saneado. `price` está en unidades menores (centavos)."""

    name: str = Field(default="No Name", min_length=1)
    price: int = Field(..., ge=0, description="Precio en unidades menores.")
    sku: str = Field(default="NA", min_length=1)


class InvoiceLink(BaseModel):
    invoice_id: str = Field(..., min_length=1)
    invoice_link: str = Field(..., min_length=1)

    def as_sheet_value(self) -> str:
        """Formato `id,link` que consume la hoja de cálculo."""

        return f"{self.invoice_id},{self.invoice_link}"


class OrderResult(BaseModel):
    """Resultado de un pedido procesado de punta a punta."""

    customer_id: str
    invoice_id: str
    invoice_link: str
    message_sid: str | None = Field(
        default=None,
        description="SID del SMS enviado, si la API lo devolvió.",
    )
