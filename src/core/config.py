"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Los adaptadores HTTP reciben un `ClientConfig` derivado de aquí, nunca
  leen el entorno por su cuenta.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.models import ClientConfig
from core.services.order_items import SanitizePolicy

DEFAULT_INVOICE_MESSAGE = (
    "Thank you {name} for your order. "
    "Click the following link to view or pay your invoice: {link}"
)


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "orderlink"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "orderlink"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "orderlink"
    return Path.home() / ".config" / "orderlink"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        if key:
            data[key] = value.strip().strip('"').strip("'")
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# orderlink user config (.env)"]
    for key in sorted(existing):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central: credenciales, URLs base y remitente por defecto.

    Se lee una vez al arrancar; no hay reconfiguración en caliente.
    """

    model_config = SettingsConfigDict(
        env_prefix="ORDERLINK_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    # Facturación (sid-only: la clave secreta va como usuario de Basic Auth)
    billing_api_key: str = Field(
        default="",
        description="API key secreta de la API de facturación.",
    )
    billing_base_url: str = Field(
        default="https://api.stripe.com/v1/",
        min_length=8,
        description="URL base de la API de facturación (con '/' final).",
    )

    # Mensajería
    messaging_account_sid: str = Field(
        default="",
        description="SID de la cuenta de mensajería (forma parte de la URL).",
    )
    messaging_api_key_sid: str = Field(
        default="",
        description="SID de la API key de mensajería.",
    )
    messaging_api_key_secret: str | None = Field(
        default=None,
        description="Secreto de la API key de mensajería.",
    )
    messaging_base_url: str | None = Field(
        default=None,
        description="URL base de mensajería; si falta se deriva del account SID.",
    )
    messaging_from_number: str | None = Field(
        default=None,
        description="Número remitente por defecto (E.164).",
    )

    http_timeout_seconds: float = Field(
        default=20.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="orderlink/0.1",
        min_length=1,
        description="User-Agent de las peticiones.",
    )

    currency: str = Field(
        default="usd",
        min_length=3,
        max_length=3,
        description="Moneda ISO 4217 (minúsculas) de las líneas de factura.",
    )
    sanitize_policy: SanitizePolicy = Field(
        default=SanitizePolicy.PADDED,
        description="Política de saneado de ítems: strict | padded.",
    )
    invoice_message_template: str = Field(
        default=DEFAULT_INVOICE_MESSAGE,
        min_length=1,
        description="Plantilla del SMS con placeholders {name} y {link}.",
    )
    log_level: str = Field(
        default="INFO",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )

    @model_validator(mode="after")
    def _derive_messaging_base_url(self) -> "AppSettings":
        if not self.messaging_base_url and self.messaging_account_sid:
            self.messaging_base_url = (
                f"https://api.twilio.com/2010-04-01/Accounts/{self.messaging_account_sid}/"
            )
        return self

    def billing_client_config(self) -> ClientConfig:
        return ClientConfig(
            api_key_sid=self.billing_api_key,
            base_url=self.billing_base_url,
            timeout_seconds=self.http_timeout_seconds,
            user_agent=self.user_agent,
        )

    def messaging_client_config(self) -> ClientConfig:
        return ClientConfig(
            api_key_sid=self.messaging_api_key_sid or self.messaging_account_sid,
            api_key_secret=self.messaging_api_key_secret,
            base_url=self.messaging_base_url or "",
            timeout_seconds=self.http_timeout_seconds,
            user_agent=self.user_agent,
        )
