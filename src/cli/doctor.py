"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, write_user_env_vars
from core.domain.models import ClientConfig
from core.errors import InvalidInput
from core.validation import validate_phone_number

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and credential setup.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    config = ClientConfig(
        api_key_sid="doctor",
        base_url=url,
        timeout_seconds=settings.http_timeout_seconds,
    )
    try:
        async with build_async_client(config) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


def _check_sender(number: str | None) -> tuple[str, str]:
    if not number:
        return "MISSING", "Set ORDERLINK_MESSAGING_FROM_NUMBER"
    try:
        validate_phone_number(number)
    except InvalidInput as exc:
        return "FAIL", str(exc)
    return "OK", number


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip connectivity checks."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="orderlink Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row(
        "Billing key",
        "OK" if settings.billing_api_key else "MISSING",
        "Set ORDERLINK_BILLING_API_KEY" if not settings.billing_api_key else "configured",
    )
    table.add_row("Billing base_url", "OK", settings.billing_base_url)

    has_messaging = bool(settings.messaging_api_key_sid or settings.messaging_account_sid)
    table.add_row(
        "Messaging credentials",
        "OK" if has_messaging else "MISSING",
        "configured" if has_messaging else "Set ORDERLINK_MESSAGING_API_KEY_SID/SECRET",
    )
    table.add_row(
        "Messaging base_url",
        "OK" if settings.messaging_base_url else "MISSING",
        settings.messaging_base_url or "Set ORDERLINK_MESSAGING_ACCOUNT_SID",
    )
    status, detail = _check_sender(settings.messaging_from_number)
    table.add_row("Sender number", status, detail)

    if not offline:
        for label, url in (
            ("Billing connectivity", settings.billing_base_url),
            ("Messaging connectivity", settings.messaging_base_url),
        ):
            if not url:
                continue
            ok, info = asyncio.run(_check_http(url, settings))
            table.add_row(label, "OK" if ok else "FAIL", info)

    _console.print(table)


@app.command(name="setup")
def setup() -> None:
    """Interactive credential setup (stores config in the user config .env)."""

    billing_key = typer.prompt("Billing API key", hide_input=True).strip()
    account_sid = typer.prompt("Messaging account SID").strip()
    key_sid = typer.prompt("Messaging API key SID", default=account_sid, show_default=True).strip()
    key_secret = typer.prompt("Messaging API key secret", hide_input=True).strip()
    from_number = typer.prompt("Sender phone number (E.164)").strip()

    try:
        validate_phone_number(from_number)
    except InvalidInput as exc:
        raise typer.BadParameter(str(exc)) from exc

    env_path = write_user_env_vars(
        {
            "ORDERLINK_BILLING_API_KEY": billing_key,
            "ORDERLINK_MESSAGING_ACCOUNT_SID": account_sid,
            "ORDERLINK_MESSAGING_API_KEY_SID": key_sid,
            "ORDERLINK_MESSAGING_API_KEY_SECRET": key_secret,
            "ORDERLINK_MESSAGING_FROM_NUMBER": from_number,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
