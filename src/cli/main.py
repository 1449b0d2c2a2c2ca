"""CLI de orderlink (Typer + Rich).

Los comandos solo parsean argumentos, llaman a `core.services.order_pipeline`
y presentan el resultado; no contienen lógica de negocio.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, TypeVar

import typer
from pydantic import BaseModel, ValidationError
from rich.console import Console

from adapters.json_exporter import export_result_json
from cli import doctor
from cli.ui_components import (
    build_items_table,
    build_record_table,
    build_result_panel,
    print_banner,
)
from core.config import AppSettings
from core.errors import OrderLinkError
from core.logging_setup import configure_logging
from core.services.order_items import SanitizePolicy, sanitize_order
from core.services.order_pipeline import (
    OrderContext,
    find_or_create_customer,
    handle_order,
    init_invoice,
    send_invoice_link,
)

T = TypeVar("T")

app = typer.Typer(no_args_is_help=True, help="Customer, invoice and SMS glue for order fulfillment.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
) -> None:
    configure_logging(log_level or AppSettings().log_level)


def _execute(awaitable: Awaitable[T]) -> T:
    try:
        return asyncio.run(awaitable)  # type: ignore[arg-type]
    except (OrderLinkError, ValidationError) as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _context() -> OrderContext:
    try:
        return OrderContext.from_settings(AppSettings())
    except ValidationError as exc:
        _err_console.print(f"[red]Invalid configuration:[/red] {exc}")
        raise typer.Exit(code=1) from exc


def _emit(result: BaseModel | dict[str, Any], *, as_json: bool, output: Path | None) -> bool:
    """Vuelca JSON/archivo si se pidió. Devuelve True si ya se imprimió algo."""

    if output is not None:
        path = export_result_json(result=result, output_path=output)
        _console.print(f"[green]Saved:[/green] {path}")
    if as_json:
        payload = result.model_dump(mode="json") if isinstance(result, BaseModel) else result
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return True
    return False


@app.command()
def items(
    names: str = typer.Option(..., "--names", help="Comma-separated item names."),
    prices: str = typer.Option(..., "--prices", help="Comma-separated item prices."),
    skus: str = typer.Option(None, "--skus", help="Comma-separated SKUs."),
    policy: SanitizePolicy = typer.Option(None, "--policy", help="strict or padded."),
) -> None:
    """Preview sanitized order items (no network calls)."""

    settings = AppSettings()
    try:
        order_items = sanitize_order(names, prices, skus, policy or settings.sanitize_policy)
    except OrderLinkError as exc:
        _err_console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(code=1) from exc
    _console.print(build_items_table(order_items, settings.currency))


@app.command()
def customer(
    email: str = typer.Option(..., "--email"),
    name: str = typer.Option(None, "--name"),
    phone: str = typer.Option(None, "--phone"),
    address: str = typer.Option(None, "--address", help="'line1, city, STATE ZIP'"),
) -> None:
    """Find or create the billing customer and print its id."""

    ctx = _context()
    customer_id = _execute(find_or_create_customer(ctx, email, name, phone, address))
    typer.echo(customer_id)


@app.command()
def invoice(
    customer_id: str = typer.Option(..., "--customer", help="Billing customer id."),
    names: str = typer.Option(..., "--names"),
    prices: str = typer.Option(..., "--prices"),
    skus: str = typer.Option(None, "--skus"),
    policy: SanitizePolicy = typer.Option(None, "--policy"),
) -> None:
    """Create and finalize an invoice; prints `invoice_id,invoice_link`."""

    ctx = _context()
    typer.echo(_execute(init_invoice(ctx, customer_id, names, prices, skus, policy)))


@app.command()
def notify(
    link: str = typer.Option(..., "--link", help="Hosted invoice URL."),
    phone: str = typer.Option(..., "--phone"),
    name: str = typer.Option(..., "--name"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw API response."),
) -> None:
    """Text an invoice link to a customer."""

    ctx = _context()
    response = _execute(send_invoice_link(ctx, link, phone, name))
    if _emit(response or {}, as_json=as_json, output=None):
        return
    _console.print(build_record_table("Message", response or {}, ("sid", "to", "from", "status", "body")))


@app.command()
def order(
    email: str = typer.Option(..., "--email"),
    name: str = typer.Option(..., "--name"),
    phone: str = typer.Option(..., "--phone"),
    address: str = typer.Option(None, "--address", help="'line1, city, STATE ZIP'"),
    names: str = typer.Option(..., "--names"),
    prices: str = typer.Option(..., "--prices"),
    skus: str = typer.Option(None, "--skus"),
    policy: SanitizePolicy = typer.Option(None, "--policy"),
    as_json: bool = typer.Option(False, "--json"),
    output: Path = typer.Option(None, "--output", help="Write the result as JSON."),
    quiet: bool = typer.Option(False, "--quiet", help="Hide the banner."),
) -> None:
    """Full flow: customer, invoice and SMS with the invoice link."""

    ctx = _context()
    result = _execute(
        handle_order(
            ctx,
            email=email,
            name=name,
            phone=phone,
            address=address,
            names=names,
            prices=prices,
            skus=skus,
            policy=policy,
        )
    )
    if _emit(result, as_json=as_json, output=output):
        return
    if not quiet:
        print_banner(_console)
    _console.print(build_result_panel(result))


def run() -> None:
    app()
