"""Componentes de UI para CLI (Rich).

Separados de los comandos para reutilizar tablas/paneles entre ellos.
"""

from __future__ import annotations

from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import InvoiceLink, OrderItem, OrderResult


def print_banner(console: Console) -> None:
    title = Text("orderlink", style="bold cyan")
    subtitle = Text("Clientes • Facturas • SMS", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_items_table(items: list[OrderItem], currency: str) -> Table:
    table = Table(title="Order Items")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("SKU", style="cyan")
    table.add_column(f"Amount ({currency.upper()})", style="green", justify="right")
    for index, item in enumerate(items, start=1):
        table.add_row(str(index), item.name, item.sku, f"{item.price / 100:.2f}")
    return table


def build_result_panel(result: OrderResult | InvoiceLink) -> Panel:
    body = Text()
    if isinstance(result, OrderResult):
        body.append("Customer: ", style="bold")
        body.append(f"{result.customer_id}\n")
    body.append("Invoice: ", style="bold")
    body.append(f"{result.invoice_id}\n")
    body.append("Link: ", style="bold")
    body.append(result.invoice_link, style="magenta")
    if isinstance(result, OrderResult) and result.message_sid:
        body.append("\nSMS: ", style="bold")
        body.append(result.message_sid, style="dim")
    return Panel(body, title=Text("Invoice", style="bold green"), border_style="green")


def build_record_table(title: str, record: dict[str, Any], fields: tuple[str, ...]) -> Table:
    """Tabla clave/valor con los campos relevantes de un registro remoto."""

    table = Table(title=title)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for field in fields:
        value = record.get(field)
        if value is not None:
            table.add_row(field, str(value))
    return table
