"""Order fulfillment orchestration.

This module wires the service layer together and exposes the entry points
that sheet scripts, the CLI and tests call: find or create the billing
customer, build and finalize the invoice, and text the hosted invoice link.

Every entry point receives an explicit `OrderContext` (settings + locator);
each context owns its own set of service instances.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

import httpx

from adapters.http_client import ApiClient
from core.config import AppSettings
from core.domain.models import Address, InvoiceLink, OrderItem, OrderResult
from core.errors import InvalidInput, OrderPipelineError
from core.locator import ServiceLocator
from core.services.customers import CustomerService
from core.services.invoices import InvoiceService
from core.services.messages import MessageService
from core.services.order_items import SanitizePolicy, sanitize_order
from core.validation import Validator

logger = logging.getLogger("orderlink.pipeline")

LOGGER = "Logger"
VALIDATOR = "Validator"
BILLING_API = "BillingAPI"
MESSAGING_API = "MessagingAPI"
CUSTOMER_SERVICE = "CustomerService"
INVOICE_SERVICE = "InvoiceService"
MESSAGE_SERVICE = "MessageService"

# Used when an item reaches invoicing with no usable price: one unit of currency.
FALLBACK_AMOUNT = 100


def build_locator(
    settings: AppSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ServiceLocator:
    """Register every service; nothing is built until first `get`."""

    locator = ServiceLocator()
    locator.register(LOGGER, lambda _: logging.getLogger("orderlink.services"))
    locator.register(VALIDATOR, lambda _: Validator())
    locator.register(
        BILLING_API,
        lambda _: ApiClient(settings.billing_client_config(), transport=transport),
    )
    locator.register(
        MESSAGING_API,
        lambda _: ApiClient(settings.messaging_client_config(), transport=transport),
    )
    locator.register(
        CUSTOMER_SERVICE,
        lambda loc: CustomerService(loc.get(BILLING_API), loc.get(VALIDATOR), loc.get(LOGGER)),
    )
    locator.register(
        INVOICE_SERVICE,
        lambda loc: InvoiceService(loc.get(BILLING_API), loc.get(VALIDATOR), loc.get(LOGGER)),
    )
    locator.register(
        MESSAGE_SERVICE,
        lambda loc: MessageService(
            loc.get(MESSAGING_API),
            loc.get(VALIDATOR),
            loc.get(LOGGER),
            phone_number=settings.messaging_from_number,
        ),
    )
    return locator


@dataclass
class OrderContext:
    """Settings plus the locator that owns this run's service instances."""

    settings: AppSettings
    locator: ServiceLocator

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "OrderContext":
        settings = settings or AppSettings()
        return cls(settings=settings, locator=build_locator(settings, transport=transport))

    @property
    def customers(self) -> CustomerService:
        return self.locator.get(CUSTOMER_SERVICE)

    @property
    def invoices(self) -> InvoiceService:
        return self.locator.get(INVOICE_SERVICE)

    @property
    def messages(self) -> MessageService:
        return self.locator.get(MESSAGE_SERVICE)


def parse_address(text: str) -> Address:
    """Parse `"line1, city, STATE ZIP"` into an `Address`."""

    parts = [part.strip() for part in (text or "").split(",")]
    if len(parts) < 3 or not parts[0]:
        raise InvalidInput("address", "expected 'line1, city, STATE ZIP'")
    state_zip = parts[2].split()
    return Address(
        line1=parts[0],
        city=parts[1] or None,
        state=state_zip[0] if state_zip else None,
        postal_code=state_zip[1] if len(state_zip) > 1 else None,
    )


async def find_or_create_customer(
    ctx: OrderContext,
    email: str,
    name: str | None = None,
    phone: str | None = None,
    address: str | Address | None = None,
) -> str:
    """Return the billing customer id for `email`, creating the customer if needed."""

    data: dict[str, Any] = {"email": email}
    if name:
        data["name"] = name
    if phone:
        data["phone"] = phone
    if address:
        data["address"] = parse_address(address) if isinstance(address, str) else address

    customer = await ctx.customers.get_or_create_by_email(email, data)
    customer_id = customer.get("id") if isinstance(customer, dict) else None
    if not customer_id:
        raise OrderPipelineError("Failed to retrieve or create customer ID")
    logger.info("Customer ID retrieved: %s", customer_id)
    return customer_id


async def create_order_invoice(
    ctx: OrderContext,
    customer_id: str,
    items: Sequence[OrderItem],
) -> InvoiceLink:
    """Create a draft invoice, add one line per item, and finalize it.

    Items are created one at a time. A failure mid-way leaves the lines
    already created on the remote side.
    """

    if not items:
        raise InvalidInput("items", "at least one order item is required")

    invoices = ctx.invoices
    invoice = await invoices.create({"customer": customer_id, "auto_advance": False})
    invoice_id = invoice.get("id") if isinstance(invoice, dict) else None
    if not invoice_id:
        raise OrderPipelineError("Failed to create invoice")

    for item in items:
        await invoices.create_invoice_item(
            {
                "customer": customer_id,
                "amount": item.price if item.price > 0 else FALLBACK_AMOUNT,
                "currency": ctx.settings.currency,
                "description": item.name or "No Name",
                "invoice": invoice_id,
            }
        )

    finalized = await invoices.finalize_invoice(invoice_id)
    link = finalized.get("hosted_invoice_url") if isinstance(finalized, dict) else None
    if not link:
        raise OrderPipelineError("Failed to finalize invoice")

    logger.info("Invoice %s finalized with %d item(s)", finalized.get("id"), len(items))
    return InvoiceLink(invoice_id=finalized.get("id") or invoice_id, invoice_link=link)


async def send_invoice_link(
    ctx: OrderContext,
    invoice_link: str,
    phone: str,
    name: str,
) -> dict[str, Any]:
    """Text the hosted invoice link to the customer."""

    response = await ctx.messages.create(
        phone,
        ctx.settings.invoice_message_template,
        {"link": invoice_link, "name": name},
    )
    logger.info("Invoice link sent to %s", phone)
    return response


async def init_invoice(
    ctx: OrderContext,
    customer_id: str,
    names: Sequence[str] | str,
    prices: Sequence[str] | str,
    skus: Sequence[str] | str | None = None,
    policy: SanitizePolicy | str | None = None,
) -> str:
    """Sheet-facing variant: returns `"invoice_id,invoice_link"`."""

    items = sanitize_order(names, prices, skus, policy or ctx.settings.sanitize_policy)
    link = await create_order_invoice(ctx, customer_id, items)
    return link.as_sheet_value()


async def handle_order(
    ctx: OrderContext,
    *,
    email: str,
    name: str,
    phone: str,
    address: str | Address | None,
    names: Sequence[str] | str,
    prices: Sequence[str] | str,
    skus: Sequence[str] | str | None = None,
    policy: SanitizePolicy | str | None = None,
) -> OrderResult:
    """Run the whole order: sanitize, customer, invoice, SMS."""

    items = sanitize_order(names, prices, skus, policy or ctx.settings.sanitize_policy)
    customer_id = await find_or_create_customer(ctx, email, name, phone, address)
    link = await create_order_invoice(ctx, customer_id, items)
    message = await send_invoice_link(ctx, link.invoice_link, phone, name)

    return OrderResult(
        customer_id=customer_id,
        invoice_id=link.invoice_id,
        invoice_link=link.invoice_link,
        message_sid=message.get("sid") if isinstance(message, dict) else None,
    )
