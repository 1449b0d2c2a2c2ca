"""Saneado de ítems de pedido a partir de cadenas separadas por comas.

Hay dos políticas y el llamador elige:
- `STRICT`: las listas deben tener la misma longitud y cada precio debe ser numérico.
- `PADDED`: se rellena hasta la lista más larga con valores por defecto
  (`"No Name"`, `1.00`, `"NA"`).

Los precios salen en unidades menores (centavos), redondeando half-up.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any

from core.domain.models import OrderItem
from core.errors import InvalidInput

logger = logging.getLogger("orderlink.order_items")

DEFAULT_NAME = "No Name"
DEFAULT_PRICE = Decimal("1.00")
DEFAULT_SKU = "NA"


class SanitizePolicy(str, Enum):
    STRICT = "strict"
    PADDED = "padded"


def explode(value: Any) -> list[str]:
    """`"a, b,c"` -> `["a", "b", "c"]`. Las secuencias se normalizan igual."""

    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",")]
    if isinstance(value, Sequence):
        return [str(part).strip() for part in value]
    return [part.strip() for part in str(value).split(",")]


def to_minor_units(amount: Decimal | float | int | str) -> int:
    """Lanza `InvalidInput("price")` si el monto no es numérico o excede la precisión decimal."""

    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
        return int((value * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError) as exc:
        raise InvalidInput("price", f"invalid amount: {amount!r}") from exc


def _parse_price(raw: str) -> Decimal | None:
    try:
        value = Decimal(raw)
    except (InvalidOperation, ValueError):
        return None
    if not value.is_finite():
        return None
    try:
        to_minor_units(value)
    except InvalidInput:
        return None
    return value


def sanitize_strict(
    names: Sequence[str] | str,
    prices: Sequence[str] | str,
    skus: Sequence[str] | str | None = None,
) -> list[OrderItem]:
    """Sin SKUs (`None`) cada ítem recibe `"NA"`; si se pasan, deben cuadrar."""

    name_list = explode(names)
    price_list = explode(prices)
    sku_list = explode(skus) if skus is not None else [DEFAULT_SKU] * len(name_list)

    if not (len(name_list) == len(price_list) == len(sku_list)):
        raise InvalidInput(
            "items",
            "the number of item names, prices, and SKUs do not match "
            f"({len(name_list)}/{len(price_list)}/{len(sku_list)})",
        )

    items: list[OrderItem] = []
    for index, (name, raw_price, sku) in enumerate(zip(name_list, price_list, sku_list)):
        price = _parse_price(raw_price)
        if price is None or price < 0:
            raise InvalidInput(f"price[{index}]", f"invalid price: {raw_price!r}")
        if not name:
            raise InvalidInput(f"name[{index}]", "missing item name")
        items.append(OrderItem(name=name, price=to_minor_units(price), sku=sku or DEFAULT_SKU))
    return items


def sanitize_padded(
    names: Sequence[str] | str,
    prices: Sequence[str] | str,
    skus: Sequence[str] | str | None = None,
) -> list[OrderItem]:
    name_list = explode(names)
    price_list = explode(prices)
    sku_list = explode(skus)
    size = max(len(name_list), len(price_list), len(sku_list))

    items: list[OrderItem] = []
    for index in range(size):
        name = name_list[index] if index < len(name_list) else ""
        raw_price = price_list[index] if index < len(price_list) else ""
        sku = sku_list[index] if index < len(sku_list) else ""

        price = _parse_price(raw_price) if raw_price else None
        if price is None or price <= 0:
            if raw_price:
                logger.warning("Item %d: price %r replaced by %s", index, raw_price, DEFAULT_PRICE)
            price = DEFAULT_PRICE

        items.append(
            OrderItem(
                name=name or DEFAULT_NAME,
                price=to_minor_units(price),
                sku=sku or DEFAULT_SKU,
            )
        )
    return items


def sanitize_order(
    names: Sequence[str] | str,
    prices: Sequence[str] | str,
    skus: Sequence[str] | str | None = None,
    policy: SanitizePolicy | str = SanitizePolicy.PADDED,
) -> list[OrderItem]:
    policy = SanitizePolicy(policy)
    if policy is SanitizePolicy.STRICT:
        items = sanitize_strict(names, prices, skus)
    else:
        items = sanitize_padded(names, prices, skus)
    logger.info("Order data sanitized (%s): %d item(s)", policy.value, len(items))
    return items
