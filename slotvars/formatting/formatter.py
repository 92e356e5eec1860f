"""
Value formatting for resolved template variables.

Dispatch is by path; the first matching rule wins. The formatter never
raises: values of unexpected types fall through to plain string coercion.
"""

from __future__ import annotations

import json
import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Mapping, Optional

from ..config import EngineConfig, DEFAULT_CONFIG
from ..scope import ScopeStack

logger = logging.getLogger(__name__)

PRICE_FORMATTED = "product.price_formatted"
COMPARE_PRICE_FORMATTED = "product.compare_price_formatted"
SHORT_DESCRIPTION = "product.short_description"
STOCK_STATUS = "product.stock_status"

# Paths formatted from the product record even when they resolve to None
ALWAYS_FORMATTED = frozenset({PRICE_FORMATTED, COMPARE_PRICE_FORMATTED, SHORT_DESCRIPTION, STOCK_STATUS})


def stringify(value: Any) -> str:
    """String coercion in storefront terms: true/false, 10 rather than 10.0, JSON for containers."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False, default=str)
    return str(value)


def to_number(value: Any) -> Optional[float]:
    """Numeric view of a value, or None when it has none."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return None if math.isnan(value) else float(value)
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return None if math.isnan(number) else number
    return None


def format_money(symbol: str, amount: float) -> str:
    return f"{symbol}{amount:.2f}"


def format_date(value: Any) -> Optional[str]:
    """
    Locale date string (M/D/YYYY). Accepts date/datetime objects, ISO
    strings and epoch milliseconds; returns None for anything else.
    """
    if isinstance(value, datetime):
        d = value.date()
    elif isinstance(value, date):
        d = value
    elif isinstance(value, str):
        try:
            d = datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
        except ValueError:
            return None
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            d = datetime.fromtimestamp(value / 1000, tz=timezone.utc).date()
        except (OverflowError, OSError, ValueError):
            return None
    else:
        return None
    return f"{d.month}/{d.day}/{d.year}"


class ValueFormatter:
    """
    Path-aware stringification of resolved values.

    Product lookups go through the same scope stack as variable resolution,
    so page data shadows context and loop items shadow both.
    """

    def __init__(self, scopes: ScopeStack, config: EngineConfig = DEFAULT_CONFIG):
        self.scopes = scopes
        self.config = config

    def format(self, value: Any, path: str) -> str:
        path = path.strip()

        if value is None and path not in ALWAYS_FORMATTED:
            return ""

        if path == COMPARE_PRICE_FORMATTED:
            return self._compare_price_formatted()
        if path == PRICE_FORMATTED:
            return self._price_formatted()
        if path == SHORT_DESCRIPTION:
            return self._short_description()
        if path == STOCK_STATUS:
            # Hydrated client-side; see formatting.stock for the computed label
            return self.config.stock_status_markup

        if ("price" in path and path not in self.config.price_format_exclusions
                and isinstance(value, (int, float)) and not isinstance(value, bool)):
            return format_money(self._currency(self.config.default_currency_symbol), value)

        if "labels" in path and isinstance(value, (list, tuple)):
            return ", ".join(stringify(v) for v in value)

        if "date" in path:
            formatted = format_date(value)
            if formatted is not None:
                return formatted
            logger.debug("Unparsable date at %s: %r", path, value)

        return stringify(value)

    # -------- helpers --------

    def _product(self) -> Mapping[str, Any]:
        product = self.scopes.resolve("product")
        return product if isinstance(product, Mapping) else {}

    def _currency(self, fallback: str) -> str:
        symbol = self.scopes.resolve("settings.currency_symbol")
        return symbol if isinstance(symbol, str) and symbol else fallback

    def _preformatted(self, product: Mapping[str, Any], key: str) -> Optional[str]:
        text = product.get(key)
        if isinstance(text, str) and text and text != self.config.text_placeholder:
            return text
        return None

    def _compare_price_formatted(self) -> str:
        product = self._product()
        compare = to_number(product.get("compare_price"))
        if compare is None or compare <= 0 or compare == to_number(product.get("price")):
            return ""
        existing = self._preformatted(product, "compare_price_formatted")
        if existing is not None:
            return existing
        return format_money(self._currency(self.config.formatted_price_currency_symbol), compare)

    def _price_formatted(self) -> str:
        product = self._product()
        price = to_number(product.get("price"))
        if price is None or price <= 0:
            return ""
        existing = self._preformatted(product, "price_formatted")
        if existing is not None:
            return existing
        return format_money(self._currency(self.config.formatted_price_currency_symbol), price)

    def _short_description(self) -> str:
        product = self._product()
        for key in ("short_description", "description"):
            text = product.get(key)
            if isinstance(text, str) and text.strip():
                return text
        return ""


def format_value(value: Any, path: str, scopes: ScopeStack, config: EngineConfig = DEFAULT_CONFIG) -> str:
    """Shortcut for ValueFormatter(scopes, config).format(value, path)."""
    return ValueFormatter(scopes, config).format(value, path)


__all__ = [
    "ValueFormatter",
    "format_value",
    "format_money",
    "format_date",
    "stringify",
    "to_number",
    "ALWAYS_FORMATTED",
]
