"""
Stock labels computed from store stock settings.

Kept apart from the generic {{product.stock_status}}
variable, which only emits a hydration placeholder. Call sites that need a
concrete label (product cards, badges) use stock_label() directly.

Stock labels carry their own small block syntax, unrelated to template
markers: a top-level {...} block groups text around a {quantity} placeholder
so the whole group can be dropped when the store hides exact quantities:

    "Low stock, {just {quantity} left}"  ->  "Low stock, just 3 left"
                                          ->  "Low stock"   (hidden)
"""

from __future__ import annotations

import re
from typing import Any, List, Mapping, Optional, Tuple

from ..config import EngineConfig, DEFAULT_CONFIG
from .formatter import stringify, to_number

_PLACEHOLDER = re.compile(r"\{(quantity|item|unit|piece)\}", re.IGNORECASE)

_NOUNS = {
    "item": ("item", "items"),
    "unit": ("unit", "units"),
    "piece": ("piece", "pieces"),
}


def _top_level_blocks(label: str) -> Optional[List[Tuple[int, int]]]:
    """
    Spans (start, end) of top-level {...} blocks, end exclusive.
    Returns None when braces are unbalanced.
    """
    spans: List[Tuple[int, int]] = []
    depth = 0
    start = -1
    for i, ch in enumerate(label):
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}":
            if depth == 0:
                return None
            depth -= 1
            if depth == 0:
                spans.append((start, i + 1))
    if depth != 0:
        return None
    return spans


def _fill(text: str, quantity: Any) -> str:
    number = to_number(quantity)
    singular = number == 1

    def repl(m: re.Match) -> str:
        name = m.group(1).lower()
        if name == "quantity":
            return stringify(quantity)
        one, many = _NOUNS[name]
        return one if singular else many

    return _PLACEHOLDER.sub(repl, text)


def render_quantity_blocks(label: str, quantity: Any, hide: bool = False) -> str:
    """
    Resolve {...} blocks in a stock label.

    Args:
        label: Label text from stock settings
        quantity: Stock quantity to substitute
        hide: Drop blocks that mention the quantity instead of filling them

    Returns:
        Label with blocks resolved; unbalanced labels are returned untouched
    """
    spans = _top_level_blocks(label)
    if not spans:
        return label

    parts: List[str] = []
    pos = 0
    for start, end in spans:
        parts.append(label[pos:start])
        block = label[start:end]
        if not (hide and "quantity" in block.lower()):
            # a bare {quantity} is its own placeholder; otherwise drop the grouping braces
            inner = block if _PLACEHOLDER.fullmatch(block) else block[1:-1]
            parts.append(_fill(inner, quantity))
        pos = end
    parts.append(label[pos:])
    result = "".join(parts)

    if hide:
        result = re.sub(r"\s+", " ", result)
        result = re.sub(r",\s*$", "", result.strip())
        result = result.strip()
    return result


def strip_quantity_blocks(label: str) -> str:
    return render_quantity_blocks(label, None, hide=True)


def _stock_settings(settings: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    stock = settings.get("stock_settings")
    return stock if isinstance(stock, Mapping) else None


def _low_stock_threshold(product: Mapping[str, Any], settings: Mapping[str, Any], config: EngineConfig) -> float:
    for value in (product.get("low_stock_threshold"), settings.get("display_low_stock_threshold")):
        number = to_number(value)
        if number:
            return number
    return config.default_low_stock_threshold


def _is_unlimited(product: Mapping[str, Any]) -> bool:
    return bool(product.get("infinite_stock")) or product.get("manage_stock") is False


def stock_label(
        product: Mapping[str, Any],
        settings: Optional[Mapping[str, Any]],
        config: EngineConfig = DEFAULT_CONFIG,
) -> Optional[str]:
    """
    Concrete stock label for a product.

    Returns None when the store disabled stock labels.
    """
    settings = settings or {}
    stock = _stock_settings(settings)
    quantity = product.get("stock_quantity") or 0
    amount = to_number(quantity) or 0
    defaults = config.stock_labels

    if stock is not None and stock.get("show_stock_label") is False:
        return None

    if stock is None:
        if amount <= 0 and not _is_unlimited(product):
            return defaults.out_of_stock
        return defaults.in_stock

    in_stock = stock.get("in_stock_label") or defaults.in_stock

    if _is_unlimited(product):
        return strip_quantity_blocks(in_stock)

    if amount <= 0:
        return stock.get("out_of_stock_label") or defaults.out_of_stock

    hide = settings.get("hide_stock_quantity") is True

    if amount <= _low_stock_threshold(product, settings, config):
        low_stock = stock.get("low_stock_label") or defaults.low_stock
        return render_quantity_blocks(low_stock, quantity, hide=hide)

    return render_quantity_blocks(in_stock, quantity, hide=hide)


def stock_variant(product: Mapping[str, Any], settings: Optional[Mapping[str, Any]]) -> str:
    """
    Badge variant for styling the stock label.

    Only an explicit threshold enables the low-stock variant; there is no
    configured default here, unlike stock_label().
    """
    settings = settings or {}
    if product.get("infinite_stock"):
        return "outline"
    amount = to_number(product.get("stock_quantity"))
    if amount is not None and amount <= 0:
        return "destructive"
    threshold = (to_number(product.get("low_stock_threshold"))
                 or to_number(settings.get("display_low_stock_threshold")) or 0)
    if threshold > 0 and amount is not None and amount <= threshold:
        return "secondary"
    return "outline"


__all__ = ["stock_label", "stock_variant", "render_quantity_blocks", "strip_quantity_blocks"]
