"""
Demo data for the editor preview.

The editor renders slot templates against synthetic data; the storefront
renders the same templates against live entities with the same field names.
"""

from __future__ import annotations

import copy
from importlib import resources
from typing import Any, Dict, Mapping, Optional

from ruamel.yaml import YAML

from .errors import SlotVarsError

_yaml = YAML(typ="safe")

DEMO_CATEGORY_PRODUCTS = 8

PAGE_TYPES = ("product", "category", "cart")


def _load_demo_resource() -> Dict[str, Any]:
    text = resources.files("slotvars").joinpath("resources/demo_data.yaml").read_text(encoding="utf-8")
    raw = _yaml.load(text) or {}
    if not isinstance(raw, dict):
        raise SlotVarsError("demo_data.yaml must be a mapping")
    return raw


def _category_products(count: int) -> list:
    return [
        {
            "name": f"Product {i + 1}",
            "price": 50 + i * 10,
            "image": f"https://placehold.co/300x300?text=Product+{i + 1}",
        }
        for i in range(count)
    ]


def generate_demo_data(page_type: Optional[str] = None, settings: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """
    Build the demo payload.

    Args:
        page_type: One of PAGE_TYPES; the payload carries every entity
            regardless, the value is only validated
        settings: Overrides shallow-merged into the demo settings

    Returns:
        A fresh dict with product, category, cart, productLabels and settings
    """
    if page_type is not None and page_type not in PAGE_TYPES:
        raise SlotVarsError(f"Unknown page type '{page_type}'. Expected one of: {', '.join(PAGE_TYPES)}")

    data = copy.deepcopy(_load_demo_resource())
    data.setdefault("category", {})["products"] = _category_products(DEMO_CATEGORY_PRODUCTS)
    data["settings"] = {**data.get("settings", {}), **dict(settings or {})}
    return data


__all__ = ["generate_demo_data", "PAGE_TYPES"]
