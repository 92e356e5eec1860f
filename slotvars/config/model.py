"""
Модели конфигурации движка подстановки переменных.

Все модели неизменяемые: один экземпляр конфигурации можно безопасно
разделять между параллельными вызовами движка.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


STOCK_STATUS_MARKUP = (
    '<span class="stock-badge w-fit inline-flex items-center px-2 py-1 rounded-full '
    'text-xs bg-gray-100 text-gray-600" data-bind="stock-status">Loading...</span>'
)


@dataclass(frozen=True)
class StockLabelDefaults:
    """
    Подписи остатков, используемые когда в настройках магазина
    соответствующая подпись не задана.
    """
    in_stock: str = "In Stock"
    out_of_stock: str = "Out of Stock"
    low_stock: str = "Low stock, {just {quantity} left}"


@dataclass(frozen=True)
class EngineConfig:
    """
    Настройки движка.

    Attributes:
        max_loop_depth: Предел вложенности {{#each}}; глубже циклы не раскрываются
        default_currency_symbol: Символ валюты для «сырых» числовых цен
        formatted_price_currency_symbol: Символ валюты для *_price_formatted
        text_placeholder: Текст-заглушка редактора, который не считается готовой ценой
        stock_status_markup: Разметка-заглушка для {{product.stock_status}}
        price_format_exclusions: Пути с «price», которые не форматируются как цена
        default_low_stock_threshold: Порог «мало на складе» по умолчанию
        stock_labels: Подписи остатков по умолчанию
    """
    max_loop_depth: int = 10
    default_currency_symbol: str = "$"
    formatted_price_currency_symbol: str = "€"
    text_placeholder: str = "[Text placeholder]"
    stock_status_markup: str = STOCK_STATUS_MARKUP
    price_format_exclusions: Tuple[str, ...] = ("filters.price_range",)
    default_low_stock_threshold: int = 5
    stock_labels: StockLabelDefaults = field(default_factory=StockLabelDefaults)


DEFAULT_CONFIG = EngineConfig()


__all__ = ["EngineConfig", "StockLabelDefaults", "DEFAULT_CONFIG", "STOCK_STATUS_MARKUP"]
