from .formatter import ValueFormatter, format_value, format_money, format_date, stringify, to_number
from .stock import stock_label, stock_variant, render_quantity_blocks, strip_quantity_blocks

__all__ = [
    "ValueFormatter",
    "format_value",
    "format_money",
    "format_date",
    "stringify",
    "to_number",
    "stock_label",
    "stock_variant",
    "render_quantity_blocks",
    "strip_quantity_blocks",
]
