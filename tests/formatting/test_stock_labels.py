"""
Тесты для подписей остатков и мини-формата {...}.
"""

from slotvars.config import EngineConfig, StockLabelDefaults
from slotvars.formatting.stock import (
    render_quantity_blocks, stock_label, stock_variant, strip_quantity_blocks,
)


class TestRenderQuantityBlocks:

    def test_grouping_block(self):
        assert render_quantity_blocks("Low stock, {just {quantity} left}", 3) == "Low stock, just 3 left"

    def test_grouping_block_hidden(self):
        assert render_quantity_blocks("Low stock, {just {quantity} left}", 3, hide=True) == "Low stock"

    def test_bare_placeholder(self):
        assert render_quantity_blocks("Only {quantity} left!", 2) == "Only 2 left!"
        assert render_quantity_blocks("Only {quantity} left!", 2, hide=True) == "Only left!"

    def test_pluralization(self):
        assert render_quantity_blocks("{quantity} {item} left", 1) == "1 item left"
        assert render_quantity_blocks("{quantity} {item} left", 2) == "2 items left"
        assert render_quantity_blocks("{{quantity} {unit}}", 1) == "1 unit"
        assert render_quantity_blocks("{{quantity} {piece}}", 4) == "4 pieces"

    def test_text_without_blocks(self):
        assert render_quantity_blocks("In Stock", 7) == "In Stock"

    def test_unbalanced_braces_untouched(self):
        assert render_quantity_blocks("Only {quantity left", 2) == "Only {quantity left"
        assert render_quantity_blocks("Only quantity} left", 2) == "Only quantity} left"

    def test_blocks_without_quantity_survive_hiding(self):
        assert render_quantity_blocks("Hurry{ up}, {{quantity} left}", 2, hide=True) == "Hurry up"

    def test_strip(self):
        assert strip_quantity_blocks("In Stock{, {quantity} available}") == "In Stock"


class TestStockLabel:

    def setup_method(self):
        self.settings = {
            "display_low_stock_threshold": 5,
            "stock_settings": {
                "show_stock_label": True,
                "in_stock_label": "In Stock{, {quantity} available}",
                "out_of_stock_label": "Sold out",
                "low_stock_label": "Low stock, {just {quantity} left}",
            },
        }

    def test_in_stock(self):
        assert stock_label({"stock_quantity": 20}, self.settings) == "In Stock, 20 available"

    def test_low_stock(self):
        """Тест «мало на складе» на пороге и ниже"""
        assert stock_label({"stock_quantity": 3}, self.settings) == "Low stock, just 3 left"
        assert stock_label({"stock_quantity": 5}, self.settings) == "Low stock, just 5 left"

    def test_out_of_stock(self):
        assert stock_label({"stock_quantity": 0}, self.settings) == "Sold out"
        assert stock_label({}, self.settings) == "Sold out"

    def test_hidden_quantities(self):
        self.settings["hide_stock_quantity"] = True
        assert stock_label({"stock_quantity": 3}, self.settings) == "Low stock"
        assert stock_label({"stock_quantity": 20}, self.settings) == "In Stock"

    def test_unlimited_stock(self):
        assert stock_label({"stock_quantity": 0, "infinite_stock": True}, self.settings) == "In Stock"
        assert stock_label({"stock_quantity": 2, "manage_stock": False}, self.settings) == "In Stock"

    def test_product_threshold_wins(self):
        product = {"stock_quantity": 3, "low_stock_threshold": 2}
        assert stock_label(product, self.settings) == "In Stock, 3 available"

    def test_config_threshold_default(self):
        del self.settings["display_low_stock_threshold"]
        config = EngineConfig(default_low_stock_threshold=10)
        assert stock_label({"stock_quantity": 8}, self.settings, config) == "Low stock, just 8 left"
        assert stock_label({"stock_quantity": 8}, self.settings) == "In Stock, 8 available"

    def test_disabled(self):
        self.settings["stock_settings"]["show_stock_label"] = False
        assert stock_label({"stock_quantity": 3}, self.settings) is None

    def test_empty_labels_fall_back_to_defaults(self):
        settings = {"stock_settings": {"show_stock_label": True, "low_stock_label": "", "in_stock_label": ""}}
        assert stock_label({"stock_quantity": 2}, settings) == "Low stock, just 2 left"
        assert stock_label({"stock_quantity": 50}, settings) == "In Stock"

    def test_without_stock_settings(self):
        assert stock_label({"stock_quantity": 0}, None) == "Out of Stock"
        assert stock_label({"stock_quantity": 4}, {}) == "In Stock"
        assert stock_label({"stock_quantity": 0, "infinite_stock": True}, {}) == "In Stock"

    def test_custom_default_labels(self):
        config = EngineConfig(stock_labels=StockLabelDefaults(in_stock="Available", out_of_stock="Gone"))
        assert stock_label({"stock_quantity": 0}, {}, config) == "Gone"
        assert stock_label({"stock_quantity": 9}, {}, config) == "Available"


class TestStockVariant:

    def setup_method(self):
        self.settings = {"display_low_stock_threshold": 5}

    def test_unlimited_and_out_of_stock(self):
        assert stock_variant({"infinite_stock": True, "stock_quantity": 0}, self.settings) == "outline"
        assert stock_variant({"stock_quantity": 0}, self.settings) == "destructive"
        assert stock_variant({"stock_quantity": -2}, self.settings) == "destructive"

    def test_low_stock(self):
        assert stock_variant({"stock_quantity": 3}, self.settings) == "secondary"
        assert stock_variant({"stock_quantity": 5}, self.settings) == "secondary"
        assert stock_variant({"stock_quantity": 8, "low_stock_threshold": 10}, self.settings) == "secondary"

    def test_in_stock_is_outline(self):
        assert stock_variant({"stock_quantity": 50}, self.settings) == "outline"
        assert stock_variant({"stock_quantity": 6}, self.settings) == "outline"

    def test_no_threshold_means_no_low_stock(self):
        """Без порога в товаре и настройках вариант «мало» не используется"""
        assert stock_variant({"stock_quantity": 1}, None) == "outline"
        assert stock_variant({"stock_quantity": 1}, {"display_low_stock_threshold": 0}) == "outline"
