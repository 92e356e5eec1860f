import pytest

from slotvars import process_variables


@pytest.fixture
def store_context():
    """Данные магазина: валюта и настройки остатков."""
    return {
        "settings": {
            "currency_symbol": "$",
            "display_low_stock_threshold": 5,
            "product_gallery_layout": "vertical",
            "vertical_gallery_position": "left",
            "stock_settings": {
                "show_stock_label": True,
                "in_stock_label": "In Stock",
                "out_of_stock_label": "Out of Stock",
                "low_stock_label": "Low stock, {just {quantity} left}",
            },
        },
    }


@pytest.fixture
def product_page():
    """Данные страницы товара."""
    return {
        "product": {
            "name": "Trail Shoe",
            "price": 10,
            "stock_quantity": 3,
            "labels": ["SALE", "NEW"],
            "images": ["a.jpg", "b.jpg"],
            "related_products": [
                {"name": "Sock", "price": 4.5},
                {"name": "Lace", "price": 1},
            ],
        },
    }


@pytest.fixture
def render(store_context, product_page):
    """Рендер шаблона против store_context + product_page."""
    def _render(template: str, **page_overrides) -> str:
        page = {**product_page, **page_overrides}
        return process_variables(template, store_context, page)
    return _render
