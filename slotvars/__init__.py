"""
Slot template engine: resolves {{variables}}, {{#if}} conditionals and
{{#each}} loops in page-builder slot content.
"""

from .config import EngineConfig, load_engine_config
from .demo import generate_demo_data
from .errors import SlotVarsError
from .formatting import stock_label, stock_variant, render_quantity_blocks
from .templating import process_variables, process_template

__all__ = [
    "process_variables",
    "process_template",
    "generate_demo_data",
    "stock_label",
    "stock_variant",
    "render_quantity_blocks",
    "EngineConfig",
    "load_engine_config",
    "SlotVarsError",
]
