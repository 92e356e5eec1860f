from .model import EngineConfig, StockLabelDefaults, DEFAULT_CONFIG
from .load import load_engine_config, read_data_file
from .typed import ConfigLoadError, load_typed

__all__ = [
    "EngineConfig",
    "StockLabelDefaults",
    "DEFAULT_CONFIG",
    "load_engine_config",
    "read_data_file",
    "ConfigLoadError",
    "load_typed",
]
