from .loader import load_config_layer, read_config_file
from .paths import PlatformInfo, default_config_path
from .resolver import default_layer, merge_layers, resolve, validate_settings

__all__ = [
    "PlatformInfo",
    "default_config_path",
    "default_layer",
    "load_config_layer",
    "merge_layers",
    "read_config_file",
    "resolve",
    "validate_settings",
]
