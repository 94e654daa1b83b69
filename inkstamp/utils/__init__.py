"""
Utility functions and helpers.
"""
from .color_utils import NO_FILL, fill_to_rgb, hex_to_rgb, hex_to_rgb255, is_hex_color
from .logging_config import LoggingConfig
from .resource_loader import get_app_data_dir, get_log_dir, get_resource_path

__all__ = [
    # Colors
    'NO_FILL',
    'is_hex_color',
    'hex_to_rgb',
    'hex_to_rgb255',
    'fill_to_rgb',

    # Logging
    'LoggingConfig',

    # Resource management
    'get_resource_path',
    'get_app_data_dir',
    'get_log_dir',
]
