"""
Locations of bundled resources and per-user application directories.
"""
import os
import sys
from pathlib import Path

from inkstamp.config import Config


def get_resource_path(relative_path: str) -> str:
    """
    Get the absolute path to a resource file.

    Handles both running from source and running as a PyInstaller bundle.

    Args:
        relative_path: Relative path to the resource from project root

    Returns:
        Absolute path to the resource
    """
    if hasattr(sys, '_MEIPASS'):
        base_path = Path(sys._MEIPASS)
    else:
        base_path = Path(os.path.abspath('.'))

    return str(base_path / relative_path)


def get_app_data_dir(app_name: str = Config.APP_DIR_NAME) -> Path:
    """
    Get the application data directory, creating it if needed.

    Args:
        app_name: Name of the application directory
    """
    if os.name == 'nt':  # Windows
        base_dir = os.environ.get('APPDATA', os.path.expanduser('~'))
    elif sys.platform == 'darwin':  # macOS
        base_dir = os.path.expanduser('~/Library/Application Support')
    else:  # Linux and others
        base_dir = os.path.expanduser('~/.local/share')

    app_dir = Path(base_dir) / app_name
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def get_log_dir(app_name: str = Config.APP_DIR_NAME) -> Path:
    """Directory the log file is written to."""
    log_dir = get_app_data_dir(app_name) / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir
