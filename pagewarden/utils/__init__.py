"""
pagewarden utilities module.
"""

from pagewarden.utils.config import get_project_root, get_settings
from pagewarden.utils.logging import LogContext, configure_logging, get_logger

__all__ = [
    # Config
    "get_settings",
    "get_project_root",
    # Logging
    "get_logger",
    "configure_logging",
    "LogContext",
]
