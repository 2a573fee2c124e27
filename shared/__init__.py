"""
BASTION Shared Library
======================

Common utilities and configuration shared across Bastion services.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - models: Shared Pydantic API models

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "Bastion Team"

from shared.config import settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
