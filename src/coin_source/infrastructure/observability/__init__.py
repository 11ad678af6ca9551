"""
Structured logging for coin-source, built on structlog over stdlib logging.
"""

from .logging import (
    # Layer-specific logger factories
    get_infrastructure_logger,
    # Base logger factory
    get_logger,
    get_processing_logger,
    # Setup
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    # Base
    "get_logger",
    # Layer-specific
    "get_infrastructure_logger",
    "get_processing_logger",
]
