"""
Logging and metrics for the activity planner.
"""

from .logger import configure_logging, get_logger, log_operation, setup_logger

__all__ = [
    "configure_logging",
    "get_logger",
    "log_operation",
    "setup_logger",
]
