"""Utilities package for Foyer Planner."""
from .logging_setup import (
    TRACE,
    PlacementLogger,
    get_logger,
    log_function_call,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_function_call",
    "PlacementLogger",
    "TRACE",
]
