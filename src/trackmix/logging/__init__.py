"""Structured logging module for trackmix.

Provides configurable logging with JSON format support and file rotation.
Includes mix context support for tagging records emitted during a remux.
"""

from trackmix.logging.config import configure_logging
from trackmix.logging.context import (
    MixContextFilter,
    get_mix_context,
    mix_context,
    set_mix_context,
)
from trackmix.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "MixContextFilter",
    "configure_logging",
    "get_mix_context",
    "mix_context",
    "set_mix_context",
]
