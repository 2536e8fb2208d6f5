"""Observability module for the archive API.

This module provides:
- Structured (JSON) log formatting with request/article context
- Root logger configuration from the environment
"""

from .logger import StructuredFormatter, clear_context, configure_logging, get_request_id, set_context

__all__ = [
    "StructuredFormatter",
    "configure_logging",
    "set_context",
    "clear_context",
    "get_request_id",
]
