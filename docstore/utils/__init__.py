"""
Utility functions for docstore.
"""

from .validation import (
    validate_name,
    validate_field,
    validate_fields,
    validate_document,
    validate_primary_key,
    make_hashable,
)
from .logging import setup_logger, get_logger

__all__ = [
    "validate_name",
    "validate_field",
    "validate_fields",
    "validate_document",
    "validate_primary_key",
    "make_hashable",
    "setup_logger",
    "get_logger",
]
