"""
Schemas Package

JSON schema definitions and validation utilities.
"""

from .validator import (
    validate_pool,
    ValidationError,
    KNOWN_TYPES,
)

__all__ = [
    "validate_pool",
    "ValidationError",
    "KNOWN_TYPES",
]
