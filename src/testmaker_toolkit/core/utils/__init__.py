"""
Utils Package

Serialization and utility functions.
"""

from .serialization import (
    serialize_pool,
    deserialize_pool,
    load_pool_json,
    save_pool_json,
    serialize_tests,
    deserialize_tests,
    save_tests_json,
    load_tests_json,
)

__all__ = [
    "serialize_pool",
    "deserialize_pool",
    "load_pool_json",
    "save_pool_json",
    "serialize_tests",
    "deserialize_tests",
    "save_tests_json",
    "load_tests_json",
]
