"""
Serialization Utilities

Provides JSON load/save helpers for master pools and generated tests.

- All models have ``to_dict()`` and ``from_dict()`` methods
- Pool data is validated against the schema before deserialization
- Calculated values (question counts) are written for readers of the
  file format but always recalculated on load
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from ..models.generated import GeneratedTest
from ..models.sections import MasterPool
from ..schemas.validator import validate_pool

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────────────
# Master Pool
# ─────────────────────────────────────────────────────────────────────────────

def serialize_pool(pool: MasterPool) -> dict[str, Any]:
    """Serialize a MasterPool to a dictionary."""
    return pool.to_dict()


def deserialize_pool(
    data: dict[str, Any],
    *,
    validate: bool = True,
    strict: bool = False,
) -> MasterPool:
    """
    Deserialize a MasterPool from a dictionary.

    A whole project document is accepted as well; its ``masterTest``
    entry is used.

    Args:
        data: Dictionary from JSON
        validate: Whether to validate against schema first
        strict: Use full JSON Schema validation

    Returns:
        MasterPool instance

    Raises:
        ValidationError: If validate=True and data is invalid
        ValueError: If data cannot be parsed into models
    """
    if "masterTest" in data and "sections" not in data:
        data = data["masterTest"]
    if validate:
        validate_pool(data, strict=strict)
    return MasterPool.from_dict(data)


def load_pool_json(
    path: Path,
    *,
    validate: bool = True,
    strict: bool = False,
) -> MasterPool:
    """
    Load a master pool from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file is not valid JSON
        ValidationError: If pool data is invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"Pool file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    pool = deserialize_pool(data, validate=validate, strict=strict)
    logger.info(f"Loaded pool {pool.name!r} from {path.name}: {len(pool.sections)} sections, {pool.question_total} questions")
    return pool


def save_pool_json(pool: MasterPool, path: Path) -> None:
    """Save a master pool to a JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(serialize_pool(pool), f, indent=2, ensure_ascii=False)


# ─────────────────────────────────────────────────────────────────────────────
# Generated Tests
# ─────────────────────────────────────────────────────────────────────────────

def serialize_tests(tests: Iterable[GeneratedTest]) -> list[dict[str, Any]]:
    return [t.to_dict() for t in tests]


def deserialize_tests(data: list[dict[str, Any]]) -> list[GeneratedTest]:
    return [GeneratedTest.from_dict(item) for item in data]


def save_tests_json(tests: Iterable[GeneratedTest], path: Path) -> None:
    """
    Save generated tests to a JSON file as ``{"tests": [...]}``.

    Args:
        tests: Tests to write
        path: Output file (parent directories are created)
    """
    payload = serialize_tests(tests)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump({"tests": payload}, f, indent=2, ensure_ascii=False)
    logger.debug(f"Wrote {len(payload)} tests to {path}")


def load_tests_json(path: Path) -> list[GeneratedTest]:
    """
    Load generated tests written by save_tests_json.

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    if not path.exists():
        raise FileNotFoundError(f"Tests file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return deserialize_tests(data.get("tests", []))
