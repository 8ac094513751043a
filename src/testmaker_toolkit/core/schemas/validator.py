"""
Schema Validation Utilities

Validates master pool JSON data before it is turned into models.

Two levels:
- Basic checks (always): required fields, known question types,
  correct-answer indices inside the option list, unique ids per section
- Strict mode: full JSON Schema validation against ``pool.schema.json``
  using jsonschema

Fail fast: the first violation raises ValidationError with a dotted path.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema


POOL_SCHEMA_NAME = "pool"

KNOWN_TYPES = ("mcq", "reading", "fill-in-the-blank", "writing")


# Load schemas lazily
_SCHEMAS: dict[str, dict] = {}


def _load_schema(name: str) -> dict:
    """Load a schema from the schemas directory."""
    if name not in _SCHEMAS:
        schema_path = Path(__file__).parent / f"{name}.schema.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")
        with open(schema_path, "r", encoding="utf-8") as f:
            _SCHEMAS[name] = json.load(f)
    return _SCHEMAS[name]


class ValidationError(Exception):
    """Raised when data fails schema validation."""

    def __init__(self, message: str, path: str = "", errors: list[str] | None = None):
        super().__init__(message)
        self.path = path
        self.errors = errors or []


def validate_pool(data: dict[str, Any], *, strict: bool = False) -> None:
    """
    Validate master pool data.

    Args:
        data: Pool dictionary (``{"name": ..., "sections": [...]}``)
        strict: If True, also validate against the JSON Schema

    Raises:
        ValidationError: If data is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Pool must be a JSON object", path="")

    sections = data.get("sections")
    if not isinstance(sections, list):
        raise ValidationError("Pool must contain a 'sections' list", path="sections")

    for i, section in enumerate(sections):
        _validate_section(section, f"sections[{i}]")

    if strict:
        schema = _load_schema(POOL_SCHEMA_NAME)
        try:
            jsonschema.validate(data, schema)
        except jsonschema.ValidationError as e:
            raise ValidationError(
                f"Schema validation failed: {e.message}",
                path=".".join(str(p) for p in e.absolute_path),
                errors=[e.message],
            ) from e


def _validate_section(data: Any, path: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError("Section must be an object", path=path)

    if data.get("id") is None and data.get("sectionId") is None:
        raise ValidationError("Section missing required field: id", path=path, errors=["Missing field: id"])

    questions = data.get("questions", [])
    if not isinstance(questions, list):
        raise ValidationError("questions must be a list", path=f"{path}.questions")

    seen: set[str] = set()
    for i, question in enumerate(questions):
        q_path = f"{path}.questions[{i}]"
        _validate_question(question, q_path)
        qid = str(question["id"])
        if qid in seen:
            raise ValidationError(f"Duplicate question id: {qid!r}", path=f"{q_path}.id")
        seen.add(qid)


def _validate_question(data: Any, path: str) -> None:
    if not isinstance(data, dict):
        raise ValidationError("Question must be an object", path=path)

    missing = [f for f in ("id", "type") if f not in data]
    if missing:
        raise ValidationError(
            f"Question missing required fields: {missing}",
            path=path,
            errors=[f"Missing field: {f}" for f in missing],
        )

    kind = str(data["type"]).strip().lower()
    if kind not in KNOWN_TYPES:
        raise ValidationError(f"Invalid question type: {data['type']!r}", path=f"{path}.type")

    if kind == "mcq":
        _validate_choice(data, path)
    elif kind in ("reading", "fill-in-the-blank"):
        subs = data.get("questions", [])
        if not isinstance(subs, list):
            raise ValidationError("questions must be a list", path=f"{path}.questions")
        for i, sub in enumerate(subs):
            if not isinstance(sub, dict) or "id" not in sub:
                raise ValidationError("Sub-question missing id", path=f"{path}.questions[{i}]")
            _validate_choice(sub, f"{path}.questions[{i}]")


def _validate_choice(data: dict[str, Any], path: str) -> None:
    """Validate options / correctAnswer of a single-choice item."""
    options = data.get("options", [])
    if not isinstance(options, list) or not all(isinstance(o, str) for o in options):
        raise ValidationError("options must be a list of strings", path=f"{path}.options")

    correct = data.get("correctAnswer", 0)
    if not isinstance(correct, int) or isinstance(correct, bool):
        raise ValidationError(
            f"Invalid correctAnswer: {correct!r} (must be an integer)",
            path=f"{path}.correctAnswer",
        )
    if options and not (0 <= correct < len(options)):
        raise ValidationError(
            f"correctAnswer {correct} out of range ({len(options)} options)",
            path=f"{path}.correctAnswer",
        )
