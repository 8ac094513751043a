"""
Module: shuffler.validation

Purpose:
    Pre-flight check that a generation request is achievable.
    Failures are returned as data (GenerationError), never raised, so the
    caller can show the message and the achievable maximum.

Key Functions:
    - validate_request(): Check counts against pool sizes
    - validate_pool_request(): Same, reading sizes from a MasterPool
    - section_capacities(): n_pk per section

Key Classes:
    - ErrorKind: Failure classification
    - GenerationError: Classified failure with optional capacity
    - ValidationOutcome: Capacity plus optional error

Capacity:
    capacity = min over sections of n_pk(pool_size, draw_size).
    Each section's stream is repeat-free up to its own n_pk, so test t and
    test u (t != u) differ in every section as long as T <= capacity.
    Uniqueness is guaranteed per section; the cross-section product
    is not used as the ceiling.

Dependencies:
    - shuffler.combinatorics: n_pk

Used By:
    - shuffler.controller: Engine entry point
    - cli: --max-capacity
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from testmaker_toolkit.core.models import MasterPool

from .combinatorics import n_pk
from .config import ShuffleConfig

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    """Classification of generation failures."""
    INVALID_REQUEST = "invalid_request"
    INVALID_SECTION_COUNT = "invalid_section_count"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    GENERATION_SHORTFALL = "generation_shortfall"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GenerationError:
    """
    Classified, user-presentable failure.

    Attributes:
        kind: Failure classification
        message: Human readable explanation
        capacity: Achievable maximum, where relevant
        section_index: 0-based section the failure refers to, if any
    """

    kind: ErrorKind
    message: str
    capacity: Optional[int] = None
    section_index: Optional[int] = None

    def to_dict(self) -> dict:
        d = {"kind": self.kind.value, "message": self.message}
        if self.capacity is not None:
            d["capacity"] = self.capacity
        if self.section_index is not None:
            d["sectionIndex"] = self.section_index
        return d


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Result of validating a request.

    Attributes:
        capacity: Max tests guaranteed distinct (0 when counts are invalid)
        error: Failure, or None when the request is achievable
    """

    capacity: int
    error: Optional[GenerationError] = None

    @property
    def valid(self) -> bool:
        return self.error is None


def section_capacities(
    section_sizes: Sequence[int],
    section_counts: Sequence[int],
) -> tuple[int, ...]:
    """n_pk(pool size, draw size) for each section."""
    return tuple(n_pk(n, k) for n, k in zip(section_sizes, section_counts))


def validate_request(
    section_sizes: Sequence[int],
    section_counts: Sequence[int],
    requested_count: int,
    *,
    section_names: Optional[Sequence[str]] = None,
) -> ValidationOutcome:
    """
    Check whether requested_count distinct tests can be generated.

    Checks, in order:
    1. requested_count >= 1, one draw count per section, at least one section
    2. 1 <= draw count <= pool size for every section
    3. requested_count <= capacity

    Args:
        section_sizes: Pool size per section
        section_counts: Draw size per section (same order)
        requested_count: Number of tests wanted
        section_names: Optional names for error messages

    Returns:
        ValidationOutcome with capacity and optional error

    Example:
        >>> validate_request([4], [4], 25).error.capacity
        24
    """
    if requested_count < 1:
        return _fail(ErrorKind.INVALID_REQUEST, "Number of tests must be at least 1.")
    if not section_sizes:
        return _fail(ErrorKind.INVALID_REQUEST, "Master pool has no sections.")
    if len(section_counts) != len(section_sizes):
        return _fail(
            ErrorKind.INVALID_REQUEST,
            f"Expected {len(section_sizes)} section counts, got {len(section_counts)}.",
        )

    for i, (size, count) in enumerate(zip(section_sizes, section_counts)):
        if count < 1 or count > size:
            label = f"section {i + 1}"
            if section_names and section_names[i]:
                label = f"{label} ({section_names[i]})"
            return _fail(
                ErrorKind.INVALID_SECTION_COUNT,
                f"Invalid question count for {label}: {count} (must be 1-{size}).",
                section_index=i,
            )

    capacity = min(section_capacities(section_sizes, section_counts))

    if requested_count > capacity:
        error = GenerationError(
            kind=ErrorKind.CAPACITY_EXCEEDED,
            message=f"Only {capacity} unique tests can be generated with current settings.",
            capacity=capacity,
        )
        logger.warning(f"Requested {requested_count} tests, capacity is {capacity}")
        return ValidationOutcome(capacity=capacity, error=error)

    return ValidationOutcome(capacity=capacity)


def validate_pool_request(pool: MasterPool, config: ShuffleConfig) -> ValidationOutcome:
    """Validate config against the sizes of pool's sections."""
    return validate_request(
        pool.section_sizes,
        config.section_counts,
        config.requested_count,
        section_names=[s.name for s in pool.sections],
    )


def _fail(kind: ErrorKind, message: str, section_index: Optional[int] = None) -> ValidationOutcome:
    logger.warning(message)
    return ValidationOutcome(
        capacity=0,
        error=GenerationError(kind=kind, message=message, section_index=section_index),
    )
