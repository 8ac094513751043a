"""
Module: shuffler.controller

Purpose:
    Orchestrate one generation call.
    Validate → Build streams → Draw aligned selections → Shuffle → Assemble

Key Functions:
    - generate_tests(): Engine entry point

Key Classes:
    - GenerationResult: Tests plus capacity and any classified error

Dependencies:
    - shuffler.validation: Capacity check
    - shuffler.selection: Per-section streams
    - shuffler.assembler: Test records

Used By:
    - cli: Command line interface
    - store.project_store callers
"""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from testmaker_toolkit.core.models import GeneratedTest, GenerationBatch, MasterPool

from .assembler import TestNamer, assemble_test
from .config import ShuffleConfig
from .selection import StreamStrategy, build_streams
from .validation import ErrorKind, GenerationError, validate_pool_request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of a generation call (immutable).

    Attributes:
        tests: Generated tests (empty on validation failure)
        capacity: Max tests guaranteed distinct for the request
        requested_count: Tests asked for
        error: Classified failure, or None on full success
        strategies: Stream strategy used per section

    Example:
        >>> result = generate_tests(pool, ShuffleConfig(10, (3, 2)))
        >>> result.ok, len(result.tests), result.capacity
        (True, 10, 12)
    """

    tests: tuple[GeneratedTest, ...]
    capacity: int
    requested_count: int
    error: Optional[GenerationError] = None
    strategies: tuple[StreamStrategy, ...] = ()

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def shortfall(self) -> int:
        """Tests missing after the sampling budget ran out (0 otherwise)."""
        if self.error is not None and self.error.kind == ErrorKind.GENERATION_SHORTFALL:
            return self.requested_count - len(self.tests)
        return 0

    @property
    def question_total(self) -> int:
        return sum(t.question_count for t in self.tests)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "capacity": self.capacity,
            "requestedCount": self.requested_count,
            "generatedCount": len(self.tests),
            "error": self.error.to_dict() if self.error else None,
            "strategies": [s.value for s in self.strategies],
        }


def generate_tests(
    pool: MasterPool,
    config: ShuffleConfig,
    *,
    clock: Callable[[], datetime] = datetime.now,
) -> GenerationResult:
    """
    Generate distinct shuffled tests from a master pool.

    Pipeline:
    1. Validate counts and capacity (failures returned, not raised)
    2. Build one selection stream per section
    3. For t in 0..T-1 take the t-th selection of every stream
    4. Option-shuffle and assemble each test

    The pool is only read. Every question in the output is a new instance.

    Args:
        pool: Master pool
        config: Request and tuning parameters
        clock: Timestamp source for created_at (one value per call)

    Returns:
        GenerationResult; on a sampling shortfall the tests produced so far
        are returned with a GENERATION_SHORTFALL error

    Example:
        >>> result = generate_tests(pool, ShuffleConfig(13, (3, 2)))
        >>> result.error.kind, result.error.capacity
        (<ErrorKind.CAPACITY_EXCEEDED: 'capacity_exceeded'>, 12)
    """
    start_time = time.perf_counter()

    outcome = validate_pool_request(pool, config)
    if not outcome.valid:
        return GenerationResult(
            tests=(),
            capacity=outcome.capacity,
            requested_count=config.requested_count,
            error=outcome.error,
        )

    logger.info(
        f"Generating {config.requested_count} tests from {pool.name!r} "
        f"(capacity {outcome.capacity}, draws {list(config.section_counts)})"
    )

    rng = random.Random(config.seed)
    streams = build_streams(pool, config, rng)
    namer = TestNamer(
        config.name_prefix,
        existing_names=config.existing_names,
        start=config.existing_test_count,
    )
    created_at = clock()

    tests: List[GeneratedTest] = []
    for _ in range(config.requested_count):
        selections = [stream.next_selection() for stream in streams]
        if any(selection is None for selection in selections):
            break
        tests.append(
            assemble_test(
                pool.sections,
                selections,
                rng,
                name=namer.next_name(),
                created_at=created_at,
            )
        )

    # Re-checks batch invariants (distinct signatures, ids, names)
    batch = GenerationBatch(tuple(tests))

    error = None
    if len(batch) < config.requested_count:
        missing = config.requested_count - len(batch)
        error = GenerationError(
            kind=ErrorKind.GENERATION_SHORTFALL,
            message=(
                f"Could only generate {len(batch)} unique tests "
                f"({missing} short of {config.requested_count})."
            ),
            capacity=len(batch),
        )
        logger.warning(error.message)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Generated {len(batch)} tests ({batch.question_total} questions) in {elapsed:.3f}s")

    return GenerationResult(
        tests=batch.tests,
        capacity=outcome.capacity,
        requested_count=config.requested_count,
        error=error,
        strategies=tuple(stream.strategy for stream in streams),
    )
