"""
Module: shuffler.config

Purpose:
    Configuration dataclass for shuffled test generation.
    Immutable configuration with validation on construction.

Key Classes:
    - ShuffleConfig: Request parameters and engine tuning knobs

Dependencies:
    - dataclasses (std)

Used By:
    - shuffler.controller: Engine entry point
    - shuffler.selection: Stream construction
    - cli: Flag mapping
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Tuple

from testmaker_toolkit.core.models import MasterPool


# Sections whose permutation count is above this are sampled instead of enumerated
DEFAULT_ENUMERATION_LIMIT = 100_000

# Sampled streams get requested_count * multiplier draws before giving up
DEFAULT_ATTEMPT_MULTIPLIER = 20

DEFAULT_NAME_PREFIX = "Generated Test"


@dataclass(frozen=True)
class ShuffleConfig:
    """
    Configuration for one generation call (immutable).

    Request-level problems (count below 1, draw size outside the section)
    are NOT rejected here. They are reported as data by the validator so
    callers can show them and let the user retry.

    Attributes:
        requested_count: Number of tests to generate
        section_counts: Questions to draw per section, in pool order
        seed: Random seed; None draws a fresh one per call
        enumeration_limit: Max permutations enumerated per section
        attempt_multiplier: Draw budget factor for sampled sections
        name_prefix: Prefix of sequential test names
        existing_names: Names already used in the target collection
        existing_test_count: Size of the target collection (numbering offset)

    Invariants:
        - enumeration_limit >= 1
        - attempt_multiplier >= 1
        - existing_test_count >= 0

    Example:
        >>> config = ShuffleConfig(requested_count=10, section_counts=(3, 2), seed=7)
        >>> config.attempt_budget
        200
    """

    requested_count: int
    section_counts: Tuple[int, ...]

    # Randomness
    seed: Optional[int] = None

    # Strategy tuning
    enumeration_limit: int = DEFAULT_ENUMERATION_LIMIT
    attempt_multiplier: int = DEFAULT_ATTEMPT_MULTIPLIER

    # Naming
    name_prefix: str = DEFAULT_NAME_PREFIX
    existing_names: FrozenSet[str] = field(default_factory=frozenset)
    existing_test_count: int = 0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        # Accept any iterable from callers, store immutable copies
        object.__setattr__(self, "section_counts", tuple(self.section_counts))
        object.__setattr__(self, "existing_names", frozenset(self.existing_names))

        if self.enumeration_limit < 1:
            raise ValueError(f"enumeration_limit must be positive: {self.enumeration_limit}")
        if self.attempt_multiplier < 1:
            raise ValueError(f"attempt_multiplier must be positive: {self.attempt_multiplier}")
        if self.existing_test_count < 0:
            raise ValueError(f"existing_test_count must be non-negative: {self.existing_test_count}")
        if not self.name_prefix.strip():
            raise ValueError("name_prefix must not be empty")

    @property
    def attempt_budget(self) -> int:
        """Draws allowed per sampled section before reporting a shortfall."""
        return max(self.requested_count, 0) * self.attempt_multiplier

    @classmethod
    def for_all_questions(
        cls,
        pool: MasterPool,
        requested_count: int = 1,
        **kwargs,
    ) -> ShuffleConfig:
        """
        Config drawing every question of every section.

        Matches the defaults of the shuffle dialog: one test, all questions.
        """
        return cls(requested_count=requested_count, section_counts=pool.section_sizes, **kwargs)

    def with_existing(
        self,
        names: Iterable[str],
        test_count: Optional[int] = None,
    ) -> ShuffleConfig:
        """
        Copy with the target collection's names and size applied.

        Args:
            names: Test names already in the collection
            test_count: Number of tests in the collection; defaults to the
                number of distinct names. Pass it when names may repeat.
        """
        names = frozenset(names)
        return ShuffleConfig(
            requested_count=self.requested_count,
            section_counts=self.section_counts,
            seed=self.seed,
            enumeration_limit=self.enumeration_limit,
            attempt_multiplier=self.attempt_multiplier,
            name_prefix=self.name_prefix,
            existing_names=names,
            existing_test_count=len(names) if test_count is None else test_count,
        )
