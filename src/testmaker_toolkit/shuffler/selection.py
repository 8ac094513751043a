"""
Module: shuffler.selection

Purpose:
    Per-section supply of distinct ordered question subsets ("selections").

Key Functions:
    - build_streams(): One stream per pool section

Key Classes:
    - EnumeratedStream: All k-permutations in shuffled order
    - SampledStream: Rejection sampling with a bounded draw budget
    - StreamStrategy: Which of the two a section uses

Algorithm:
    Index alignment: generated test t takes the t-th selection of every
    section's stream. Streams never repeat a signature, so any two tests
    of one batch differ in every section for t < capacity. The pairing of
    selections across sections is not itself randomized beyond the
    independent shuffle of each stream, which keeps cost at
    O(T * sum(k)) instead of enumerating the cross-section product.

    Enumeration is exhaustive and finite, so it cannot loop. Sections whose
    permutation count exceeds ``enumeration_limit`` are sampled instead:
    ``random.sample`` draws without replacement, repeats are rejected, and
    the stream stops after ``attempt_budget`` draws. Sampling is weaker in
    the worst case: a stream may stop before reaching capacity.

Dependencies:
    - itertools (std)
    - random (std)
    - shuffler.combinatorics: exceeds

Used By:
    - shuffler.controller: Engine entry point
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set, Tuple, Union

from testmaker_toolkit.core.models import MasterPool, Question, Section
from testmaker_toolkit.core.models.questions import question_ids

from .combinatorics import exceeds
from .config import ShuffleConfig

logger = logging.getLogger(__name__)

Selection = Tuple[Question, ...]


class StreamStrategy(str, Enum):
    """How a section's selections are produced."""
    ENUMERATED = "enumerated"
    SAMPLED = "sampled"

    def __str__(self) -> str:
        return self.value


@dataclass
class EnumeratedStream:
    """
    Every ordered k-subset of a section, in random order.

    Attributes:
        section: Source section
        draw_count: Selection size k
        rng: Random source used once, for the shuffle
    """

    section: Section
    draw_count: int
    rng: random.Random

    strategy: StreamStrategy = field(init=False, default=StreamStrategy.ENUMERATED)
    _selections: List[Selection] = field(init=False, repr=False)
    _position: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        self._selections = list(itertools.permutations(self.section.questions, self.draw_count))
        # Shuffle the enumeration, not the members of each selection
        self.rng.shuffle(self._selections)
        self._position = 0
        logger.debug(
            f"Section {self.section.name!r}: enumerated {len(self._selections)} selections "
            f"of {self.draw_count}"
        )

    @property
    def emitted(self) -> int:
        return self._position

    @property
    def remaining(self) -> int:
        return len(self._selections) - self._position

    def next_selection(self) -> Optional[Selection]:
        """Next unused selection, or None once all have been handed out."""
        if self._position >= len(self._selections):
            return None
        selection = self._selections[self._position]
        self._position += 1
        return selection


@dataclass
class SampledStream:
    """
    Random ordered k-subsets of a section with repeats rejected.

    Used for sections too large to enumerate. Stops for good once
    ``attempt_budget`` draws have been spent.

    Attributes:
        section: Source section
        draw_count: Selection size k
        rng: Random source
        attempt_budget: Total draws allowed over the stream's lifetime
    """

    section: Section
    draw_count: int
    rng: random.Random
    attempt_budget: int

    strategy: StreamStrategy = field(init=False, default=StreamStrategy.SAMPLED)
    attempts: int = field(init=False, default=0)
    _seen: Set[Tuple[str, ...]] = field(init=False, default_factory=set, repr=False)

    @property
    def emitted(self) -> int:
        return len(self._seen)

    @property
    def exhausted(self) -> bool:
        return self.attempts >= self.attempt_budget

    def next_selection(self) -> Optional[Selection]:
        """Next unseen selection, or None when the draw budget runs out."""
        while self.attempts < self.attempt_budget:
            self.attempts += 1
            selection = tuple(self.rng.sample(self.section.questions, self.draw_count))
            signature = question_ids(selection)
            if signature in self._seen:
                continue
            self._seen.add(signature)
            return selection

        logger.debug(
            f"Section {self.section.name!r}: sampling budget of {self.attempt_budget} "
            f"spent after {self.emitted} unique selections"
        )
        return None


SelectionStream = Union[EnumeratedStream, SampledStream]


def build_stream(
    section: Section,
    draw_count: int,
    rng: random.Random,
    config: ShuffleConfig,
) -> SelectionStream:
    """
    Create the stream for one section.

    Enumerates when n_pk(size, draw_count) <= config.enumeration_limit,
    otherwise samples.
    """
    if exceeds(section.size, draw_count, config.enumeration_limit):
        logger.info(
            f"Section {section.name!r}: more than {config.enumeration_limit} selections, "
            f"sampling with a budget of {config.attempt_budget} draws"
        )
        return SampledStream(section, draw_count, rng, config.attempt_budget)
    return EnumeratedStream(section, draw_count, rng)


def build_streams(
    pool: MasterPool,
    config: ShuffleConfig,
    rng: random.Random,
) -> List[SelectionStream]:
    """
    Create one stream per pool section, in pool order.

    Args:
        pool: Master pool (read only)
        config: Validated config; section_counts aligns with pool.sections
        rng: Shared random source for the call

    Returns:
        Streams aligned with pool.sections
    """
    return [
        build_stream(section, count, rng, config)
        for section, count in zip(pool.sections, config.section_counts)
    ]
