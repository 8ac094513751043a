"""
Module: shuffler.assembler

Purpose:
    Turn one selection per section into a GeneratedTest record.

Key Functions:
    - assemble_test(): Build a GeneratedTest from aligned selections
    - new_test_id(): UUID4 string drawn from the call's random source

Key Classes:
    - TestNamer: Sequential "Generated Test N" names, skipping taken names

Dependencies:
    - uuid (std)
    - shuffler.options: Option shuffling

Used By:
    - shuffler.controller: Engine entry point
"""

from __future__ import annotations

import random
import uuid
from datetime import datetime
from typing import Iterable, Optional, Sequence, Set

from testmaker_toolkit.core.models import GeneratedTest, Question, Section, SectionSelection

from .options import shuffle_question


class TestNamer:
    """
    Sequential names unique within the batch and the existing collection.

    Numbering continues after the existing collection size, matching how
    tests are listed in a project.

    Example:
        >>> namer = TestNamer("Generated Test", existing_names={"Generated Test 3"}, start=2)
        >>> namer.next_name(), namer.next_name()
        ('Generated Test 4', 'Generated Test 5')
    """

    # Not a pytest test class
    __test__ = False

    def __init__(self, prefix: str, existing_names: Iterable[str] = (), start: int = 0):
        self.prefix = prefix
        self._taken: Set[str] = set(existing_names)
        self._counter = start

    def next_name(self) -> str:
        while True:
            self._counter += 1
            name = f"{self.prefix} {self._counter}"
            if name not in self._taken:
                self._taken.add(name)
                return name


def new_test_id(rng: random.Random) -> str:
    """UUID4 built from rng bits, so seeded calls produce the same ids."""
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def assemble_test(
    sections: Sequence[Section],
    selections: Sequence[Sequence[Question]],
    rng: random.Random,
    *,
    name: str,
    created_at: datetime,
    test_id: Optional[str] = None,
) -> GeneratedTest:
    """
    Build a GeneratedTest from one selection per section.

    Every selected question is option-shuffled into a new instance, so the
    result shares no mutable state with the pool.

    Args:
        sections: Pool sections, in order
        selections: Selected questions, aligned with sections
        rng: Random source for option shuffles and the id
        name: Display name
        created_at: Creation timestamp
        test_id: Explicit id; drawn from rng when omitted

    Returns:
        GeneratedTest with question_count calculated from selections

    Raises:
        ValueError: If sections and selections are not aligned
    """
    if len(sections) != len(selections):
        raise ValueError(
            f"Got {len(selections)} selections for {len(sections)} sections"
        )

    section_selections = tuple(
        SectionSelection(
            section_id=section.id,
            section_name=section.name,
            questions=tuple(shuffle_question(q, rng) for q in selected),
        )
        for section, selected in zip(sections, selections)
    )

    return GeneratedTest(
        id=test_id if test_id is not None else new_test_id(rng),
        name=name,
        created_at=created_at,
        sections=section_selections,
    )
