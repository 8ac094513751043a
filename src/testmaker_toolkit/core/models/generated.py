"""
Module: generated

Purpose:
    Provides SectionSelection, GeneratedTest and GenerationBatch - the
    records produced by the shuffler and handed to the project store and
    document exporter.

Key Functions:
    - SectionSelection.signature: Ordered question ids of the selection
    - GeneratedTest.question_count: Calculated from selections (never stored)
    - GeneratedTest.signature: Per-section signatures, used for duplicate checks
    - GenerationBatch: Tuple of tests with no repeated signature

Dependencies:
    - dataclasses (std)
    - datetime (std)
    - functools (std)
    - .questions

Used By:
    - shuffler.assembler: Creates GeneratedTest records
    - shuffler.controller: Wraps output in GenerationBatch
    - store.project_store: Persists tests
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from functools import cached_property
from typing import Iterator

from .questions import Question, question_from_dict, question_ids


@dataclass(frozen=True, slots=True)
class SectionSelection:
    """
    Questions drawn from one section for one generated test.

    Attributes:
        section_id: Id of the source section
        section_name: Display name of the source section
        questions: Copied, option-shuffled questions in test order

    Invariants:
        - No duplicate question id
    """

    section_id: str
    section_name: str
    questions: tuple[Question, ...]

    def __post_init__(self) -> None:
        ids = self.signature
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate questions in selection for section {self.section_name!r}")

    @property
    def signature(self) -> tuple[str, ...]:
        return question_ids(self.questions)

    @property
    def size(self) -> int:
        return len(self.questions)

    def to_dict(self) -> dict:
        return {
            "id": self.section_id,
            "sectionName": self.section_name,
            "questions": [q.to_dict() for q in self.questions],
        }

    @classmethod
    def from_dict(cls, data: dict) -> SectionSelection:
        raw_id = data.get("id", data.get("sectionId", ""))
        return cls(
            section_id=str(raw_id),
            section_name=data.get("sectionName", ""),
            questions=tuple(question_from_dict(q) for q in data.get("questions", [])),
        )


@dataclass(frozen=True)
class GeneratedTest:
    """
    One produced exam instance (immutable).

    Attributes:
        id: Unique test identifier
        name: Display name, unique within the owning project
        created_at: Creation timestamp
        sections: One selection per master pool section, in pool order

    Invariants:
        - question_count == sum of selection sizes (always calculated)

    Example:
        >>> test.question_count
        5
        >>> test.signature
        (('a1', 'a4', 'a2'), ('b3', 'b1'))
    """

    id: str
    name: str
    created_at: datetime
    sections: tuple[SectionSelection, ...]

    # ─────────────────────────────────────────────────────────────────────────
    # Calculated Properties (NEVER stored)
    # ─────────────────────────────────────────────────────────────────────────

    @cached_property
    def question_count(self) -> int:
        """Total questions across all section selections."""
        return sum(s.size for s in self.sections)

    @cached_property
    def signature(self) -> tuple[tuple[str, ...], ...]:
        """Per section, the ordered list of selected question ids."""
        return tuple(s.signature for s in self.sections)

    def iter_questions(self) -> Iterator[Question]:
        for selection in self.sections:
            yield from selection.questions

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to the project file shape.

        ``questionCount`` is written for consumers that read it directly;
        it is recalculated on load.
        """
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": self.created_at.isoformat(),
            "createdDate": self.created_at.date().isoformat(),
            "sections": [s.to_dict() for s in self.sections],
            "questionCount": self.question_count,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GeneratedTest:
        if data.get("createdAt"):
            created_at = datetime.fromisoformat(data["createdAt"])
        elif data.get("createdDate"):
            created = date.fromisoformat(data["createdDate"])
            created_at = datetime(created.year, created.month, created.day)
        else:
            raise ValueError(f"Generated test {data.get('id')!r} has no creation timestamp")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            created_at=created_at,
            sections=tuple(SectionSelection.from_dict(s) for s in data.get("sections", [])),
        )

    def __repr__(self) -> str:
        return f"GeneratedTest({self.name!r}, questions={self.question_count})"


@dataclass(frozen=True)
class GenerationBatch:
    """
    Output of one generation call.

    Invariants:
        - No two tests share a signature
        - No two tests share an id or name
    """

    tests: tuple[GeneratedTest, ...] = ()

    def __post_init__(self) -> None:
        signatures = [t.signature for t in self.tests]
        if len(signatures) != len(set(signatures)):
            raise ValueError("Duplicate test composition in generation batch")
        ids = [t.id for t in self.tests]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate test ids in generation batch")
        names = [t.name for t in self.tests]
        if len(names) != len(set(names)):
            raise ValueError("Duplicate test names in generation batch")

    def __len__(self) -> int:
        return len(self.tests)

    def __iter__(self) -> Iterator[GeneratedTest]:
        return iter(self.tests)

    @property
    def question_total(self) -> int:
        return sum(t.question_count for t in self.tests)
