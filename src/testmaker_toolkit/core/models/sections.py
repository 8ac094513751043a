"""
Module: sections

Purpose:
    Provides Section and MasterPool - the author-maintained input to test
    generation. The pool is read by the shuffler and never modified by it.

Key Functions:
    - Section.size: Number of questions available to draw from
    - MasterPool.section_sizes: Pool size per section, in order
    - MasterPool.question_total: Questions across all sections
    - to_dict() / from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - .questions

Used By:
    - shuffler.controller: Engine entry point
    - shuffler.validation: Capacity checks
    - store.project_store: Project persistence
"""

from __future__ import annotations

from dataclasses import dataclass

from .questions import Question, question_from_dict


@dataclass(frozen=True, slots=True)
class Section:
    """
    Named group of questions within the master pool.

    Attributes:
        id: Section identifier
        name: Display name shown in generated tests
        questions: Pool entries in authoring order

    Invariants:
        - Question ids are unique within the section
    """

    id: str
    name: str
    questions: tuple[Question, ...] = ()

    def __post_init__(self) -> None:
        """Validate section on construction."""
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"Section id must be a non-empty string: {self.id!r}")
        ids = [q.id for q in self.questions]
        duplicates = sorted({qid for qid in ids if ids.count(qid) > 1})
        if duplicates:
            raise ValueError(f"Duplicate question ids in section {self.name!r}: {duplicates}")

    @property
    def size(self) -> int:
        return len(self.questions)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sectionName": self.name,
            "questions": [q.to_dict() for q in self.questions],
        }

    @classmethod
    def from_dict(cls, data: dict) -> Section:
        # Older project files stored the id under "sectionId"
        raw_id = data.get("id", data.get("sectionId"))
        return cls(
            id=str(raw_id) if raw_id is not None else "",
            name=data.get("sectionName", data.get("name", "")),
            questions=tuple(question_from_dict(q) for q in data.get("questions", [])),
        )


@dataclass(frozen=True, slots=True)
class MasterPool:
    """
    Full, unshuffled set of sections an author maintains.

    Attributes:
        sections: Sections in display order
        name: Display name of the pool

    Example:
        >>> pool = MasterPool(sections=(section_a, section_b))
        >>> pool.section_sizes
        (5, 4)
    """

    sections: tuple[Section, ...] = ()
    name: str = "Master Test"

    def __post_init__(self) -> None:
        ids = [s.id for s in self.sections]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate section ids in master pool")

    @property
    def section_sizes(self) -> tuple[int, ...]:
        return tuple(s.size for s in self.sections)

    @property
    def question_total(self) -> int:
        return sum(self.section_sizes)

    def get_section(self, section_id: str) -> Section | None:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "sections": [s.to_dict() for s in self.sections],
        }

    @classmethod
    def from_dict(cls, data: dict) -> MasterPool:
        return cls(
            sections=tuple(Section.from_dict(s) for s in data.get("sections", [])),
            name=data.get("name", "Master Test"),
        )

    def __repr__(self) -> str:
        return f"MasterPool({self.name!r}, sections={len(self.sections)}, questions={self.question_total})"
