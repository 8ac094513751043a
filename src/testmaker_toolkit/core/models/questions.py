"""
Module: questions

Purpose:
    Provides the question pool entry dataclasses. A pool entry is a tagged
    union discriminated by QuestionKind:

    - SingleChoiceQuestion ("mcq"): text, options, index of correct option
    - PassageQuestion ("reading"): shared title/passage plus nested
      SubQuestion items, each with its own options and correct index
    - FreeResponseQuestion ("writing"): prompt and reference answer, no options

Key Functions:
    - QuestionKind.parse(value): Tolerant tag parsing (legacy aliases)
    - question_from_dict(data): Deserialize any pool entry by its tag
    - <Model>.to_dict() / <Model>.from_dict(): Serialization

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.sections.Section
    - core.models.generated.SectionSelection
    - shuffler.options: Option shuffling
    - core.utils.serialization

Serialized Shape:
    Keys follow the project file format consumed by the document exporter
    (``type``, ``options``, ``correctAnswer``, nested ``questions``). The
    exporter reads these keys directly, so they must not be renamed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Optional, Sequence, Union


class QuestionKind(str, Enum):
    """Discriminator tag for pool entries."""
    SINGLE_CHOICE = "mcq"
    PASSAGE = "reading"
    FREE_RESPONSE = "writing"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: Any) -> QuestionKind:
        """
        Parse a tag from stored data.

        Tags are matched case-insensitively. ``"fill-in-the-blank"`` entries
        share the nested sub-question shape of reading passages and are read
        as PASSAGE.

        Raises:
            ValueError: If the tag is unknown
        """
        if isinstance(value, cls):
            return value
        tag = str(value or "").strip().lower()
        if tag in _KIND_ALIASES:
            return _KIND_ALIASES[tag]
        try:
            return cls(tag)
        except ValueError:
            raise ValueError(f"Unknown question type: {value!r}") from None


# Stored tags a PassageQuestion writes back unchanged
PASSAGE_TAGS = ("reading", "fill-in-the-blank")

_KIND_ALIASES = {
    "fill-in-the-blank": QuestionKind.PASSAGE,
    "passage": QuestionKind.PASSAGE,
    "single-choice": QuestionKind.SINGLE_CHOICE,
    "free-response": QuestionKind.FREE_RESPONSE,
}


def _check_id(value: str, what: str) -> None:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{what} id must be a non-empty string: {value!r}")


def _check_choice(owner_id: str, options: tuple[str, ...], correct_answer: int) -> None:
    """Validate that correct_answer points inside options."""
    if not isinstance(options, tuple):
        raise ValueError(f"options for {owner_id} must be a tuple, got {type(options).__name__}")
    if not options:
        # Nothing to point at; index is carried along unchanged
        return
    if not (0 <= correct_answer < len(options)):
        raise ValueError(
            f"correct_answer {correct_answer} out of range for {owner_id} "
            f"({len(options)} options)"
        )


def _id_from(data: dict[str, Any]) -> str:
    # Stored ids may be numeric timestamps
    return str(data["id"])


@dataclass(frozen=True, slots=True)
class SubQuestion:
    """
    Single-choice item nested inside a PassageQuestion.

    Attributes:
        id: Identifier unique within the parent passage
        text: Question text (may contain inline HTML)
        options: Answer choices in display order
        correct_answer: Index into options of the correct choice

    Invariants:
        - 0 <= correct_answer < len(options) when options is non-empty
    """

    id: str
    text: str
    options: tuple[str, ...] = ()
    correct_answer: int = 0

    def __post_init__(self) -> None:
        _check_id(self.id, "Sub-question")
        _check_choice(self.id, self.options, self.correct_answer)

    @property
    def correct_option(self) -> Optional[str]:
        """Text of the correct option, or None when there are no options."""
        return self.options[self.correct_answer] if self.options else None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SubQuestion:
        return cls(
            id=_id_from(data),
            text=data.get("text", ""),
            options=tuple(data.get("options", [])),
            correct_answer=data.get("correctAnswer", 0),
        )


@dataclass(frozen=True, slots=True)
class SingleChoiceQuestion:
    """
    Multiple-choice question with exactly one correct option.

    Attributes:
        id: Identifier unique within the owning section
        text: Question text (may contain inline HTML)
        options: Answer choices in display order
        correct_answer: Index into options of the correct choice

    Example:
        >>> q = SingleChoiceQuestion("q1", "2 + 2 = ?", ("3", "4", "5"), 1)
        >>> q.correct_option
        '4'
    """

    kind: ClassVar[QuestionKind] = QuestionKind.SINGLE_CHOICE

    id: str
    text: str
    options: tuple[str, ...] = ()
    correct_answer: int = 0

    def __post_init__(self) -> None:
        _check_id(self.id, "Question")
        _check_choice(self.id, self.options, self.correct_answer)

    @property
    def correct_option(self) -> Optional[str]:
        """Text of the correct option, or None when there are no options."""
        return self.options[self.correct_answer] if self.options else None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.kind.value,
            "text": self.text,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SingleChoiceQuestion:
        return cls(
            id=_id_from(data),
            text=data.get("text", ""),
            options=tuple(data.get("options", [])),
            correct_answer=data.get("correctAnswer", 0),
        )


@dataclass(frozen=True, slots=True)
class PassageQuestion:
    """
    Composite question: a shared passage followed by nested sub-questions.

    The title and passage are never shuffled; only the options of each
    sub-question are.

    Attributes:
        id: Identifier unique within the owning section
        title: Passage heading
        passage: Shared reading text (may contain inline HTML)
        questions: Nested single-choice items in display order
        tag: Stored type tag, "reading" or "fill-in-the-blank", written
            back as read

    Invariants:
        - Sub-question ids are unique within the passage
    """

    kind: ClassVar[QuestionKind] = QuestionKind.PASSAGE

    id: str
    title: str
    passage: str
    questions: tuple[SubQuestion, ...] = ()
    tag: str = "reading"

    def __post_init__(self) -> None:
        _check_id(self.id, "Question")
        ids = [sub.id for sub in self.questions]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate sub-question ids in passage {self.id}")
        if self.tag not in PASSAGE_TAGS:
            raise ValueError(f"Invalid passage tag for {self.id}: {self.tag!r}")

    @property
    def sub_question_count(self) -> int:
        return len(self.questions)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.tag,
            "title": self.title,
            "passage": self.passage,
            "questions": [sub.to_dict() for sub in self.questions],
        }

    @classmethod
    def from_dict(cls, data: dict) -> PassageQuestion:
        tag = str(data.get("type") or "").strip().lower()
        return cls(
            id=_id_from(data),
            title=data.get("title", ""),
            passage=data.get("passage", ""),
            questions=tuple(SubQuestion.from_dict(sub) for sub in data.get("questions", [])),
            tag=tag if tag in PASSAGE_TAGS else QuestionKind.PASSAGE.value,
        )


@dataclass(frozen=True, slots=True)
class FreeResponseQuestion:
    """Open-ended prompt with a reference answer. Has no options."""

    kind: ClassVar[QuestionKind] = QuestionKind.FREE_RESPONSE

    id: str
    text: str
    answer: str = ""

    def __post_init__(self) -> None:
        _check_id(self.id, "Question")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.kind.value,
            "text": self.text,
            "answer": self.answer,
        }

    @classmethod
    def from_dict(cls, data: dict) -> FreeResponseQuestion:
        return cls(
            id=_id_from(data),
            text=data.get("text", ""),
            answer=data.get("answer", ""),
        )


Question = Union[SingleChoiceQuestion, PassageQuestion, FreeResponseQuestion]

_MODEL_BY_KIND = {
    QuestionKind.SINGLE_CHOICE: SingleChoiceQuestion,
    QuestionKind.PASSAGE: PassageQuestion,
    QuestionKind.FREE_RESPONSE: FreeResponseQuestion,
}


def question_from_dict(data: dict) -> Question:
    """
    Deserialize a pool entry using its ``type`` tag.

    Args:
        data: Dict representation

    Returns:
        Concrete question instance for the tag

    Raises:
        ValueError: If the tag is unknown or the payload is invalid
    """
    kind = QuestionKind.parse(data.get("type"))
    return _MODEL_BY_KIND[kind].from_dict(data)


def question_ids(questions: Sequence[Question]) -> tuple[str, ...]:
    """Ordered ids of a question sequence (a selection signature)."""
    return tuple(q.id for q in questions)
