"""
Test Maker Core Package

Shared data models, schema validation and serialization used by the
shuffler, the project store and the CLI.
"""

from .models import (
    Question,
    QuestionKind,
    SingleChoiceQuestion,
    PassageQuestion,
    FreeResponseQuestion,
    SubQuestion,
    Section,
    MasterPool,
    SectionSelection,
    GeneratedTest,
    GenerationBatch,
)

__all__ = [
    "Question",
    "QuestionKind",
    "SingleChoiceQuestion",
    "PassageQuestion",
    "FreeResponseQuestion",
    "SubQuestion",
    "Section",
    "MasterPool",
    "SectionSelection",
    "GeneratedTest",
    "GenerationBatch",
]
