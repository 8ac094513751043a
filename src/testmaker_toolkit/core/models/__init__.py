"""
Core Models Package

Immutable, validated data models shared by the shuffler, the project store
and serialization.

All models in this package are frozen dataclasses. This ensures:
1. The master pool cannot be mutated by test generation
2. Generated tests can be handed to the store without defensive copies
3. Shuffled questions are always new instances
"""

from .questions import (
    QuestionKind,
    SubQuestion,
    SingleChoiceQuestion,
    PassageQuestion,
    FreeResponseQuestion,
    Question,
    question_from_dict,
)
from .sections import Section, MasterPool
from .generated import SectionSelection, GeneratedTest, GenerationBatch

__all__ = [
    "QuestionKind",
    "SubQuestion",
    "SingleChoiceQuestion",
    "PassageQuestion",
    "FreeResponseQuestion",
    "Question",
    "question_from_dict",
    "Section",
    "MasterPool",
    "SectionSelection",
    "GeneratedTest",
    "GenerationBatch",
]
