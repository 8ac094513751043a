"""
Module: shuffler.options

Purpose:
    Randomize answer-option order while keeping the correct answer correct.

Key Functions:
    - shuffle_choices(): Shuffle one single-choice item
    - shuffle_question(): Dispatch on question kind

Algorithm:
    Fisher-Yates (``random.Random.shuffle``) over the option positions, then
    the correct index moves to wherever the originally correct option now
    sits. Tracking the position rather than searching for the text keeps
    the answer right even when two options share the same text.

Dependencies:
    - dataclasses (std)
    - random (std)

Used By:
    - shuffler.assembler: Every selected question is shuffled
"""

from __future__ import annotations

import random
from dataclasses import replace
from typing import TypeVar

from testmaker_toolkit.core.models import (
    FreeResponseQuestion,
    PassageQuestion,
    Question,
    SingleChoiceQuestion,
    SubQuestion,
)

ChoiceT = TypeVar("ChoiceT", SingleChoiceQuestion, SubQuestion)


def shuffle_choices(item: ChoiceT, rng: random.Random) -> ChoiceT:
    """
    Return a copy of item with options in random order.

    Args:
        item: Single-choice question or passage sub-question
        rng: Random source

    Returns:
        New instance; item itself is not modified. Items with zero or one
        option come back with the same options and index.

    Invariants:
        - result.options[result.correct_answer] == item.options[item.correct_answer]
    """
    if len(item.options) <= 1:
        return replace(item)

    order = list(range(len(item.options)))
    rng.shuffle(order)

    return replace(
        item,
        options=tuple(item.options[i] for i in order),
        correct_answer=order.index(item.correct_answer),
    )


def shuffle_question(question: Question, rng: random.Random) -> Question:
    """
    Shuffle options of any pool entry.

    - Single choice: options shuffled
    - Passage: title and passage untouched, each sub-question shuffled
      independently
    - Free response: copied unchanged

    Raises:
        TypeError: If question is not a known pool entry type
    """
    if isinstance(question, SingleChoiceQuestion):
        return shuffle_choices(question, rng)
    if isinstance(question, PassageQuestion):
        return replace(
            question,
            questions=tuple(shuffle_choices(sub, rng) for sub in question.questions),
        )
    if isinstance(question, FreeResponseQuestion):
        return replace(question)
    raise TypeError(f"Unsupported question type: {type(question).__name__}")
