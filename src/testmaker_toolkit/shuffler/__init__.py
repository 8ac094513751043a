"""
Module: shuffler

Purpose:
    Shuffled test generation engine. Draws a fixed number of questions per
    section from a master pool, guarantees the produced tests are pairwise
    distinct, and randomizes option order without losing the correct answer.

Key Functions:
    - generate_tests(): Main entry point
    - validate_request(): Capacity / count check without generating
    - n_pk(): Ordered selection count
    - shuffle_question(): Correctness-preserving option shuffle

Key Classes:
    - ShuffleConfig: Request and tuning parameters
    - GenerationResult: Tests plus capacity and classified error
    - ErrorKind / GenerationError: Failure taxonomy

Used By:
    - testmaker_toolkit.cli
"""

from .combinatorics import n_pk
from .config import ShuffleConfig
from .validation import (
    ErrorKind,
    GenerationError,
    ValidationOutcome,
    validate_request,
    validate_pool_request,
)
from .selection import StreamStrategy, build_streams
from .options import shuffle_choices, shuffle_question
from .assembler import TestNamer, assemble_test
from .controller import GenerationResult, generate_tests

__all__ = [
    # Config
    "ShuffleConfig",
    # Combinatorics
    "n_pk",
    # Validation
    "ErrorKind",
    "GenerationError",
    "ValidationOutcome",
    "validate_request",
    "validate_pool_request",
    # Selection
    "StreamStrategy",
    "build_streams",
    # Options
    "shuffle_choices",
    "shuffle_question",
    # Assembly
    "TestNamer",
    "assemble_test",
    # Controller
    "GenerationResult",
    "generate_tests",
]
