"""
Unit Tests for Test Assembly

Tests for TestNamer, new_test_id and assemble_test.
"""

import random
import uuid
from datetime import datetime

import pytest

from testmaker_toolkit.shuffler.assembler import TestNamer, assemble_test, new_test_id


CREATED = datetime(2024, 5, 1, 8, 0)


class TestTestNamer:
    """Tests for sequential names."""

    def test_next_name_when_empty_collection_then_starts_at_one(self):
        namer = TestNamer("Generated Test")
        assert [namer.next_name() for _ in range(3)] == [
            "Generated Test 1",
            "Generated Test 2",
            "Generated Test 3",
        ]

    def test_next_name_when_existing_tests_then_continues_numbering(self):
        namer = TestNamer("Generated Test", existing_names={"Quiz A", "Quiz B"}, start=2)
        assert namer.next_name() == "Generated Test 3"

    def test_next_name_when_name_taken_then_skips_it(self):
        """A user-renamed test may already hold the next number."""
        namer = TestNamer("Generated Test", existing_names={"Generated Test 3"}, start=2)
        assert [namer.next_name(), namer.next_name()] == ["Generated Test 4", "Generated Test 5"]


class TestNewTestId:
    """Tests for new_test_id."""

    def test_new_test_id_when_seeded_then_reproducible(self):
        assert new_test_id(random.Random(9)) == new_test_id(random.Random(9))

    def test_new_test_id_when_called_then_uuid4(self):
        value = uuid.UUID(new_test_id(random.Random(1)))
        assert value.version == 4


class TestAssembleTest:
    """Tests for assemble_test."""

    def test_assemble_when_aligned_then_builds_test(self, pool_ab):
        a, b = pool_ab.sections
        selections = [(a.questions[2], a.questions[0]), (b.questions[3],)]

        test = assemble_test(pool_ab.sections, selections, random.Random(0), name="T", created_at=CREATED)

        assert test.signature == (("a3", "a1"), ("b4",))
        assert test.question_count == 3
        assert [s.section_name for s in test.sections] == ["Section A", "Section B"]
        assert test.created_at == CREATED

    def test_assemble_when_built_then_correct_answers_preserved(self, pool_ab):
        a, b = pool_ab.sections
        selections = [a.questions, b.questions]

        test = assemble_test(pool_ab.sections, selections, random.Random(2), name="T", created_at=CREATED)

        originals = {q.id: q for section in pool_ab.sections for q in section.questions}
        for q in test.iter_questions():
            assert q.correct_option == originals[q.id].correct_option

    def test_assemble_when_explicit_id_then_used(self, pool_ab):
        a, b = pool_ab.sections
        test = assemble_test(
            pool_ab.sections,
            [(a.questions[0],), (b.questions[0],)],
            random.Random(0),
            name="T",
            created_at=CREATED,
            test_id="fixed",
        )
        assert test.id == "fixed"

    def test_assemble_when_misaligned_then_raises_error(self, pool_ab):
        a = pool_ab.sections[0]
        with pytest.raises(ValueError, match="1 selections for 2 sections"):
            assemble_test(pool_ab.sections, [(a.questions[0],)], random.Random(0), name="T", created_at=CREATED)
