"""
Unit Tests for Question Models

Tests for the single-choice, passage and free-response pool entries.
"""

import pytest

from testmaker_toolkit.core.models.questions import (
    FreeResponseQuestion,
    PassageQuestion,
    QuestionKind,
    SingleChoiceQuestion,
    SubQuestion,
    question_from_dict,
)


class TestQuestionKind:
    """Tests for QuestionKind.parse."""

    def test_parse_when_known_tag_then_returns_kind(self):
        """Stored tags map onto kinds."""
        assert QuestionKind.parse("mcq") is QuestionKind.SINGLE_CHOICE
        assert QuestionKind.parse("reading") is QuestionKind.PASSAGE
        assert QuestionKind.parse("writing") is QuestionKind.FREE_RESPONSE

    def test_parse_when_mixed_case_then_returns_kind(self):
        """Tags are matched case-insensitively."""
        assert QuestionKind.parse("MCQ") is QuestionKind.SINGLE_CHOICE

    def test_parse_when_fill_in_the_blank_then_returns_passage(self):
        """Fill-in-the-blank entries share the passage shape."""
        assert QuestionKind.parse("fill-in-the-blank") is QuestionKind.PASSAGE

    def test_parse_when_unknown_tag_then_raises_error(self):
        """Unknown tags should raise ValueError."""
        with pytest.raises(ValueError, match="Unknown question type"):
            QuestionKind.parse("essay")


class TestSingleChoiceQuestion:
    """Tests for SingleChoiceQuestion dataclass."""

    def test_correct_option_when_valid_then_returns_text(self):
        """correct_option should return the option at correct_answer."""
        q = SingleChoiceQuestion("q1", "2 + 2 = ?", ("3", "4", "5"), 1)
        assert q.correct_option == "4"

    def test_init_when_index_out_of_range_then_raises_error(self):
        """correct_answer outside options should raise ValueError."""
        with pytest.raises(ValueError, match="out of range"):
            SingleChoiceQuestion("q1", "?", ("a", "b"), 2)

    def test_init_when_negative_index_then_raises_error(self):
        """Negative correct_answer should raise ValueError."""
        with pytest.raises(ValueError, match="out of range"):
            SingleChoiceQuestion("q1", "?", ("a", "b"), -1)

    def test_init_when_no_options_then_allowed(self):
        """A question without options is a valid (degenerate) entry."""
        q = SingleChoiceQuestion("q1", "?")
        assert q.options == ()
        assert q.correct_option is None

    def test_init_when_options_is_list_then_raises_error(self):
        """Options must be an immutable tuple."""
        with pytest.raises(ValueError, match="must be a tuple"):
            SingleChoiceQuestion("q1", "?", ["a", "b"], 0)

    def test_init_when_empty_id_then_raises_error(self):
        """Empty ids should raise ValueError."""
        with pytest.raises(ValueError, match="non-empty"):
            SingleChoiceQuestion("", "?", ("a",), 0)

    def test_to_dict_when_serialized_then_uses_project_keys(self):
        """to_dict should use the project file keys."""
        q = SingleChoiceQuestion("q1", "Pick", ("a", "b"), 1)
        assert q.to_dict() == {
            "id": "q1",
            "type": "mcq",
            "text": "Pick",
            "options": ["a", "b"],
            "correctAnswer": 1,
        }

    def test_from_dict_when_numeric_id_then_converts_to_string(self):
        """Numeric ids from older files become strings."""
        q = SingleChoiceQuestion.from_dict(
            {"id": 1700000000123, "type": "mcq", "text": "?", "options": ["a"], "correctAnswer": 0}
        )
        assert q.id == "1700000000123"


class TestPassageQuestion:
    """Tests for PassageQuestion dataclass."""

    def test_init_when_duplicate_sub_ids_then_raises_error(self):
        """Duplicate sub-question ids should raise ValueError."""
        sub = SubQuestion("s1", "?", ("a", "b"), 0)
        with pytest.raises(ValueError, match="Duplicate sub-question ids"):
            PassageQuestion("r1", "Title", "Text", (sub, sub))

    def test_sub_question_count_when_built_then_counts_items(self, passage_question):
        """sub_question_count should count nested items."""
        assert passage_question.sub_question_count == 3

    def test_from_dict_when_round_tripped_then_equal(self, passage_question):
        """from_dict(to_dict()) should rebuild an equal passage."""
        assert PassageQuestion.from_dict(passage_question.to_dict()) == passage_question

    def test_sub_question_when_index_out_of_range_then_raises_error(self):
        """Sub-questions validate their correct index too."""
        with pytest.raises(ValueError, match="out of range"):
            SubQuestion("s1", "?", ("a",), 1)


class TestQuestionFromDict:
    """Tests for question_from_dict dispatch."""

    def test_from_dict_when_mcq_then_returns_single_choice(self):
        q = question_from_dict({"id": "1", "type": "mcq", "text": "?", "options": ["a", "b"], "correctAnswer": 1})
        assert isinstance(q, SingleChoiceQuestion)
        assert q.correct_option == "b"

    def test_from_dict_when_fill_in_the_blank_then_returns_passage(self):
        q = question_from_dict({
            "id": "2",
            "type": "fill-in-the-blank",
            "title": "Fill",
            "passage": "The ___ sat.",
            "questions": [{"id": "2a", "text": "Blank 1", "options": ["cat", "dog"], "correctAnswer": 0}],
        })
        assert isinstance(q, PassageQuestion)
        assert q.questions[0].correct_option == "cat"

    def test_from_dict_when_writing_then_returns_free_response(self, writing_question):
        q = question_from_dict(writing_question.to_dict())
        assert isinstance(q, FreeResponseQuestion)
        assert q == writing_question

    def test_from_dict_when_missing_type_then_raises_error(self):
        """Entries without a tag cannot be classified."""
        with pytest.raises(ValueError):
            question_from_dict({"id": "3", "text": "?"})


class TestStoredTypeTag:
    """Tests that the stored type tag survives a load/save cycle."""

    @pytest.mark.parametrize(
        "tag, stored",
        [
            ("mcq", "mcq"),
            ("single-choice", "mcq"),
            ("reading", "reading"),
            ("passage", "reading"),
            ("fill-in-the-blank", "fill-in-the-blank"),
            ("Fill-In-The-Blank", "fill-in-the-blank"),
            ("writing", "writing"),
            ("free-response", "writing"),
        ],
    )
    def test_to_dict_when_loaded_from_tag_then_writes_stored_tag(self, tag, stored):
        data = {
            "id": "q1",
            "type": tag,
            "text": "Prompt",
            "title": "Title",
            "passage": "Text",
            "options": ["a", "b"],
            "correctAnswer": 1,
            "questions": [{"id": "s1", "text": "?", "options": ["x", "y"], "correctAnswer": 0}],
        }
        assert question_from_dict(data).to_dict()["type"] == stored

    def test_from_dict_when_fill_in_the_blank_round_tripped_then_equal(self):
        """A fill-in-the-blank passage is written back exactly as read."""
        data = {
            "id": "f1",
            "type": "fill-in-the-blank",
            "title": "Fill",
            "passage": "The ___ sat on the ___.",
            "questions": [
                {"id": "f1a", "text": "Blank 1", "options": ["cat", "dog"], "correctAnswer": 0},
                {"id": "f1b", "text": "Blank 2", "options": ["mat", "hat"], "correctAnswer": 1},
            ],
        }

        q = question_from_dict(data)

        assert q.tag == "fill-in-the-blank"
        assert q.to_dict() == data
        assert question_from_dict(q.to_dict()) == q

    def test_init_when_passage_tag_unknown_then_raises_error(self):
        with pytest.raises(ValueError, match="Invalid passage tag"):
            PassageQuestion("r1", "Title", "Text", (), tag="mcq")

    def test_init_when_no_tag_then_reading(self, passage_question):
        assert passage_question.tag == "reading"
        assert passage_question.to_dict()["type"] == "reading"
