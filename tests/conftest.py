import pytest
import sys
from pathlib import Path

# Add src to sys.path so we can import testmaker_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from testmaker_toolkit.core.models import (  # noqa: E402
    FreeResponseQuestion,
    MasterPool,
    PassageQuestion,
    Section,
    SingleChoiceQuestion,
    SubQuestion,
)


def make_mcq(qid: str, correct: int = 0, n_options: int = 4) -> SingleChoiceQuestion:
    """Single-choice question with options '<qid>-opt0'..."""
    options = tuple(f"{qid}-opt{i}" for i in range(n_options))
    return SingleChoiceQuestion(id=qid, text=f"Question {qid}", options=options, correct_answer=correct)


def make_section(section_id: str, size: int, name: str | None = None) -> Section:
    questions = tuple(make_mcq(f"{section_id}{i + 1}", correct=i % 4) for i in range(size))
    return Section(id=section_id, name=name or f"Section {section_id.upper()}", questions=questions)


# Common test fixtures
@pytest.fixture
def pool_ab() -> MasterPool:
    """Section A: 5 single-choice questions, section B: 4."""
    return MasterPool(sections=(make_section("a", 5), make_section("b", 4)), name="Unit 1")


@pytest.fixture
def passage_question() -> PassageQuestion:
    subs = (
        SubQuestion("r1-1", "Main idea?", ("Rain", "Sun", "Wind", "Snow"), 2),
        SubQuestion("r1-2", "Author tone?", ("Calm", "Angry", "Sad"), 0),
        SubQuestion("r1-3", "True?", ("Yes",), 0),
    )
    return PassageQuestion(
        id="r1",
        title="<b>The Storm</b>",
        passage="<p>It was a dark and windy night.</p>",
        questions=subs,
    )


@pytest.fixture
def writing_question() -> FreeResponseQuestion:
    return FreeResponseQuestion(id="w1", text="Describe your town.", answer="Any answer of 100 words")


@pytest.fixture
def mixed_pool(passage_question, writing_question) -> MasterPool:
    """One section mixing all three question kinds, plus a plain section."""
    mixed = Section(
        id="mixed",
        name="Reading & Writing",
        questions=(make_mcq("m1", correct=3), passage_question, writing_question),
    )
    return MasterPool(sections=(mixed, make_section("g", 3, name="Grammar")), name="Mixed")


@pytest.fixture
def pool_data() -> dict:
    """Master pool in stored JSON form."""
    return {
        "name": "Unit 2",
        "sections": [
            {
                "id": 1,
                "sectionName": "Vocabulary",
                "questions": [
                    {"id": 11, "type": "mcq", "text": "Pick one", "options": ["a", "b", "c"], "correctAnswer": 1},
                    {"id": 12, "type": "mcq", "text": "Pick two", "options": ["d", "e"], "correctAnswer": 0},
                ],
            },
            {
                "id": 2,
                "sectionName": "Reading",
                "questions": [
                    {
                        "id": 21,
                        "type": "reading",
                        "title": "Passage",
                        "passage": "Once upon a time",
                        "questions": [
                            {"id": 211, "text": "Who?", "options": ["x", "y"], "correctAnswer": 1},
                        ],
                    },
                    {"id": 22, "type": "writing", "text": "Write a story", "answer": ""},
                ],
            },
        ],
    }
