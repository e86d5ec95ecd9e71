import pytest

from components.checklist import Answer, CHECKLIST_QUESTIONS, Question, QuestionType


def test_checklist_has_six_ordered_questions():
    assert [q.id for q in CHECKLIST_QUESTIONS] == [1, 2, 3, 4, 5, 6]


@pytest.mark.parametrize("question", CHECKLIST_QUESTIONS, ids=lambda q: f"q{q.id}")
def test_options_are_non_empty_and_unique(question):
    assert question.options
    assert len(set(question.options)) == len(question.options)
    assert all(option for option in question.options)


def test_both_presentation_types_are_used():
    types = {q.type for q in CHECKLIST_QUESTIONS}
    assert types == {QuestionType.BUTTONS, QuestionType.MULTIPLE_CHOICE}


def test_question_rejects_duplicate_options():
    with pytest.raises(ValueError):
        Question(id=9, text="Dubbel?", type=QuestionType.BUTTONS, options=("Ja", "Ja"))


def test_question_rejects_empty_options():
    with pytest.raises(ValueError):
        Question(id=9, text="Leeg?", type=QuestionType.BUTTONS, options=())


def test_answer_serialises_to_question_answer_pair():
    assert Answer("Vraag?", "Ja").to_dict() == {"question": "Vraag?", "answer": "Ja"}
