# components/wizard_state.py
"""
Wizard state machine for the checklist flow.

    QUESTIONNAIRE --advance() past last question--> LEAD_CAPTURE
    LEAD_CAPTURE  --submit_lead()-----------------> COMPLETION
    any state     --restart()---------------------> QUESTIONNAIRE (index 0)

The controller holds the answer store (one slot per question), the captured
contact details and the generated report. It is kept in st.session_state by
app.py, but has no Streamlit dependency of its own.
"""

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

from components.checklist import Answer, CHECKLIST_QUESTIONS, Question

logger = logging.getLogger(__name__)


class WizardStep(str, Enum):
    QUESTIONNAIRE = "questionnaire"
    LEAD_CAPTURE = "leadCapture"
    COMPLETION = "completion"


class WizardController:

    def __init__(self, questions: Sequence[Question] = CHECKLIST_QUESTIONS,
                 notify: Optional[Callable] = None,
                 fetch_report: Optional[Callable] = None):
        if not questions:
            raise ValueError("A wizard needs at least one question")
        self.questions: List[Question] = list(questions)
        self._notify = notify
        self._fetch_report = fetch_report
        self.restart()

    # ==================== READ HELPERS ====================

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_question_index]

    @property
    def current_answer(self) -> Optional[Answer]:
        return self.answers[self.current_question_index]

    @property
    def can_advance(self) -> bool:
        """The UI only enables 'Volgende' once the current slot is set."""
        return self.step == WizardStep.QUESTIONNAIRE and self.current_answer is not None

    @property
    def can_retreat(self) -> bool:
        return self.step == WizardStep.QUESTIONNAIRE and self.current_question_index > 0

    @property
    def progress(self) -> float:
        if self.step != WizardStep.QUESTIONNAIRE:
            return 1.0
        return self.current_question_index / self.question_count

    def answered(self) -> List[Answer]:
        """Set slots only, in question order."""
        return [a for a in self.answers if a is not None]

    # ==================== TRANSITIONS ====================

    def record_answer(self, index: int, value: str) -> None:
        if not 0 <= index < self.question_count:
            raise IndexError(f"Question index {index} out of range")
        question = self.questions[index]
        if value not in question.options:
            raise ValueError(f"{value!r} is not an option of question {question.id}")
        self.answers[index] = Answer(question=question.text, answer=value)

    def advance(self) -> None:
        if self.step != WizardStep.QUESTIONNAIRE:
            return
        if self.current_question_index < self.question_count - 1:
            self.current_question_index += 1
        else:
            self.step = WizardStep.LEAD_CAPTURE
            logger.info("Questionnaire complete (%d answers)", len(self.answered()))

    def retreat(self) -> None:
        if self.step == WizardStep.QUESTIONNAIRE and self.current_question_index > 0:
            self.current_question_index -= 1

    def submit_lead(self, user_data) -> bool:
        if self.step != WizardStep.LEAD_CAPTURE:
            return False
        self.user_data = user_data

        # Notification failures must never hold up the transition.
        if self._notify is not None:
            try:
                self._notify(user_data, self.answered())
            except Exception as e:
                logger.error(f"Lead notification could not be dispatched: {e}", exc_info=True)

        self.step = WizardStep.COMPLETION
        return True

    def load_report(self):
        """Fetch the report once per completion entry and keep it until restart."""
        if self.step != WizardStep.COMPLETION:
            return None
        if self.report is None and self._fetch_report is not None:
            self.report = self._fetch_report(self.answered())
        return self.report

    def restart(self) -> None:
        self.step = WizardStep.QUESTIONNAIRE
        self.current_question_index = 0
        self.answers: List[Optional[Answer]] = [None] * self.question_count
        self.user_data = None
        self.report = None
