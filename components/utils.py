# components/utils.py

from typing import List, Optional, Sequence

import pandas as pd

from components.checklist import Answer


def split_paragraphs(text: str) -> List[str]:
    """Report step content uses '\\n' between paragraphs; blank lines are dropped."""
    if not text:
        return []
    return [p.strip() for p in text.split('\n') if p.strip()]


def report_recipient_label(user_data) -> str:
    """Company name when known, otherwise the contact's name."""
    if user_data is None:
        return ""
    return user_data.company or user_data.name


def answers_to_dataframe(answers: Sequence[Optional[Answer]]) -> pd.DataFrame:
    """Answered questions as a two-column table for the results overview."""
    rows = [{'Vraag': a.question, 'Antwoord': a.answer} for a in answers if a is not None]
    return pd.DataFrame(rows, columns=['Vraag', 'Antwoord'])
