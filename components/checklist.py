# components/checklist.py
"""
HVAC / GBS compatibility checklist.
Question and answer types plus the fixed question set shown in the wizard.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Tuple


class QuestionType(str, Enum):
    """How a single-select question is presented."""
    BUTTONS = "buttons"
    MULTIPLE_CHOICE = "multiple-choice"


@dataclass(frozen=True)
class Question:
    id: int
    text: str
    type: QuestionType
    options: Tuple[str, ...]

    def __post_init__(self):
        if not self.options:
            raise ValueError(f"Question {self.id} has no options")
        if len(set(self.options)) != len(self.options):
            raise ValueError(f"Question {self.id} has duplicate options")


@dataclass(frozen=True)
class Answer:
    """A recorded answer; question holds the question text at answer time."""
    question: str
    answer: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


CHECKLIST_QUESTIONS: Tuple[Question, ...] = (
    Question(
        id=1,
        text='Wat is de geschatte leeftijd van uw huidige HVAC-systeem?',
        type=QuestionType.BUTTONS,
        options=('0-5 jaar', '6-10 jaar', '11-15 jaar', 'Ouder dan 15 jaar'),
    ),
    Question(
        id=2,
        text='Welk type HVAC-systeem wordt voornamelijk in uw gebouw gebruikt?',
        type=QuestionType.MULTIPLE_CHOICE,
        options=(
            'Rooftop units',
            'Koelmachines en Luchtbehandelingskasten (LBK)',
            'Variable Refrigerant Flow (VRF)',
            'Split-systemen',
            'Anders / Weet niet',
        ),
    ),
    Question(
        id=3,
        text='Heeft uw HVAC-systeem een centrale regelaar, of wordt het beheerd door individuele thermostaten?',
        type=QuestionType.BUTTONS,
        options=('Centrale regelaar aanwezig', 'Alleen individuele thermostaten', 'Een mix van beide', 'Weet niet'),
    ),
    Question(
        id=4,
        text='Bent u op de hoogte van de communicatieprotocollen die uw HVAC-apparatuur gebruikt (bijv. BACnet, Modbus, LonWorks)?',
        type=QuestionType.BUTTONS,
        options=(
            'Ja, we gebruiken een standaardprotocol (BACnet, Modbus, etc.)',
            'Nee, ik weet het niet zeker',
            'Ik denk dat ons systeem een merkgebonden protocol gebruikt',
        ),
    ),
    Question(
        id=5,
        text="Is technische documentatie (bijv. handleidingen, bedradingsschema's) van uw HVAC-systeem direct beschikbaar?",
        type=QuestionType.BUTTONS,
        options=('Ja, we hebben alle documentatie', 'We hebben een deel van de documentatie', 'Nee, we hebben geen documentatie'),
    ),
    Question(
        id=6,
        text='Wat is uw belangrijkste doel voor de implementatie van een Gebouwbeheersysteem (GBS)?',
        type=QuestionType.MULTIPLE_CHOICE,
        options=(
            'Energie-efficiëntie verbeteren',
            'Controle en monitoring centraliseren',
            'Onderhoudskosten verlagen',
            'Comfort voor de gebruikers verbeteren',
            'Alle bovenstaande',
        ),
    ),
)
