"""Shared fakes for the checklist tests."""

from __future__ import annotations

import json

import pytest

from components.checklist import CHECKLIST_QUESTIONS


class FakeResponse:
    def __init__(self, text):
        self.text = text


class FakeModel:
    """Stands in for genai.GenerativeModel; records prompts, replays a reply or raises."""

    def __init__(self, reply=None, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def generate_content(self, prompt, **kwargs):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return FakeResponse(self.reply)


@pytest.fixture
def three_step_report_json() -> str:
    return json.dumps({
        "summary": "Op basis van het profiel van uw systeem is een GBS-koppeling goed haalbaar.",
        "steps": [
            {"title": "Inventariseer het protocol", "content": "Controleer BACnet-ondersteuning.\nVraag de leverancier."},
            {"title": "Verzamel documentatie", "content": "Leg bedradingsschema's vast."},
            {"title": "Plan een adviesgesprek", "content": "Bespreek de opties met een adviseur."},
        ],
    })


@pytest.fixture
def example_answers() -> list[str]:
    """One option per checklist question, in question order."""
    return [
        "0-5 jaar",
        "Variable Refrigerant Flow (VRF)",
        "Centrale regelaar aanwezig",
        "Ja, we gebruiken een standaardprotocol (BACnet, Modbus, etc.)",
        "Ja, we hebben alle documentatie",
        "Energie-efficiëntie verbeteren",
    ]


@pytest.fixture
def questions():
    return CHECKLIST_QUESTIONS


@pytest.fixture
def make_model():
    return FakeModel
