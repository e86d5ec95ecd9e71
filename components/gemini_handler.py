# components/gemini_handler.py
import logging
from typing import List, Optional, Sequence

import google.generativeai as genai
from pydantic import BaseModel, Field, ValidationError, field_validator

from components.checklist import Answer

logger = logging.getLogger(__name__)

DEFAULT_MODEL = 'gemini-2.5-flash'

SYSTEM_INSTRUCTION = (
    "Je bent een expert op het gebied van HVAC-systemen en gebouwbeheersystemen (GBS) voor de Nederlandse markt. "
    "Jouw taak is om een gepersonaliseerd, deskundig en betrouwbaar compatibiliteitsrapport te genereren op basis "
    "van de antwoorden van een gebruiker. Het rapport moet bestaan uit een samenvatting en een concreet stappenplan. "
    "Wees professioneel, duidelijk, en gebruik Nederlands. Het doel is om de gebruiker te informeren over de "
    "mogelijkheden om hun HVAC-systeem te koppelen aan een GBS en hen aan te moedigen contact op te nemen voor advies."
)

REPORT_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "summary": {
            "type": "STRING",
            "description": "Een beknopte samenvatting van de compatibiliteitsanalyse in 2-4 zinnen.",
        },
        "steps": {
            "type": "ARRAY",
            "description": "Een lijst met aanbevolen vervolgstappen.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": {
                        "type": "STRING",
                        "description": "Een korte, duidelijke titel voor de stap.",
                    },
                    "content": {
                        "type": "STRING",
                        "description": "Een gedetailleerde beschrijving van de stap. Mag alinea's bevatten gescheiden door '\\n'.",
                    },
                },
                "required": ["title", "content"],
            },
        },
    },
    "required": ["summary", "steps"],
}


def _require_text(value: str) -> str:
    # Blank strings are rejected, but accepted text is kept exactly as sent.
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class ReportStep(BaseModel):
    title: str
    content: str

    @field_validator('title', 'content')
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _require_text(value)


class ReportData(BaseModel):
    """Advisory report as returned by Gemini (or the fixed fallback)."""

    summary: str
    steps: List[ReportStep] = Field(min_length=1)

    @field_validator('summary')
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _require_text(value)


FALLBACK_REPORT = ReportData(
    summary=(
        "We konden op dit moment uw gepersonaliseerde rapport niet genereren. Dit kan gebeuren als er een "
        "probleem is met de server of de API-configuratie."
    ),
    steps=[
        ReportStep(
            title="Neem contact op voor hulp",
            content=(
                "Ons team heeft uw antwoorden ontvangen en neemt contact met u op om de analyse alsnog te verstrekken. "
                "U kunt ook direct contact opnemen via de knoppen onderaan."
            ),
        )
    ],
)


def fallback_report() -> ReportData:
    return FALLBACK_REPORT.model_copy(deep=True)


def setup_gemini(api_key: Optional[str], model_name: str = DEFAULT_MODEL):
    """Configure the Gemini API and return the model, or None when unavailable."""
    if not api_key:
        logger.error("GEMINI_API_KEY is not configured; reports will use the fallback text.")
        return None
    try:
        genai.configure(api_key=api_key)
        return genai.GenerativeModel(
            model_name,
            system_instruction=SYSTEM_INSTRUCTION,
            generation_config=genai.GenerationConfig(
                response_mime_type="application/json",
                response_schema=REPORT_SCHEMA,
                temperature=0.5,
            ),
        )
    except Exception as e:
        logger.error(f"Gemini API configuration failed: {e}", exc_info=True)
        return None


def build_report_prompt(answers: Sequence[Answer]) -> str:
    answers_text = "\n\n".join(f"Vraag: {a.question}\nAntwoord: {a.answer}" for a in answers)

    return f"""Analyseer de volgende antwoorden van de checklist en genereer een HVAC-compatibiliteitsrapport.

Antwoorden:
{answers_text}

Het rapport moet strikt voldoen aan het opgegeven JSON-schema. De 'summary' moet een beknopte analyse zijn van de compatibiliteit (ongeveer 2-4 zinnen). De 'steps' moeten een lijst van aanbevolen acties zijn. Elke stap moet een duidelijke 'title' en informatieve 'content' hebben. De content kan meerdere alinea's bevatten, gescheiden door '\\n'."""


def extract_text_from_response(response) -> Optional[str]:
    """
    Helper function to extract text from Gemini response object.
    Handles multiple response formats gracefully.

    Args:
        response: Gemini GenerateContentResponse object or string

    Returns:
        Plain text string or None
    """
    if response is None:
        return None

    if isinstance(response, str):
        return response

    # .text raises ValueError when the candidate was blocked or has no parts
    try:
        text = response.text
        if text:
            return text
    except (AttributeError, ValueError):
        pass

    try:
        return response.candidates[0].content.parts[0].text or None
    except (AttributeError, IndexError, TypeError):
        return None


def parse_report(text: str) -> ReportData:
    """Validate Gemini's JSON text; raises pydantic.ValidationError when it does not fit."""
    return ReportData.model_validate_json(text)


def generate_report(model, answers: Sequence[Optional[Answer]]) -> ReportData:
    """
    Single attempt at a report for the given answers.
    Any failure is logged and replaced by the fallback report; never raises.
    """
    answered = [a for a in answers if a is not None]

    if model is None:
        logger.error("No Gemini model configured; returning fallback report.")
        return fallback_report()
    if not answered:
        logger.error("Report requested without any answers; returning fallback report.")
        return fallback_report()

    try:
        response = model.generate_content(build_report_prompt(answered))
        text = extract_text_from_response(response)
        if not text:
            raise ValueError("Gemini response was empty")
        report = parse_report(text)
    except ValidationError as e:
        logger.error(f"Gemini report did not match the schema: {e}")
        return fallback_report()
    except Exception as e:
        logger.error(f"Error generating summary with Gemini: {e}", exc_info=True)
        return fallback_report()

    logger.info("Generated report with %d steps", len(report.steps))
    return report
