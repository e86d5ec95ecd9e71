# components/lead_capture.py
# Contact details captured after the questionnaire, and the best-effort
# webhook (Google Apps Script sheet) that receives them.

import logging
import re
import threading
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Sequence

import requests

from components.checklist import Answer

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


@dataclass(frozen=True)
class UserData:
    """Client contact information"""
    name: str
    company: str
    email: str


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email or ""))


def is_valid_lead(name: str, company: str, email: str) -> bool:
    """Gate for the submit button; only syntax is checked, never existence."""
    return bool((name or "").strip()) and bool((company or "").strip()) and is_valid_email(email)


def build_lead_payload(user_data: UserData, answers: Sequence[Optional[Answer]]) -> Dict[str, Any]:
    return {
        'user': asdict(user_data),
        'answers': [a.to_dict() for a in answers if a is not None],
    }


class LeadNotifier:
    """
    Fire-and-forget sender for new leads.

    notify() hands the POST to a daemon thread and returns immediately; the
    wizard never waits on it and never sees its outcome. Nothing is retried.
    """

    def __init__(self, webhook_url: Optional[str], timeout: float = 10.0,
                 session: Optional[requests.Session] = None):
        self.webhook_url = webhook_url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({'Content-Type': 'application/json'})

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url) and self.webhook_url.startswith('https://')

    def send(self, user_data: UserData, answers: Sequence[Optional[Answer]]) -> bool:
        payload = build_lead_payload(user_data, answers)
        try:
            response = self._session.post(self.webhook_url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Error sending lead to webhook: {e}")
            return False

        if response.status_code >= 400:
            logger.error("Lead webhook answered HTTP %s", response.status_code)
            return False

        logger.info("Lead submitted for %s", user_data.company)
        return True

    def notify(self, user_data: UserData, answers: Sequence[Optional[Answer]]) -> Optional[threading.Thread]:
        if not self.enabled:
            logger.warning("GOOGLE_APP_SCRIPT_URL is not configured (or not https); lead data will not be sent.")
            return None

        # Copy now so later edits to the answer store cannot leak into the payload.
        snapshot = [a for a in answers if a is not None]
        thread = threading.Thread(
            target=self.send,
            args=(user_data, snapshot),
            name="lead-notifier",
            daemon=True,
        )
        thread.start()
        return thread
