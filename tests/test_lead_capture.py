import pytest
import requests

from components.checklist import Answer
from components.lead_capture import (
    LeadNotifier,
    UserData,
    build_lead_payload,
    is_valid_email,
    is_valid_lead,
)

USER = UserData(name="Jan Jansen", company="Test BV", email="jan@test.nl")
ANSWERS = [Answer("Vraag 1?", "Ja"), None, Answer("Vraag 3?", "Nee")]
WEBHOOK = "https://script.google.com/macros/s/abc/exec"


class FakeHTTPResponse:
    def __init__(self, status_code):
        self.status_code = status_code


class FakeSession:
    def __init__(self, status_code=200, error=None):
        self.headers = {}
        self.status_code = status_code
        self.error = error
        self.posts = []

    def post(self, url, json=None, timeout=None):
        self.posts.append({"url": url, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return FakeHTTPResponse(self.status_code)


@pytest.mark.parametrize("email", ["jan@test.nl", "onbekend.adres@bestaat-niet.example.com"])
def test_syntactically_valid_email_is_accepted(email):
    assert is_valid_email(email)


@pytest.mark.parametrize("email", ["not-an-email", "jan@test", "jan @test.nl", "@test.nl", ""])
def test_malformed_email_is_rejected(email):
    assert not is_valid_email(email)


def test_lead_requires_name_and_company():
    assert is_valid_lead("Jan Jansen", "Test BV", "jan@test.nl")
    assert not is_valid_lead("   ", "Test BV", "jan@test.nl")
    assert not is_valid_lead("Jan Jansen", "", "jan@test.nl")
    assert not is_valid_lead("Jan Jansen", "Test BV", "not-an-email")


def test_payload_contains_user_and_answered_questions_only():
    assert build_lead_payload(USER, ANSWERS) == {
        "user": {"name": "Jan Jansen", "company": "Test BV", "email": "jan@test.nl"},
        "answers": [
            {"question": "Vraag 1?", "answer": "Ja"},
            {"question": "Vraag 3?", "answer": "Nee"},
        ],
    }


@pytest.mark.parametrize("url, enabled", [
    (WEBHOOK, True),
    ("http://insecure.example.com/hook", False),
    ("", False),
    (None, False),
])
def test_notifier_only_enabled_for_https(url, enabled):
    assert LeadNotifier(url, session=FakeSession()).enabled is enabled


def test_notify_posts_payload_in_background():
    session = FakeSession()
    notifier = LeadNotifier(WEBHOOK, timeout=3, session=session)

    thread = notifier.notify(USER, ANSWERS)
    thread.join(timeout=5)

    assert thread.daemon
    assert len(session.posts) == 1
    post = session.posts[0]
    assert post["url"] == WEBHOOK
    assert post["timeout"] == 3
    assert post["json"] == build_lead_payload(USER, ANSWERS)


def test_notify_without_webhook_is_skipped_quietly():
    session = FakeSession()
    assert LeadNotifier(None, session=session).notify(USER, ANSWERS) is None
    assert session.posts == []


def test_send_swallows_network_errors():
    session = FakeSession(error=requests.exceptions.ConnectionError("unreachable"))
    assert LeadNotifier(WEBHOOK, session=session).send(USER, ANSWERS) is False


def test_send_reports_http_errors_as_failure():
    assert LeadNotifier(WEBHOOK, session=FakeSession(status_code=500)).send(USER, ANSWERS) is False


def test_send_success():
    assert LeadNotifier(WEBHOOK, session=FakeSession()).send(USER, ANSWERS) is True
