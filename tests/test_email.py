"""Unit tests for the SendGrid email helper utilities."""

from __future__ import annotations

import json
import types

import pytest

from teamhub.infrastructure import email as email_module


class DummySettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "sender@example.com"


class RecordingClient:
    """Stand-in for ``SendGridAPIClient`` that keeps the messages it is given."""

    sent: list = []

    def __init__(self, api_key: str):
        self.api_key = api_key

    def send(self, message):
        RecordingClient.sent.append(message)
        return types.SimpleNamespace(status_code=202, body=None)


@pytest.fixture
def configured(monkeypatch: pytest.MonkeyPatch):
    RecordingClient.sent = []
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RecordingClient)
    return RecordingClient


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the helper should exit early."""

    class EmptySettings:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: EmptySettings())

    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False


def test_send_email_success(configured) -> None:
    assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is True
    assert len(configured.sent) == 1


def test_send_email_logs_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog):
    """Forbidden responses from SendGrid should surface meaningful log details."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {"errors": [{"message": "The provided authorization grant is invalid."}]}
        ).encode()

    class FailingClient(RecordingClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "<p>Body</p>", "user@example.com")

    assert result is False
    assert "status 403" in caplog.text
    assert "authorization grant is invalid" in caplog.text


def test_send_email_rejects_non_success_status(monkeypatch: pytest.MonkeyPatch, caplog):
    class RejectingClient(RecordingClient):
        def send(self, message):
            return types.SimpleNamespace(status_code=500, body=b"upstream failure")

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    with caplog.at_level("ERROR"):
        assert email_module.send_email("Subject", "<p>Body</p>", "user@example.com") is False

    assert "upstream failure" in caplog.text


def test_invitation_email_escapes_user_content(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}

    def fake_send(subject, html_content, recipient):
        captured.update(subject=subject, html=html_content, recipient=recipient)
        return True

    monkeypatch.setattr(email_module, "send_email", fake_send)

    assert email_module.send_team_invitation_email(
        "new@example.com",
        inviter_name="Manager",
        team_name="Core",
        role="MEMBER",
        invite_link="https://app.example.com/invitation/abc",
        message="<b>welcome</b>",
    )
    assert captured["subject"] == "You're invited to join Core"
    assert "&lt;b&gt;welcome&lt;/b&gt;" in captured["html"]
    assert "https://app.example.com/invitation/abc" in captured["html"]
