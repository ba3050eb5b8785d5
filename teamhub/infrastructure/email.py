"""Utility helpers for sending transactional email notifications via SendGrid."""

from __future__ import annotations

from html import escape
import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from teamhub.config import get_settings

logger = logging.getLogger(__name__)


def _describe_error_body(body: Any) -> str | None:
    """Return a short description for a SendGrid error payload."""

    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if not body:
        return None
    if isinstance(body, str):
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body.strip() or None
    if isinstance(body, dict) and isinstance(body.get("errors"), list):
        messages = [
            str(item.get("message"))
            for item in body["errors"]
            if isinstance(item, dict) and item.get("message")
        ]
        if messages:
            return "; ".join(messages)
    return str(body)


def send_email(subject: str, html_content: str, recipient: str) -> bool:
    """Send an email using the configured SendGrid credentials.

    Returns ``False`` instead of raising when the mail could not be handed over,
    so callers can log the failure and carry on.
    """

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email to %s", recipient)
        return False

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=html_content,
    )

    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except Exception as exc:
        details = _describe_error_body(getattr(exc, "body", None))
        logger.error(
            "SendGrid API request failed with status %s: %s",
            getattr(exc, "status_code", None),
            details or exc,
        )
        return False

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        logger.error(
            "SendGrid API responded with status %s: %s",
            status_code,
            _describe_error_body(getattr(response, "body", None)),
        )
        return False

    return True


def send_team_invitation_email(
    recipient: str,
    *,
    inviter_name: str,
    team_name: str,
    role: str,
    invite_link: str,
    message: str | None = None,
) -> bool:
    """Invite ``recipient`` to join ``team_name`` through ``invite_link``."""

    subject = f"You're invited to join {team_name}"
    parts = [
        "<p>Hello,</p>",
        f"<p>{escape(inviter_name)} invited you to join <strong>{escape(team_name)}</strong>"
        f" as {escape(role)}.</p>",
    ]
    if message:
        parts.append(f"<blockquote>{escape(message)}</blockquote>")
    parts.append(f'<p><a href="{escape(invite_link)}">Accept the invitation</a></p>')
    return send_email(subject, "".join(parts), recipient)


def send_added_to_team_email(
    recipient: str, *, added_by: str, team_name: str, dashboard_link: str
) -> bool:
    """Tell ``recipient`` they were added to ``team_name``."""

    subject = f"You've been added to {team_name}"
    html_content = (
        "<p>Hello,</p>"
        f"<p>{escape(added_by)} added you to <strong>{escape(team_name)}</strong>.</p>"
        f'<p><a href="{escape(dashboard_link)}">Open your dashboard</a></p>'
    )
    return send_email(subject, html_content, recipient)


__all__ = ["send_added_to_team_email", "send_email", "send_team_invitation_email"]
