from smtplib import SMTPException
from unittest.mock import patch

from extensions import mail
from services import EmailClient


def test_send_email_delivers_message(app):
    client = EmailClient()

    with mail.record_messages() as outbox:
        result = client.send_email("receiver@itu.dk", "Hello", "Body text")

    assert result == (True, None)
    assert len(outbox) == 1
    assert outbox[0].recipients == ["receiver@itu.dk"]
    assert outbox[0].subject == "Hello"
    assert outbox[0].body == "Body text"
    assert outbox[0].sender == "noreply@pollopollo.test"


def test_send_email_reports_smtp_failure(app):
    client = EmailClient()

    with patch("services.email_client.mail.send", side_effect=SMTPException("connection refused")):
        sent, error = client.send_email("receiver@itu.dk", "Hello", "Body text")

    assert sent is False
    assert "connection refused" in error


def test_send_email_without_recipient_is_skipped(app):
    client = EmailClient()

    with mail.record_messages() as outbox:
        result = client.send_email(None, "Hello", "Body text")

    assert result == (False, "Recipient has no email address")
    assert outbox == []
