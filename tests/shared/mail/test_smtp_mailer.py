"""Tests for the SMTP mail sender with the SMTP client patched out."""
import smtplib
from email.message import EmailMessage
from unittest.mock import MagicMock, patch

import pytest

from src.shared.exceptions import MailDeliveryError
from src.shared.mail.smtp_mailer import SmtpMailSender, SmtpMailerSettings


def make_message() -> EmailMessage:
    message = EmailMessage()
    message["Subject"] = "Hello"
    message["From"] = "no-reply@charginality.test"
    message["To"] = "ada@example.com"
    message.set_content("Hi")
    return message


def patched_client(smtp_class: MagicMock) -> MagicMock:
    """Return the connection object yielded by `with smtp_class(...) as server`."""
    server = MagicMock()
    smtp_class.return_value.__enter__.return_value = server
    return server


@pytest.mark.asyncio
async def test_send_over_implicit_tls_logs_in_and_submits():
    settings = SmtpMailerSettings(host="smtp.test", port=465, username="user", password="pw")
    message = make_message()

    with patch("src.shared.mail.smtp_mailer.smtplib.SMTP_SSL") as smtp_ssl:
        server = patched_client(smtp_ssl)
        await SmtpMailSender(settings).send(message)

    args, kwargs = smtp_ssl.call_args
    assert args == ("smtp.test", 465)
    assert kwargs["timeout"] == 30.0
    assert kwargs["context"] is not None
    server.login.assert_called_once_with("user", "pw")
    server.send_message.assert_called_once_with(message)


@pytest.mark.asyncio
async def test_send_without_credentials_skips_login():
    settings = SmtpMailerSettings(host="smtp.test")

    with patch("src.shared.mail.smtp_mailer.smtplib.SMTP_SSL") as smtp_ssl:
        server = patched_client(smtp_ssl)
        await SmtpMailSender(settings).send(make_message())

    server.login.assert_not_called()
    server.send_message.assert_called_once()


@pytest.mark.asyncio
async def test_send_with_starttls_upgrades_plain_connection():
    settings = SmtpMailerSettings(host="smtp.test", port=587, use_ssl=False, starttls=True)

    with patch("src.shared.mail.smtp_mailer.smtplib.SMTP") as smtp:
        patched_client(smtp)
        await SmtpMailSender(settings).send(make_message())

    smtp.assert_called_once_with("smtp.test", 587, timeout=30.0)
    smtp.return_value.starttls.assert_called_once()


@pytest.mark.asyncio
async def test_smtp_error_becomes_mail_delivery_error():
    settings = SmtpMailerSettings(host="smtp.test", username="user", password="pw")

    with patch("src.shared.mail.smtp_mailer.smtplib.SMTP_SSL") as smtp_ssl:
        server = patched_client(smtp_ssl)
        server.login.side_effect = smtplib.SMTPAuthenticationError(535, b"Authentication failed")

        with pytest.raises(MailDeliveryError) as exc_info:
            await SmtpMailSender(settings).send(make_message())

    assert "Authentication failed" in str(exc_info.value)
    server.send_message.assert_not_called()


@pytest.mark.asyncio
async def test_connection_failure_becomes_mail_delivery_error():
    settings = SmtpMailerSettings(host="smtp.test")

    with patch("src.shared.mail.smtp_mailer.smtplib.SMTP_SSL", side_effect=ConnectionRefusedError()):
        with pytest.raises(MailDeliveryError) as exc_info:
            await SmtpMailSender(settings).send(make_message())

    assert str(exc_info.value) == "ConnectionRefusedError"


def test_unverified_context_disables_hostname_check():
    sender = SmtpMailSender(SmtpMailerSettings(host="smtp.test", verify_certificates=False))

    context = sender._ssl_context()

    assert context.check_hostname is False
