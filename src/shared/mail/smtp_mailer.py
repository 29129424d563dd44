"""SMTP mail submission adapter."""
import asyncio
import logging
import smtplib
import ssl
from abc import ABC, abstractmethod
from email.message import EmailMessage
from typing import Optional

from pydantic import BaseModel, Field

from src.shared.exceptions import MailDeliveryError

logger = logging.getLogger(__name__)


class MailSender(ABC):
    """Abstract sink for outgoing email messages."""

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """
        Submit a fully composed message.

        Args:
            message: Message with From/To/Cc headers already set

        Raises:
            MailDeliveryError: If the message could not be submitted
        """
        pass


class SmtpMailerSettings(BaseModel):
    """Settings for the SMTP mail sender."""
    host: str = Field(..., description="SMTP submission host")
    port: int = Field(default=465, description="SMTP submission port")
    username: Optional[str] = Field(None, description="Account used to log in")
    password: Optional[str] = Field(None, description="Account password")
    use_ssl: bool = Field(default=True, description="Implicit TLS (SMTPS) instead of plain SMTP")
    starttls: bool = Field(default=False, description="Upgrade a plain SMTP connection with STARTTLS")
    verify_certificates: bool = Field(default=True, description="Verify the server's TLS certificate")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Socket timeout")


class SmtpMailSender(MailSender):
    """
    Mail sender backed by the standard library SMTP client.

    smtplib is blocking, so each submission runs in a worker thread. A fresh
    connection is opened per message, which keeps the sender safe to share
    across concurrent requests.
    """

    def __init__(self, settings: SmtpMailerSettings):
        """
        Initialize the SMTP sender.

        Args:
            settings: SMTP connection configuration
        """
        self.settings = settings

    def _ssl_context(self) -> ssl.SSLContext:
        context = ssl.create_default_context()
        if not self.settings.verify_certificates:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE
        return context

    def _connect(self) -> smtplib.SMTP:
        if self.settings.use_ssl:
            return smtplib.SMTP_SSL(
                self.settings.host,
                self.settings.port,
                timeout=self.settings.timeout_seconds,
                context=self._ssl_context(),
            )

        server = smtplib.SMTP(
            self.settings.host,
            self.settings.port,
            timeout=self.settings.timeout_seconds,
        )
        if self.settings.starttls:
            server.starttls(context=self._ssl_context())
        return server

    async def send(self, message: EmailMessage) -> None:
        await asyncio.to_thread(self._send_sync, message)

    def _send_sync(self, message: EmailMessage) -> None:
        """Synchronous helper that opens a connection and submits the message."""
        try:
            with self._connect() as server:
                if self.settings.username and self.settings.password:
                    server.login(self.settings.username, self.settings.password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP submission to %s:%d failed: %s", self.settings.host, self.settings.port, e)
            raise MailDeliveryError(str(e) or type(e).__name__) from e

        logger.info("Submitted message '%s' via %s", message["Subject"], self.settings.host)
