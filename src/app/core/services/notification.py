"""Confirmation email composition and dispatch for quote requests."""
import logging
import mimetypes
from email.message import EmailMessage
from email.utils import formatdate, make_msgid

from src.app.config import NotificationSettings
from src.app.core.domain.models import QuoteRequest
from src.app.core.services.email_renderer import QuoteEmailRenderer
from src.shared.mail.smtp_mailer import MailSender

logger = logging.getLogger(__name__)


class QuoteConfirmationNotifier:
    """Builds the confirmation email for a stored quote request and hands it to the mail sender."""

    def __init__(
        self,
        renderer: QuoteEmailRenderer,
        mail_sender: MailSender,
        settings: NotificationSettings,
        sender_address: str | None,
        operator_address: str | None,
    ):
        """
        Initialize the notifier and load the inline logo.

        Args:
            renderer: Renders the HTML and plain-text bodies
            mail_sender: Sink that submits the composed message
            settings: Subject and logo configuration
            sender_address: From header value
            operator_address: Address copied on every confirmation

        Raises:
            FileNotFoundError: If the configured logo does not exist
        """
        self.renderer = renderer
        self.mail_sender = mail_sender
        self.settings = settings
        self.sender_address = sender_address
        self.operator_address = operator_address or sender_address

        self.logo_filename = settings.logo_path.name
        self.logo_bytes = settings.logo_path.read_bytes()
        mime_type, _ = mimetypes.guess_type(self.logo_filename)
        self.logo_maintype, self.logo_subtype = (mime_type or "image/png").split("/", 1)

    def build_message(self, quote_request: QuoteRequest) -> EmailMessage:
        """
        Compose the confirmation message.

        The message is multipart/alternative: a plain-text part and a
        multipart/related HTML part carrying the logo inline under its
        content-id.

        Args:
            quote_request: The persisted quote request

        Returns:
            The composed message, addressed to the submitter with the operator in Cc
        """
        message = EmailMessage()
        message["Subject"] = self.settings.subject
        if self.sender_address:
            message["From"] = self.sender_address
        message["To"] = quote_request.email
        if self.operator_address:
            message["Cc"] = self.operator_address
        message["Date"] = formatdate(localtime=False)
        message["Message-ID"] = make_msgid(domain=self._message_id_domain())

        message.set_content(self.renderer.render_text(quote_request))
        message.add_alternative(self.renderer.render_html(quote_request), subtype="html")

        html_part = message.get_payload()[1]
        html_part.add_related(
            self.logo_bytes,
            maintype=self.logo_maintype,
            subtype=self.logo_subtype,
            cid=f"<{self.settings.logo_cid}>",
            filename=self.logo_filename,
        )
        return message

    def _message_id_domain(self) -> str | None:
        if self.sender_address and "@" in self.sender_address:
            return self.sender_address.rsplit("@", 1)[1]
        return None

    async def send_confirmation(self, quote_request: QuoteRequest) -> None:
        """
        Send the confirmation email for a quote request.

        Raises:
            MailDeliveryError: If the mail sender fails to submit the message
        """
        message = self.build_message(quote_request)
        await self.mail_sender.send(message)
        logger.info("Sent confirmation for quote request %s", quote_request.id)
