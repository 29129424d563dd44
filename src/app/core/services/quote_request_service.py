"""Quote request intake: persist a validated submission, then confirm it by email."""
import logging
from uuid import UUID, uuid4
from datetime import datetime, UTC

from sqlalchemy.exc import SQLAlchemyError

from src.app.core.domain.models import QuoteRequest
from src.app.core.services.notification import QuoteConfirmationNotifier
from src.app.infrastructure.quote_request_repository import QuoteRequestRepository
from src.client.schemas import QuoteRequestSubmission
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.exceptions import EntityNotFound, MailDeliveryError, NotificationError, PersistenceError

logger = logging.getLogger(__name__)


class QuoteRequestService:
    """Service for handling QuoteRequest business logic."""

    def __init__(
        self,
        repository: QuoteRequestRepository,
        unit_of_work: UnitOfWork,
        notifier: QuoteConfirmationNotifier,
    ):
        """
        Initialize the quote request service.

        Args:
            repository: Read access to stored quote requests
            unit_of_work: Unit of work for the single insert
            notifier: Sends the confirmation email
        """
        self.repository = repository
        self.unit_of_work = unit_of_work
        self.notifier = notifier

    async def submit_quote_request(self, submission: QuoteRequestSubmission) -> QuoteRequest:
        """
        Store a validated submission and email its confirmation.

        The write always happens first and an email is only attempted once the
        write has committed. Identical submissions create separate records.

        Args:
            submission: Validated and normalized form fields

        Returns:
            The stored QuoteRequest

        Raises:
            PersistenceError: If the store rejected the write. No email was sent.
            NotificationError: If composing or sending the email failed. The record remains stored.
        """
        quote_request = QuoteRequest(
            id=uuid4(),
            first_name=submission.first_name,
            last_name=submission.last_name,
            job_title=submission.job_title,
            zip_code=submission.zip_code,
            email=submission.email,
            number=submission.number,
            city=submission.city,
            country=submission.country,
            message=submission.message,
            created_at=datetime.now(UTC),
        )

        try:
            async with self.unit_of_work:
                self.unit_of_work.add(quote_request)
        except (SQLAlchemyError, OSError) as e:
            logger.error("Failed to persist quote request %s: %s", quote_request.id, e)
            raise PersistenceError("QuoteRequest", str(e)) from e

        logger.info("Stored quote request %s", quote_request.id)

        try:
            await self.notifier.send_confirmation(quote_request)
        except MailDeliveryError as e:
            logger.error("Quote request %s stored but confirmation failed: %s", quote_request.id, e)
            raise NotificationError(quote_request.id, str(e)) from e
        except Exception as e:
            logger.exception("Quote request %s stored but confirmation could not be built: %s", quote_request.id, e)
            raise NotificationError(quote_request.id, str(e) or type(e).__name__) from e

        return quote_request

    async def get_quote_request(self, quote_request_id: UUID) -> QuoteRequest:
        """Get a stored quote request by ID."""
        quote_request = await self.repository.get_by_id(quote_request_id)
        if not quote_request:
            raise EntityNotFound("QuoteRequest", quote_request_id)
        return quote_request
