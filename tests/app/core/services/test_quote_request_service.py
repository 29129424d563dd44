"""Unit tests for QuoteRequestService."""
import pytest
from uuid import uuid4
from unittest.mock import AsyncMock, MagicMock

from dependency_injector import providers
from sqlalchemy.exc import OperationalError

from src.app.core.services.quote_request_service import QuoteRequestService
from src.shared.exceptions import EntityNotFound, NotificationError, PersistenceError
from tests.shared.mail.fake_mailer import FailingMailSender


@pytest.mark.asyncio
async def test_submit_quote_request_successfully(quote_request_service, quote_request_repository, mail_sender, submission):
    # Act
    created = await quote_request_service.submit_quote_request(submission)

    # Assert
    assert created.first_name == submission.first_name
    assert created.email == submission.email
    # Verify it was actually saved to the database
    stored = await quote_request_repository.get_by_id(created.id)
    assert stored is not None
    assert stored.message == submission.message
    assert len(mail_sender.sent) == 1


@pytest.mark.asyncio
async def test_persist_happens_before_notify(
    quote_request_repository, unit_of_work, notifier, submission
):
    # Arrange
    seen_counts = []

    async def record_count(quote_request):
        seen_counts.append(await quote_request_repository.count())

    notifier.send_confirmation = AsyncMock(side_effect=record_count)
    service = QuoteRequestService(
        repository=quote_request_repository, unit_of_work=unit_of_work, notifier=notifier
    )

    # Act
    await service.submit_quote_request(submission)

    # Assert
    assert seen_counts == [1]


@pytest.mark.asyncio
async def test_persistence_failure_skips_notification(quote_request_repository, unit_of_work, notifier, submission):
    # Arrange
    unit_of_work.commit = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("database is locked")))
    notifier.send_confirmation = AsyncMock()
    service = QuoteRequestService(
        repository=quote_request_repository, unit_of_work=unit_of_work, notifier=notifier
    )

    # Act & Assert
    with pytest.raises(PersistenceError):
        await service.submit_quote_request(submission)

    notifier.send_confirmation.assert_not_called()
    assert await quote_request_repository.count() == 0


@pytest.mark.asyncio
async def test_notification_failure_keeps_record(test_container, quote_request_repository, submission):
    # Arrange
    test_container.mail_sender.override(providers.Object(FailingMailSender(reason="421 Service not available")))
    service = test_container.quote_request_service()

    # Act & Assert
    with pytest.raises(NotificationError) as exc_info:
        await service.submit_quote_request(submission)

    assert exc_info.value.reason == "421 Service not available"
    stored = await quote_request_repository.get_by_id(exc_info.value.entity_id)
    assert stored is not None
    assert stored.email == submission.email


@pytest.mark.asyncio
async def test_rendering_failure_is_reported_as_notification_error(
    quote_request_repository, unit_of_work, notifier, mail_sender, submission
):
    # Arrange
    notifier.renderer.render_html = MagicMock(side_effect=RuntimeError("template not found"))
    service = QuoteRequestService(
        repository=quote_request_repository, unit_of_work=unit_of_work, notifier=notifier
    )

    # Act & Assert
    with pytest.raises(NotificationError) as exc_info:
        await service.submit_quote_request(submission)

    assert exc_info.value.reason == "template not found"
    stored = await quote_request_repository.get_by_id(exc_info.value.entity_id)
    assert stored is not None
    assert mail_sender.sent == []


@pytest.mark.asyncio
async def test_get_quote_request_successfully(quote_request_service, submission):
    # Arrange
    created = await quote_request_service.submit_quote_request(submission)

    # Act
    found = await quote_request_service.get_quote_request(created.id)

    # Assert
    assert found.id == created.id
    assert found.city == submission.city


@pytest.mark.asyncio
async def test_get_quote_request_raises_not_found(quote_request_service):
    with pytest.raises(EntityNotFound):
        await quote_request_service.get_quote_request(uuid4())
