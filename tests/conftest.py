"""Shared test fixtures and utilities for all tests."""
import pytest
import pytest_asyncio
from dependency_injector import providers
from httpx import ASGITransport, AsyncClient

from src.app.application import create_app
from src.app.config import Settings, RateLimitSettings, SmtpSettings, NotificationSettings
from src.app.containers import Container
from src.client import QuoteDeskClient, QuoteRequestSubmission
from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.unit_of_work import UnitOfWork
from tests.quote_data import OPERATOR_ADDRESS, valid_payload
from tests.shared.mail.fake_mailer import RecordingMailSender


@pytest.fixture
def submission() -> QuoteRequestSubmission:
    return QuoteRequestSubmission(**valid_payload())


@pytest.fixture
def async_db_url(tmp_path):
    """
    File-backed SQLite database per test.
    A file (not :memory:) so every pooled connection sees the same data.
    """
    return f"sqlite+aiosqlite:///{tmp_path / 'quote_requests.db'}"


@pytest.fixture
def test_settings(async_db_url):
    """Settings for tests, independent of the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        database_url=async_db_url,
        smtp=SmtpSettings(host="smtp.test", port=465, username="no-reply@charginality.test", password="secret"),
        notification=NotificationSettings(operator_address=OPERATOR_ADDRESS),
        rate_limit=RateLimitSettings(enabled=True, limit="100 per 15 minutes"),
    )


@pytest_asyncio.fixture(scope="function")
async def db(async_db_url):
    """
    Create database instance with test database.
    Function-scoped for test isolation.
    """
    db = Database(DatabaseSettings(db_url=async_db_url))
    yield db
    await db.dispose()


@pytest_asyncio.fixture(scope="function")
async def clean_database(db):
    """Create all tables in the fresh database."""
    await db.drop_all()
    await db.create_all()
    yield db


@pytest.fixture
def mail_sender():
    """Recording mail sender used in place of SMTP."""
    return RecordingMailSender()


@pytest.fixture(scope="function")
def test_container(test_settings, clean_database, mail_sender):
    """
    Create a test container with database and mail overrides for proper test isolation.
    Function-scoped to ensure each test gets a fresh container.
    """
    container = Container()
    container.config.override(providers.Object(test_settings))
    container.database.override(providers.Object(clean_database))
    container.mail_sender.override(providers.Object(mail_sender))

    yield container

    container.mail_sender.reset_override()
    container.database.reset_override()
    container.config.reset_override()
    container.unwire()


@pytest_asyncio.fixture(scope="function")
async def test_app(test_container):
    """
    Create test application with container.
    ASGITransport does not run the lifespan; tables come from clean_database.
    """
    yield create_app(test_container)


@pytest_asyncio.fixture
async def http_client(test_app):
    """Raw HTTP client for requests the typed client cannot express (invalid bodies)."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def quote_client(http_client):
    """Typed API client sharing the raw client's transport."""
    client = QuoteDeskClient(base_url="http://test", client=http_client)
    yield client


@pytest_asyncio.fixture(scope="function")
async def unit_of_work(clean_database, test_container):
    """
    Fixture for a UnitOfWork instance with a clean database.
    Uses the container's entity_mapper singleton.
    """
    entity_mapper = test_container.entity_mapper()
    yield UnitOfWork(clean_database, entity_mapper)


# =========================================================================
# Repository and service fixtures from container
# =========================================================================

@pytest.fixture
def quote_request_repository(test_container):
    """Get quote request repository from container."""
    return test_container.quote_request_repository()


@pytest.fixture
def quote_request_service(test_container):
    """Get quote request service from container."""
    return test_container.quote_request_service()


@pytest.fixture
def notifier(test_container):
    """Get the confirmation notifier from container."""
    return test_container.quote_confirmation_notifier()


@pytest.fixture
def email_renderer(test_container):
    """Get the email renderer from container."""
    return test_container.email_renderer()
