"""Dependency injection container using dependency-injector library."""
from dependency_injector import containers, providers

from src.app.config import Settings
from src.shared.database.database import Database, DatabaseSettings
from src.shared.database.unit_of_work import UnitOfWork
from src.shared.database.mapping import EntityMapper
from src.shared.mail.smtp_mailer import SmtpMailSender, SmtpMailerSettings

from src.app.infrastructure.mappers.quote_request_mapper import QuoteRequestMapper
from src.app.infrastructure.quote_request_repository import QuoteRequestRepository

from src.app.core.services.email_renderer import QuoteEmailRenderer
from src.app.core.services.notification import QuoteConfirmationNotifier
from src.app.core.services.quote_request_service import QuoteRequestService

from src.app.core.domain.models import QuoteRequest


def create_entity_mapper(quote_request_mapper: QuoteRequestMapper) -> EntityMapper:
    """Factory function to create EntityMapper with proper mappings."""
    return EntityMapper(
        entity_mappings={
            QuoteRequest: quote_request_mapper.to_entity,
        }
    )


class Container(containers.DeclarativeContainer):
    """Main application dependency injection container."""

    wiring_config = containers.WiringConfiguration(
        modules=[
            "src.app.api.quote_requests",
        ]
    )

    # =========================================================================
    # CONFIGURATION - Singleton (loaded once, cached)
    # =========================================================================
    config = providers.Singleton(Settings)

    # =========================================================================
    # SINGLETONS - Stateless Mappers (reusable across all requests)
    # =========================================================================
    quote_request_mapper = providers.Singleton(QuoteRequestMapper)

    entity_mapper = providers.Singleton(
        create_entity_mapper,
        quote_request_mapper=quote_request_mapper,
    )

    # =========================================================================
    # SINGLETON - Database (shared connection pool, lives for the process)
    # =========================================================================
    database_settings = providers.Singleton(
        DatabaseSettings,
        db_url=config.provided.database_url,
    )

    database = providers.Singleton(
        Database,
        db_settings=database_settings,
    )

    # =========================================================================
    # SINGLETONS - Outbound mail (one sender for the process)
    # =========================================================================
    smtp_settings = providers.Singleton(
        SmtpMailerSettings,
        host=config.provided.smtp.host,
        port=config.provided.smtp.port,
        username=config.provided.smtp.username,
        password=config.provided.smtp.password,
        use_ssl=config.provided.smtp.use_ssl,
        starttls=config.provided.smtp.starttls,
        verify_certificates=config.provided.smtp.verify_certificates,
        timeout_seconds=config.provided.smtp.timeout_seconds,
    )

    mail_sender = providers.Singleton(
        SmtpMailSender,
        settings=smtp_settings,
    )

    # =========================================================================
    # SINGLETONS - Confirmation email (templates and logo loaded once)
    # =========================================================================
    email_renderer = providers.Singleton(
        QuoteEmailRenderer,
        branding=config.provided.notification,
    )

    quote_confirmation_notifier = providers.Singleton(
        QuoteConfirmationNotifier,
        renderer=email_renderer,
        mail_sender=mail_sender,
        settings=config.provided.notification,
        sender_address=config.provided.sender_address,
        operator_address=config.provided.operator_address,
    )

    # =========================================================================
    # FACTORIES - Per-request repository, unit of work and service
    # =========================================================================
    quote_request_repository = providers.Factory(
        QuoteRequestRepository,
        db=database,
        mapper=quote_request_mapper,
    )

    unit_of_work = providers.Factory(
        UnitOfWork,
        db=database,
        entity_mapper=entity_mapper,
    )

    quote_request_service = providers.Factory(
        QuoteRequestService,
        repository=quote_request_repository,
        unit_of_work=unit_of_work,
        notifier=quote_confirmation_notifier,
    )
