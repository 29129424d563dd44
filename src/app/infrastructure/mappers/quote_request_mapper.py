from src.shared.database.mapping import BaseEntityMapper
from src.app.core.domain.models import QuoteRequest
from src.app.infrastructure.entities.quote_request_entity import QuoteRequestEntity


class QuoteRequestMapper(BaseEntityMapper[QuoteRequest, QuoteRequestEntity]):
    """Mapper for converting between QuoteRequest domain model and QuoteRequestEntity."""

    @staticmethod
    def to_entity(model_instance: QuoteRequest) -> QuoteRequestEntity:
        """Convert a QuoteRequest (domain model) to QuoteRequestEntity (database entity)."""
        return QuoteRequestEntity(
            id=model_instance.id,
            first_name=model_instance.first_name,
            last_name=model_instance.last_name,
            job_title=model_instance.job_title,
            zip_code=model_instance.zip_code,
            email=model_instance.email,
            number=model_instance.number,
            city=model_instance.city,
            country=model_instance.country,
            message=model_instance.message,
            created_at=model_instance.created_at,
        )

    @staticmethod
    def to_model(entity: QuoteRequestEntity) -> QuoteRequest:
        """Convert a QuoteRequestEntity (database entity) to QuoteRequest (domain model)."""
        return QuoteRequest(
            id=entity.id,
            first_name=entity.first_name,
            last_name=entity.last_name,
            job_title=entity.job_title,
            zip_code=entity.zip_code,
            email=entity.email,
            number=entity.number,
            city=entity.city,
            country=entity.country,
            message=entity.message,
            created_at=entity.created_at,
        )
