"""Mappers for converting between domain models and API schemas."""
from src.app.core.domain.models import QuoteRequest
from src.client.schemas import QuoteRequestResponse


def to_quote_request_response(quote_request: QuoteRequest) -> QuoteRequestResponse:
    """
    Convert a QuoteRequest domain model to QuoteRequestResponse API schema.

    Args:
        quote_request: Domain model

    Returns:
        API response schema
    """
    return QuoteRequestResponse(
        id=quote_request.id,
        first_name=quote_request.first_name,
        last_name=quote_request.last_name,
        job_title=quote_request.job_title,
        zip_code=quote_request.zip_code,
        email=quote_request.email,
        number=quote_request.number,
        city=quote_request.city,
        country=quote_request.country,
        message=quote_request.message,
        created_at=quote_request.created_at,
    )
