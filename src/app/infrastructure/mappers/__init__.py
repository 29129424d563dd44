"""Infrastructure mappers for converting between domain models and database entities."""
from src.app.infrastructure.mappers.quote_request_mapper import QuoteRequestMapper

__all__ = [
    "QuoteRequestMapper",
]
