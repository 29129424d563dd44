"""Database entities for the infrastructure layer."""
from src.app.infrastructure.entities.quote_request_entity import QuoteRequestEntity

__all__ = [
    "QuoteRequestEntity",
]
