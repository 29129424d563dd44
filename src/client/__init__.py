"""Client package for the Quote Request API."""
from src.client.quote_client import QuoteDeskClient
from src.client.schemas import (
    ErrorResponse,
    FieldError,
    QuoteRequestAcceptedResponse,
    QuoteRequestResponse,
    QuoteRequestSubmission,
    ValidationErrorResponse,
)

__all__ = [
    "QuoteDeskClient",
    "ErrorResponse",
    "FieldError",
    "QuoteRequestAcceptedResponse",
    "QuoteRequestResponse",
    "QuoteRequestSubmission",
    "ValidationErrorResponse",
]
