from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from dependency_injector.wiring import Provide, inject

from src.app.containers import Container
from src.app.core.services.quote_request_service import QuoteRequestService
from src.client.schemas import (
    ErrorResponse,
    QuoteRequestAcceptedResponse,
    QuoteRequestSubmission,
    ValidationErrorResponse,
)
from src.app.api.mappers import to_quote_request_response
from src.shared.exceptions import NotificationError, PersistenceError
from src.app.logging import get_logger

SUCCESS_MESSAGE = "Request received and email sent."

router = APIRouter(prefix="/quote-request", tags=["quote requests"])
logger = get_logger(__name__)


def _error_response(error: ErrorResponse) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


@router.post(
    "",
    response_model=QuoteRequestAcceptedResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
@inject
async def submit_quote_request(
    request: QuoteRequestSubmission,
    service: QuoteRequestService = Depends(Provide[Container.quote_request_service]),
) -> QuoteRequestAcceptedResponse | JSONResponse:
    """
    Accept a quote request form submission.

    This endpoint:
    1. Validates the nine form fields (400 on failure, nothing stored)
    2. Stores the request as a new record
    3. Emails a confirmation to the submitter, copying the operator

    Args:
        request: Validated quote request fields
        service: Quote request service (injected)

    Returns:
        QuoteRequestAcceptedResponse with the stored record

    Raises:
        Nothing: failures are returned as 500 ErrorResponse bodies. A
        NOTIFICATION_FAILED error still means the record was stored.
    """
    try:
        quote_request = await service.submit_quote_request(request)
    except PersistenceError as e:
        logger.error(f"Failed to store quote request: {e}")
        return _error_response(ErrorResponse(error="Internal server error", code="PERSISTENCE_FAILED"))
    except NotificationError as e:
        logger.error(f"Quote request {e.entity_id} stored, confirmation not sent: {e.reason}")
        return _error_response(
            ErrorResponse(error=str(e), code="NOTIFICATION_FAILED", quote_request_id=e.entity_id)
        )
    except Exception as e:
        logger.exception(f"Unexpected error handling quote request: {e}")
        return _error_response(ErrorResponse(error="Internal server error", code="INTERNAL_ERROR"))

    return QuoteRequestAcceptedResponse(
        message=SUCCESS_MESSAGE,
        data=to_quote_request_response(quote_request),
    )
