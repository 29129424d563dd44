"""Domain models used in business logic."""
import uuid
from datetime import datetime, UTC
from uuid import UUID

from pydantic import BaseModel, Field


class QuoteRequest(BaseModel):
    """
    Domain model for a customer's quote request.

    Built from an already-validated submission and persisted exactly once.
    Instances are frozen: nothing updates a quote request after it is created.
    """
    id: UUID = Field(default_factory=uuid.uuid4, description="Unique quote request ID")
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    job_title: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, description="Canonical submitter email address")
    number: str = Field(..., min_length=1, description="Contact phone number, free format")
    city: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC), description="Creation timestamp")

    model_config = {"from_attributes": True, "frozen": True}
