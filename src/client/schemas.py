"""API schemas for quote request submissions and responses."""
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from src.shared.email_address import normalize_email


class CamelModel(BaseModel):
    """Base schema exchanging camelCase JSON while keeping snake_case attributes."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class QuoteRequestSubmission(CamelModel):
    """
    Request schema for a quote request form submission.

    Every field is a required string that must not be blank; values are
    trimmed. The email must be a valid address and is stored in canonical form.
    """
    first_name: str = Field(..., min_length=1, description="First name cannot be blank")
    last_name: str = Field(..., min_length=1, description="Last name cannot be blank")
    job_title: str = Field(..., min_length=1, description="Job title cannot be blank")
    zip_code: str = Field(..., min_length=1, description="Zip code cannot be blank")
    email: EmailStr = Field(..., description="Email address is required")
    number: str = Field(..., min_length=1, description="Contact number cannot be blank")
    city: str = Field(..., min_length=1, description="City cannot be blank")
    country: str = Field(..., min_length=1, description="Country cannot be blank")
    message: str = Field(..., min_length=1, description="Message cannot be blank")

    @field_validator(
        "first_name", "last_name", "job_title", "zip_code",
        "number", "city", "country", "message",
    )
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Ensure fields are not just whitespace."""
        if not v or not v.strip():
            raise ValueError("Field cannot be blank or only whitespace")
        return v.strip()

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def canonicalize_email(cls, v: str) -> str:
        return normalize_email(v)


class QuoteRequestResponse(CamelModel):
    """Response schema for a stored quote request."""
    id: UUID
    first_name: str
    last_name: str
    job_title: str
    zip_code: str
    email: str
    number: str
    city: str
    country: str
    message: str
    created_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class QuoteRequestAcceptedResponse(BaseModel):
    """Response schema for a submission that was stored and confirmed by email."""
    message: str = Field(..., description="Human readable outcome")
    data: QuoteRequestResponse = Field(..., description="The stored quote request")


class FieldError(BaseModel):
    """A single field-level validation failure."""
    type: str = Field(default="field", description="Error category")
    path: str = Field(..., description="JSON name of the offending field, empty for the whole body")
    msg: str = Field(..., description="What is wrong with the value")
    location: str = Field(default="body")
    value: Any = Field(default=None, description="The rejected value, when one was supplied")


class ValidationErrorResponse(BaseModel):
    """Response schema for a rejected submission."""
    errors: list[FieldError]


class ErrorResponse(CamelModel):
    """Response schema for server-side failures."""
    error: str = Field(..., description="Error message")
    code: str = Field(..., description="Machine readable failure kind")
    quote_request_id: UUID | None = Field(
        default=None,
        description="ID of the stored request when it was persisted before the failure",
    )
