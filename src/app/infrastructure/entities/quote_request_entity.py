from datetime import datetime
from uuid import UUID, uuid4
from sqlalchemy import String, Text, DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from src.shared.database.database import Base


class QuoteRequestEntity(Base):
    """SQLAlchemy model for the quote_requests table."""
    __tablename__ = "quote_requests"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    first_name: Mapped[str] = mapped_column(Text)
    last_name: Mapped[str] = mapped_column(Text)
    job_title: Mapped[str] = mapped_column(Text)
    zip_code: Mapped[str] = mapped_column(Text)
    # Not unique: repeated submissions from one address are separate requests
    email: Mapped[str] = mapped_column(String(320), index=True)
    number: Mapped[str] = mapped_column(Text)
    city: Mapped[str] = mapped_column(Text)
    country: Mapped[str] = mapped_column(Text)
    message: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
