from uuid import UUID
from typing import Optional
from sqlalchemy import select, func

from src.app.core.domain.models import QuoteRequest
from src.shared.database.base_repo import BaseRepository
from src.shared.database.database import Database

from src.app.infrastructure.entities.quote_request_entity import QuoteRequestEntity
from src.app.infrastructure.mappers.quote_request_mapper import QuoteRequestMapper


class QuoteRequestRepository(BaseRepository[QuoteRequestEntity, QuoteRequest]):
    """Read-side repository for QuoteRequest records. Writes go through UnitOfWork."""

    def __init__(self, db: Database, mapper: QuoteRequestMapper):
        super().__init__(db, mapper)

    async def get_by_id(self, quote_request_id: UUID) -> Optional[QuoteRequest]:
        """Get a quote request by ID."""
        return await self.find_one(
            select(QuoteRequestEntity).where(QuoteRequestEntity.id == quote_request_id)
        )

    async def find_by_email(self, email: str) -> list[QuoteRequest]:
        """Get every quote request submitted from a canonical email address, oldest first."""
        return await self.find_all(
            select(QuoteRequestEntity)
            .where(QuoteRequestEntity.email == email)
            .order_by(QuoteRequestEntity.created_at)
        )

    async def count(self) -> int:
        """Count all stored quote requests."""
        return await self.scalar(select(func.count()).select_from(QuoteRequestEntity))
