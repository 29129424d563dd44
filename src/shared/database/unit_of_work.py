from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.database.database import Database
from src.shared.database.mapping import EntityMapper


class UnitOfWork:
    """
    Collects new records and writes them in a single transaction.

    Records are insert-only: there is no update or delete path. The session is
    committed when the block exits cleanly, rolled back otherwise, and closed
    in both cases (including when the commit itself fails).
    """

    def __init__(
        self,
        db: Database,
        entity_mapper: EntityMapper,
    ) -> None:
        self.db = db
        self.session: AsyncSession | None = None
        self.entity_mapper = entity_mapper

    async def __aenter__(self):
        self.session = self.db.session_maker()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                await self.commit()
            else:
                await self.rollback()
        finally:
            if self.session is not None:
                await self.session.close()
                self.session = None

    def add(self, model_instance: Any):
        if self.session is None:
            raise RuntimeError("UnitOfWork is not active. Use 'async with unit_of_work:'")
        entity = self.entity_mapper.map_to_entity(model_instance)
        self.session.add(entity)

    async def commit(self):
        try:
            await self.session.commit()
        except Exception:
            await self.rollback()
            raise

    async def rollback(self):
        await self.session.rollback()
