from typing import List, Type, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from recordhub.database.models import OwnedRecordMixin
from recordhub.repositories.base_repository import BaseRepository

OwnedModel = TypeVar("OwnedModel", bound=OwnedRecordMixin)


class RecordRepository(BaseRepository[OwnedModel]):
    """Repository for any owner-scoped record family.

    The store only exposes owner-filtered reads; a record is never visible
    through another owner's listing.
    """

    def __init__(self, session: AsyncSession, model: Type[OwnedModel]):
        super().__init__(session, model)

    async def list_by_owner(self, user_id: int) -> List[OwnedModel]:
        """All records for ``user_id`` in insertion order."""
        return await self.get_all(filters={"user_id": user_id})
