from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from recordhub.core.exceptions import DatabaseError
from recordhub.utils.logging import get_logger

# Define a generic type for SQLAlchemy models
ModelType = TypeVar("ModelType")

LOGGER = get_logger(__name__)


class BaseRepository(Generic[ModelType]):
    """Base repository implementing common CRUD operations.

    Store failures are logged and re-raised as ``DatabaseError`` so handlers
    can report them as upstream-dependency errors.
    """

    def __init__(self, session: AsyncSession, model: Type[ModelType]):
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session
            model: The SQLAlchemy model class this repository manages
        """
        self.session = session
        self.model = model
        self.logger = LOGGER

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """Get a record by its ID.

        Args:
            id: The record identifier

        Returns:
            The record if found, None otherwise
        """
        try:
            query = select(self.model).where(self.model.id == id)
            result = await self.session.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error retrieving {self.model.__name__} by ID {id}: {str(e)}",
                exc_info=True
            )
            raise DatabaseError(f"Failed to fetch {self.model.__name__}", e) from e

    async def get_all(
        self,
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[Sequence[Any]] = None,
    ) -> List[ModelType]:
        """Get all records matching equality filters.

        Args:
            filters: Dictionary of field_name: value to filter by
            order_by: Column expressions to sort by (defaults to id ascending)

        Returns:
            List of records
        """
        try:
            query = select(self.model)

            if filters:
                for field, value in filters.items():
                    if hasattr(self.model, field):
                        query = query.where(getattr(self.model, field) == value)

            query = query.order_by(*(order_by or [self.model.id.asc()]))
            result = await self.session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            self.logger.error(
                f"Error retrieving all {self.model.__name__}: {str(e)}",
                exc_info=True
            )
            raise DatabaseError(f"Failed to fetch {self.model.__name__} records", e) from e

    async def create(self, **kwargs) -> ModelType:
        """Create a new record.

        Args:
            **kwargs: Fields and values for the new record

        Returns:
            The created record
        """
        try:
            instance = self.model(**kwargs)
            self.session.add(instance)
            await self.session.flush()
            await self.session.commit()
            return instance
        except SQLAlchemyError as e:
            await self.session.rollback()
            self.logger.error(
                f"Error creating {self.model.__name__}: {str(e)}",
                exc_info=True
            )
            raise DatabaseError(f"Failed to save {self.model.__name__}", e) from e

    async def create_many(self, rows: List[Dict[str, Any]]) -> List[ModelType]:
        """Insert several records in one transaction.

        Args:
            rows: Field dictionaries, one per record

        Returns:
            The created records in input order
        """
        try:
            instances = [self.model(**row) for row in rows]
            self.session.add_all(instances)
            await self.session.flush()
            await self.session.commit()
            return instances
        except SQLAlchemyError as e:
            await self.session.rollback()
            self.logger.error(
                f"Error bulk-creating {self.model.__name__}: {str(e)}",
                exc_info=True
            )
            raise DatabaseError(f"Failed to save {self.model.__name__} records", e) from e

    async def update(self, id: int, **kwargs) -> Optional[ModelType]:
        """Update an existing record.

        Only attributes that exist on the model are applied; anything else in
        ``kwargs`` is ignored.

        Args:
            id: The identifier of the record to update
            **kwargs: Fields and values to update

        Returns:
            The updated record if found, None otherwise
        """
        instance = await self.get_by_id(id)
        if not instance:
            return None

        try:
            for key, value in kwargs.items():
                if key != "id" and hasattr(instance, key):
                    setattr(instance, key, value)

            await self.session.flush()
            await self.session.commit()
            return instance
        except SQLAlchemyError as e:
            await self.session.rollback()
            self.logger.error(
                f"Error updating {self.model.__name__} {id}: {str(e)}",
                exc_info=True
            )
            raise DatabaseError(f"Failed to update {self.model.__name__}", e) from e

    async def delete_where(self, commit: bool = True, **filters) -> int:
        """Delete every record matching equality filters.

        Args:
            commit: Commit immediately; pass False to leave the deletion in the
                current transaction for a later write to commit or roll back
            **filters: field_name=value pairs

        Returns:
            Number of deleted records
        """
        try:
            query = delete(self.model)
            for field, value in filters.items():
                query = query.where(getattr(self.model, field) == value)
            result = await self.session.execute(query)
            if commit:
                await self.session.commit()
            return result.rowcount or 0
        except SQLAlchemyError as e:
            await self.session.rollback()
            self.logger.error(
                f"Error deleting {self.model.__name__} records: {str(e)}",
                exc_info=True
            )
            raise DatabaseError(f"Failed to delete {self.model.__name__} records", e) from e
