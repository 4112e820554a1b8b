"""Generic list/create/update behaviour shared by every owned record family."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from recordhub.core.exceptions import NotFoundError, ValidationError
from recordhub.database.models import OwnedRecordMixin
from recordhub.repositories.record_repository import RecordRepository
from recordhub.utils.logging import get_logger

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class RecordFamily:
    """Everything the generic service and router need to know about a family.

    Attributes:
        name: Human label used in messages ("health record", "task", ...)
        model: SQLAlchemy model
        create_schema: Validates POST bodies and applies creation defaults
        read_schema: Serializes stored records
        update_schema: Coerces PATCH bodies; None if the family is not patchable
        merge_owner: Overwrite ``user_id`` with the resolved owner on create.
            When False the client must send ``user_id`` itself.
        prepare: Optional hook that derives extra fields from validated data
    """

    name: str
    model: Type[OwnedRecordMixin]
    create_schema: Type[BaseModel]
    read_schema: Type[BaseModel]
    update_schema: Optional[Type[BaseModel]] = None
    merge_owner: bool = True
    prepare: Optional[Callable[[Dict[str, Any]], Dict[str, Any]]] = None

    @property
    def invalid_message(self) -> str:
        return f"Invalid {self.name} data"

    @property
    def not_found_message(self) -> str:
        return f"{self.name[:1].upper()}{self.name[1:]} not found"


class OwnedRecordService:
    """List, create and partially update records of one family."""

    def __init__(self, family: RecordFamily, repository: RecordRepository):
        self.family = family
        self.repository = repository

    async def list(self, owner_id: int) -> List[OwnedRecordMixin]:
        return await self.repository.list_by_owner(owner_id)

    async def create(self, owner_id: int, payload: Dict[str, Any]) -> OwnedRecordMixin:
        """Validate ``payload``, apply defaults and store the record.

        Raises:
            ValidationError: With a generic per-family message and no field detail
        """
        if not isinstance(payload, dict):
            raise ValidationError(self.family.invalid_message)

        data = dict(payload)
        if self.family.merge_owner:
            data["user_id"] = owner_id

        try:
            validated = self.family.create_schema.model_validate(data)
        except PydanticValidationError as e:
            LOGGER.info(
                f"Rejected {self.family.name} payload",
                extra={"error_count": e.error_count()}
            )
            raise ValidationError(self.family.invalid_message) from e

        values = validated.model_dump()
        if self.family.prepare is not None:
            values = self.family.prepare(values)

        record = await self.repository.create(**values)
        LOGGER.info(f"Created {self.family.name}", extra={"record_id": record.id})
        return record

    async def update(self, record_id: int, changes: Dict[str, Any]) -> OwnedRecordMixin:
        """Merge the supplied fields into an existing record.

        Only fields present in ``changes`` are touched; required-field rules
        from creation are not applied again.

        Raises:
            NotFoundError: If no record has ``record_id``
            ValidationError: If a supplied value has the wrong type or clears a
                required field
        """
        if self.family.update_schema is None:
            raise ValidationError(f"{self.family.name} records cannot be updated")
        if not isinstance(changes, dict):
            raise ValidationError(self.family.invalid_message)

        existing = await self.repository.get_by_id(record_id)
        if existing is None:
            raise NotFoundError(self.family.not_found_message)

        try:
            coerced = self.family.update_schema.model_validate(changes)
        except PydanticValidationError as e:
            raise ValidationError(self.family.invalid_message) from e

        values = coerced.model_dump(exclude_unset=True)
        columns = self.family.model.__table__.columns
        cleared = [key for key, value in values.items() if value is None and not columns[key].nullable]
        if cleared:
            LOGGER.info(
                f"Rejected {self.family.name} update clearing required fields",
                extra={"fields": cleared}
            )
            raise ValidationError(self.family.invalid_message)

        updated = await self.repository.update(record_id, **values)
        if updated is None:
            raise NotFoundError(self.family.not_found_message)
        return updated
