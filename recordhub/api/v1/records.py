"""Route builder for owned record families.

Every family gets ``GET <path>`` and ``POST <path>``; patchable families also
get ``PATCH <path>/{record_id}``. Bodies are accepted as raw JSON and validated
by the service so that invalid payloads produce the family's generic 400
message instead of field-level detail.
"""

from typing import Annotated, Any, Dict, List

from fastapi import APIRouter, Body, Depends

from recordhub.dependencies import get_owner_id, record_service_dependency
from recordhub.services.records.record_service import OwnedRecordService, RecordFamily


def add_record_routes(router: APIRouter, path: str, family: RecordFamily) -> None:
    """Register list/create (and update, if supported) routes for ``family``.

    Args:
        router: Domain router to extend
        path: Path relative to the router prefix, e.g. ``"/tasks"``
        family: Record family definition
    """
    read_schema = family.read_schema
    get_service = record_service_dependency(family)
    slug = family.model.__tablename__

    async def list_records(
        service: Annotated[OwnedRecordService, Depends(get_service)],
        owner_id: Annotated[int, Depends(get_owner_id)],
    ) -> List[Any]:
        records = await service.list(owner_id)
        return [read_schema.model_validate(record) for record in records]

    async def create_record(
        service: Annotated[OwnedRecordService, Depends(get_service)],
        owner_id: Annotated[int, Depends(get_owner_id)],
        payload: Annotated[Any, Body()] = None,
    ) -> Any:
        record = await service.create(owner_id, payload)
        return read_schema.model_validate(record)

    router.add_api_route(
        path,
        list_records,
        methods=["GET"],
        response_model=List[read_schema],
        summary=f"List {family.name} records",
        operation_id=f"list_{slug}",
    )
    router.add_api_route(
        path,
        create_record,
        methods=["POST"],
        response_model=read_schema,
        summary=f"Create a {family.name} record",
        operation_id=f"create_{slug}",
    )

    if family.update_schema is None:
        return

    async def update_record(
        record_id: int,
        service: Annotated[OwnedRecordService, Depends(get_service)],
        changes: Annotated[Dict[str, Any], Body()],
    ) -> Any:
        record = await service.update(record_id, changes)
        return read_schema.model_validate(record)

    router.add_api_route(
        f"{path}/{{record_id}}",
        update_record,
        methods=["PATCH"],
        response_model=read_schema,
        summary=f"Update a {family.name} record",
        operation_id=f"update_{slug}",
    )
