"""Resource Routes — list/create/update/delete for one resource kind.

Invariants:
    - build_resource_router(kind) mounts four routes under /api/<slug>
    - POST is additionally charged to the creation rate limiter
    - Bodies are validated by the kind's generated schema before the service runs
    - Path ids are plain strings; matching is by string comparison
"""

from fastapi import APIRouter, Depends

from portfolio.api.dependencies import enforce_create_rate_limit, record_service_for
from portfolio.core.resource_kinds import ResourceKind
from portfolio.schemas.records import create_schema, update_schema
from portfolio.services.record_service import RecordService


def build_resource_router(kind: ResourceKind) -> APIRouter:
    """Router with the CRUD endpoints for `kind`."""
    router = APIRouter(prefix=f"/api/{kind.slug}", tags=[kind.slug])
    get_service = record_service_for(kind.slug)
    CreatePayload = create_schema(kind)
    UpdatePayload = update_schema(kind)

    @router.get("")
    async def list_records(service: RecordService = Depends(get_service)):
        """Every stored record, most recent first."""
        return await service.list_all()

    @router.post("", dependencies=[Depends(enforce_create_rate_limit)])
    async def create_record(
        body: CreatePayload, service: RecordService = Depends(get_service),
    ):
        record = await service.create(body.to_fields())
        return {"success": True, "data": record}

    @router.put("/{record_id}")
    async def update_record(
        record_id: str,
        body: UpdatePayload,
        service: RecordService = Depends(get_service),
    ):
        record = await service.update(record_id, body.to_fields())
        return {"success": True, "data": record}

    @router.delete("/{record_id}")
    async def delete_record(
        record_id: str, service: RecordService = Depends(get_service),
    ):
        await service.delete(record_id)
        return {"success": True, "message": f"{kind.label} deleted successfully"}

    return router
