"""Raw material catalog endpoints."""

from fastapi import APIRouter, Depends, Query, status

from aurora.api.dependencies import get_actor, get_exec, get_register_raw_material_use_case
from aurora.application.dto.requests import CreateRawMaterialRequest
from aurora.application.dto.responses import ErrorResponse, RawMaterialListResponse
from aurora.application.use_cases import RegisterRawMaterialUseCase
from aurora.core.entities import Actor, MaterialStatus, RawMaterial
from aurora.core.services import OptimisticExecutor

router = APIRouter(prefix="/api/raw-materials", tags=["raw-materials"])


@router.post(
    "",
    response_model=RawMaterial,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def register_raw_material(
    request: CreateRawMaterialRequest,
    actor: Actor = Depends(get_actor),
    use_case: RegisterRawMaterialUseCase = Depends(get_register_raw_material_use_case),
) -> RawMaterial:
    """Register a thread type in the catalog."""
    return await use_case.execute(request, actor)


@router.get("", response_model=RawMaterialListResponse)
async def list_raw_materials(
    status_filter: MaterialStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    executor: OptimisticExecutor = Depends(get_exec),
) -> RawMaterialListResponse:
    """List raw materials, optionally by status."""
    filters = {"status": status_filter} if status_filter else None
    items = await executor.find(RawMaterial, filters, limit=limit, offset=offset)
    return RawMaterialListResponse(
        items=items,
        count=len(items),
        limit=limit,
        offset=offset,
        has_more=len(items) == limit,
    )


@router.get(
    "/{material_id}",
    response_model=RawMaterial,
    responses={404: {"model": ErrorResponse}},
)
async def get_raw_material(
    material_id: str,
    executor: OptimisticExecutor = Depends(get_exec),
) -> RawMaterial:
    """Get a raw material by ID."""
    return await executor.get(RawMaterial, material_id)
