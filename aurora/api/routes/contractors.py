"""Contractor registry endpoints."""

from fastapi import APIRouter, Depends, Query, status

from aurora.api.dependencies import get_actor, get_exec, get_register_contractor_use_case
from aurora.application.dto.requests import CreateContractorRequest
from aurora.application.dto.responses import ContractorListResponse, ErrorResponse
from aurora.application.use_cases import RegisterContractorUseCase
from aurora.core.entities import Actor, AvailabilityStatus, Contractor, ContractorStatus
from aurora.core.services import OptimisticExecutor

router = APIRouter(prefix="/api/contractors", tags=["contractors"])


@router.post(
    "",
    response_model=Contractor,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def register_contractor(
    request: CreateContractorRequest,
    actor: Actor = Depends(get_actor),
    use_case: RegisterContractorUseCase = Depends(get_register_contractor_use_case),
) -> Contractor:
    """Onboard a contractor. The CONT code is assigned here."""
    return await use_case.execute(request, actor)


@router.get("", response_model=ContractorListResponse)
async def list_contractors(
    status_filter: ContractorStatus | None = Query(default=None, alias="status"),
    availability: AvailabilityStatus | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    executor: OptimisticExecutor = Depends(get_exec),
) -> ContractorListResponse:
    """List contractors, optionally by status or availability."""
    filters: dict = {}
    if status_filter:
        filters["status"] = status_filter
    if availability:
        filters["availabilityStatus"] = availability
    items = await executor.find(Contractor, filters, limit=limit, offset=offset)
    return ContractorListResponse(
        items=items,
        count=len(items),
        limit=limit,
        offset=offset,
        has_more=len(items) == limit,
    )


@router.get(
    "/{contractor_id}",
    response_model=Contractor,
    responses={404: {"model": ErrorResponse}},
)
async def get_contractor(
    contractor_id: str,
    executor: OptimisticExecutor = Depends(get_exec),
) -> Contractor:
    return await executor.get(Contractor, contractor_id)
