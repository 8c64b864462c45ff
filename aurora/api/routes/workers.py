"""Worker registry endpoints."""

from fastapi import APIRouter, Depends, Query, status

from aurora.api.dependencies import get_actor, get_exec, get_register_worker_use_case
from aurora.application.dto.requests import CreateWorkerRequest
from aurora.application.dto.responses import ErrorResponse, WorkerListResponse
from aurora.application.use_cases import RegisterWorkerUseCase
from aurora.core.entities import Actor, UserRole, Worker, WorkerStatus
from aurora.core.services import OptimisticExecutor

router = APIRouter(prefix="/api/workers", tags=["workers"])


@router.post(
    "",
    response_model=Worker,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def register_worker(
    request: CreateWorkerRequest,
    actor: Actor = Depends(get_actor),
    use_case: RegisterWorkerUseCase = Depends(get_register_worker_use_case),
) -> Worker:
    """Register a worker under a contractor. The WRK code is assigned here."""
    return await use_case.execute(request, actor)


@router.get("", response_model=WorkerListResponse)
async def list_workers(
    contractor_id: str | None = Query(default=None),
    status_filter: WorkerStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(get_actor),
    executor: OptimisticExecutor = Depends(get_exec),
) -> WorkerListResponse:
    """List workers. Contractors only ever see their own."""
    filters: dict = {}
    if contractor_id:
        filters["contractorId"] = contractor_id
    if actor.role == UserRole.CONTRACTOR:
        filters["contractorId"] = actor.user_id
    if status_filter:
        filters["status"] = status_filter
    items = await executor.find(Worker, filters, limit=limit, offset=offset)
    return WorkerListResponse(
        items=items,
        count=len(items),
        limit=limit,
        offset=offset,
        has_more=len(items) == limit,
    )


@router.get(
    "/{worker_id}",
    response_model=Worker,
    responses={404: {"model": ErrorResponse}},
)
async def get_worker(
    worker_id: str,
    executor: OptimisticExecutor = Depends(get_exec),
) -> Worker:
    return await executor.get(Worker, worker_id)
