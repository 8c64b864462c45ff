"""Client registry endpoints."""

from fastapi import APIRouter, Depends, Query, status

from aurora.api.dependencies import get_actor, get_exec, get_register_client_use_case
from aurora.application.dto.requests import CreateClientRequest
from aurora.application.dto.responses import ClientListResponse, ErrorResponse
from aurora.application.use_cases import RegisterClientUseCase
from aurora.core.entities import Actor, Client, ClientStatus
from aurora.core.services import OptimisticExecutor

router = APIRouter(prefix="/api/clients", tags=["clients"])


@router.post(
    "",
    response_model=Client,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def register_client(
    request: CreateClientRequest,
    actor: Actor = Depends(get_actor),
    use_case: RegisterClientUseCase = Depends(get_register_client_use_case),
) -> Client:
    return await use_case.execute(request, actor)


@router.get("", response_model=ClientListResponse)
async def list_clients(
    status_filter: ClientStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    executor: OptimisticExecutor = Depends(get_exec),
) -> ClientListResponse:
    filters = {"status": status_filter} if status_filter else None
    items = await executor.find(Client, filters, limit=limit, offset=offset)
    return ClientListResponse(
        items=items,
        count=len(items),
        limit=limit,
        offset=offset,
        has_more=len(items) == limit,
    )


@router.get(
    "/{client_id}",
    response_model=Client,
    responses={404: {"model": ErrorResponse}},
)
async def get_client(
    client_id: str,
    executor: OptimisticExecutor = Depends(get_exec),
) -> Client:
    return await executor.get(Client, client_id)
