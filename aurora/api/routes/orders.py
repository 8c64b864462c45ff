"""Order endpoints."""

from fastapi import APIRouter, Depends, Query, status

from aurora.api.dependencies import (
    get_actor,
    get_assign_order_use_case,
    get_change_order_status_use_case,
    get_create_order_use_case,
    get_exec,
    get_update_order_items_use_case,
)
from aurora.application.dto.requests import (
    AssignOrderRequest,
    ChangeOrderStatusRequest,
    CreateOrderRequest,
    UpdateOrderItemsRequest,
)
from aurora.application.dto.responses import ErrorResponse, OrderListResponse
from aurora.application.use_cases import (
    AssignOrderToContractorUseCase,
    ChangeOrderStatusUseCase,
    CreateOrderUseCase,
    UpdateOrderItemsUseCase,
)
from aurora.core.entities import Actor, Order, OrderStatus, UserRole
from aurora.core.services import OptimisticExecutor

router = APIRouter(prefix="/api/orders", tags=["orders"])


def visibility_filter(actor: Actor) -> dict[str, str]:
    """Contractors see orders assigned to them, employees the orders they created."""
    if actor.role == UserRole.CONTRACTOR:
        return {"assignedContractorId": actor.user_id}
    if actor.role == UserRole.INTERNAL_EMPLOYEE:
        return {"createdBy": actor.user_id}
    return {}


@router.post(
    "",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_order(
    request: CreateOrderRequest,
    actor: Actor = Depends(get_actor),
    use_case: CreateOrderUseCase = Depends(get_create_order_use_case),
) -> Order:
    """Create a draft order. Totals are computed from the items."""
    return await use_case.execute(request, actor)


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status_filter: OrderStatus | None = Query(default=None, alias="status"),
    client_id: str | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    actor: Actor = Depends(get_actor),
    executor: OptimisticExecutor = Depends(get_exec),
) -> OrderListResponse:
    """List the orders visible to the caller, optionally by status or client."""
    filters: dict = visibility_filter(actor)
    if status_filter:
        filters["status"] = status_filter
    if client_id:
        filters["clientId"] = client_id
    orders = await executor.find(Order, filters, limit=limit, offset=offset)
    return OrderListResponse(
        items=orders,
        count=len(orders),
        limit=limit,
        offset=offset,
        has_more=len(orders) == limit,
    )


@router.get(
    "/{order_id}",
    response_model=Order,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: str,
    executor: OptimisticExecutor = Depends(get_exec),
) -> Order:
    return await executor.get(Order, order_id)


@router.put(
    "/{order_id}/items",
    response_model=Order,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def update_order_items(
    order_id: str,
    request: UpdateOrderItemsRequest,
    actor: Actor = Depends(get_actor),
    use_case: UpdateOrderItemsUseCase = Depends(get_update_order_items_use_case),
) -> Order:
    """Replace the order's items and recompute its totals."""
    return await use_case.execute(order_id, request.items, actor)


@router.post(
    "/{order_id}/status",
    response_model=Order,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
async def change_order_status(
    order_id: str,
    request: ChangeOrderStatusRequest,
    actor: Actor = Depends(get_actor),
    use_case: ChangeOrderStatusUseCase = Depends(get_change_order_status_use_case),
) -> Order:
    """Move the order to a new status. Illegal moves return 409."""
    return await use_case.execute(order_id, request, actor)


@router.post(
    "/{order_id}/assign",
    response_model=Order,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def assign_order(
    order_id: str,
    request: AssignOrderRequest,
    actor: Actor = Depends(get_actor),
    use_case: AssignOrderToContractorUseCase = Depends(get_assign_order_use_case),
) -> Order:
    """Assign the order to a contractor, starting production if it was confirmed."""
    return await use_case.execute(order_id, request, actor)
