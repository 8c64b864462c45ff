"""Thread inventory endpoints: lots, stock movements and allocations."""

from fastapi import APIRouter, Depends, Query, status

from aurora.api.dependencies import (
    get_actor,
    get_adjust_use_case,
    get_allocate_use_case,
    get_archive_lot_use_case,
    get_exec,
    get_issue_use_case,
    get_ledger,
    get_open_lot_use_case,
    get_release_use_case,
    get_restock_use_case,
)
from aurora.application.dto.requests import (
    AdjustStockRequest,
    AllocationRequest,
    IssueThreadRequest,
    OpenLotRequest,
    RestockRequest,
)
from aurora.application.dto.responses import (
    ErrorResponse,
    LedgerOperationResponse,
    LotListResponse,
    MovementListResponse,
)
from aurora.application.use_cases import (
    AdjustThreadStockUseCase,
    AllocateThreadUseCase,
    ArchiveThreadLotUseCase,
    IssueThreadUseCase,
    OpenThreadLotUseCase,
    ReleaseThreadUseCase,
    RestockThreadUseCase,
)
from aurora.core.entities import Actor, MovementType, ThreadInventoryLot
from aurora.core.services import OptimisticExecutor, StockLedger

router = APIRouter(prefix="/api/thread-inventory", tags=["thread-inventory"])

LEDGER_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    409: {"model": ErrorResponse},
}


@router.post(
    "",
    response_model=ThreadInventoryLot,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def open_lot(
    request: OpenLotRequest,
    actor: Actor = Depends(get_actor),
    use_case: OpenThreadLotUseCase = Depends(get_open_lot_use_case),
) -> ThreadInventoryLot:
    """Start tracking stock for a raw material."""
    return await use_case.execute(request, actor)


@router.get("", response_model=LotListResponse)
async def list_lots(
    include_archived: bool = Query(default=False),
    low_stock: bool = Query(default=False, description="Only lots flagged low on stock"),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    executor: OptimisticExecutor = Depends(get_exec),
) -> LotListResponse:
    """List thread lots."""
    filters: dict = {}
    if not include_archived:
        filters["archived"] = False
    if low_stock:
        filters["alerts.lowStock"] = True
    lots = await executor.find(ThreadInventoryLot, filters, limit=limit, offset=offset)
    return LotListResponse(
        items=lots,
        count=len(lots),
        limit=limit,
        offset=offset,
        has_more=len(lots) == limit,
    )


@router.get(
    "/{lot_id}",
    response_model=ThreadInventoryLot,
    responses={404: {"model": ErrorResponse}},
)
async def get_lot(
    lot_id: str,
    ledger: StockLedger = Depends(get_ledger),
) -> ThreadInventoryLot:
    """Get a lot with its derived quantities."""
    return await ledger.get_lot(lot_id)


@router.get(
    "/{lot_id}/movements",
    response_model=MovementListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_movements(
    lot_id: str,
    ledger: StockLedger = Depends(get_ledger),
) -> MovementListResponse:
    """Get a lot's movement log."""
    lot = await ledger.get_lot(lot_id)
    return MovementListResponse(
        lot_id=lot_id,
        movements=lot.stock_movements,
        allocated_total_kg=round(
            sum(m.quantity for m in lot.movements_of(MovementType.ALLOCATED)), 3
        ),
        released_total_kg=round(
            sum(m.quantity for m in lot.movements_of(MovementType.RELEASED)), 3
        ),
    )


@router.post("/{lot_id}/restock", response_model=LedgerOperationResponse, responses=LEDGER_ERRORS)
async def restock(
    lot_id: str,
    request: RestockRequest,
    actor: Actor = Depends(get_actor),
    use_case: RestockThreadUseCase = Depends(get_restock_use_case),
) -> LedgerOperationResponse:
    """Receive thread into a lot (IN movement)."""
    update = await use_case.execute(lot_id, request, actor)
    return use_case.to_response(update)


@router.post("/{lot_id}/adjust", response_model=LedgerOperationResponse, responses=LEDGER_ERRORS)
async def adjust(
    lot_id: str,
    request: AdjustStockRequest,
    actor: Actor = Depends(get_actor),
    use_case: AdjustThreadStockUseCase = Depends(get_adjust_use_case),
) -> LedgerOperationResponse:
    """Correct physical stock after a count (ADJUSTMENT movement)."""
    update = await use_case.execute(lot_id, request, actor)
    return use_case.to_response(update)


@router.post("/{lot_id}/allocate", response_model=LedgerOperationResponse, responses=LEDGER_ERRORS)
async def allocate(
    lot_id: str,
    request: AllocationRequest,
    actor: Actor = Depends(get_actor),
    use_case: AllocateThreadUseCase = Depends(get_allocate_use_case),
) -> LedgerOperationResponse:
    """Reserve thread for an order. Fails with 409 when not enough is available."""
    update = await use_case.execute(lot_id, request, actor)
    return use_case.to_response(update)


@router.post("/{lot_id}/release", response_model=LedgerOperationResponse, responses=LEDGER_ERRORS)
async def release(
    lot_id: str,
    request: AllocationRequest,
    actor: Actor = Depends(get_actor),
    use_case: ReleaseThreadUseCase = Depends(get_release_use_case),
) -> LedgerOperationResponse:
    """Return reserved thread to the lot."""
    update = await use_case.execute(lot_id, request, actor)
    return use_case.to_response(update)


@router.post("/{lot_id}/issue", response_model=LedgerOperationResponse, responses=LEDGER_ERRORS)
async def issue(
    lot_id: str,
    request: IssueThreadRequest,
    actor: Actor = Depends(get_actor),
    use_case: IssueThreadUseCase = Depends(get_issue_use_case),
) -> LedgerOperationResponse:
    """Consume unallocated thread (OUT movement)."""
    update = await use_case.execute(lot_id, request, actor)
    return use_case.to_response(update)


@router.delete(
    "/{lot_id}",
    response_model=ThreadInventoryLot,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def archive_lot(
    lot_id: str,
    actor: Actor = Depends(get_actor),
    use_case: ArchiveThreadLotUseCase = Depends(get_archive_lot_use_case),
) -> ThreadInventoryLot:
    """Archive a lot. Nothing may be allocated on it."""
    return await use_case.execute(lot_id, actor)
