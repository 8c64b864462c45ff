"""Product catalog endpoints."""

from fastapi import APIRouter, Depends, Query, status

from aurora.api.dependencies import get_actor, get_exec, get_register_product_use_case
from aurora.application.dto.requests import CreateProductRequest
from aurora.application.dto.responses import ErrorResponse, ProductListResponse
from aurora.application.use_cases import RegisterProductUseCase
from aurora.core.entities import Actor, Product, ProductStatus
from aurora.core.services import OptimisticExecutor

router = APIRouter(prefix="/api/products", tags=["products"])


@router.post(
    "",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def register_product(
    request: CreateProductRequest,
    actor: Actor = Depends(get_actor),
    use_case: RegisterProductUseCase = Depends(get_register_product_use_case),
) -> Product:
    """Add a product with its per-size thread and labor requirements."""
    return await use_case.execute(request, actor)


@router.get("", response_model=ProductListResponse)
async def list_products(
    status_filter: ProductStatus | None = Query(default=None, alias="status"),
    category: str | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    executor: OptimisticExecutor = Depends(get_exec),
) -> ProductListResponse:
    filters: dict = {}
    if status_filter:
        filters["status"] = status_filter
    if category:
        filters["category"] = category
    items = await executor.find(Product, filters, limit=limit, offset=offset)
    return ProductListResponse(
        items=items,
        count=len(items),
        limit=limit,
        offset=offset,
        has_more=len(items) == limit,
    )


@router.get(
    "/{product_id}",
    response_model=Product,
    responses={404: {"model": ErrorResponse}},
)
async def get_product(
    product_id: str,
    executor: OptimisticExecutor = Depends(get_exec),
) -> Product:
    return await executor.get(Product, product_id)
