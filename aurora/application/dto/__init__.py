"""Data Transfer Objects for API layer.

Request DTOs: Validate and parse incoming API requests.
Response DTOs: Structure and serialize API responses.

These are the ONLY contracts between API handlers and use cases.
"""

from aurora.application.dto.requests import (
    AdjustStockRequest,
    AllocationRequest,
    AssignOrderRequest,
    ChangeOrderStatusRequest,
    ChangeTaskStatusRequest,
    CreateClientRequest,
    CreateContractorRequest,
    CreateOrderRequest,
    CreateProductRequest,
    CreateRawMaterialRequest,
    CreateTaskRequest,
    CreateWorkerRequest,
    IssueThreadRequest,
    OpenLotRequest,
    OrderItemRequest,
    RestockRequest,
    TaskProgressRequest,
    ThreadAllocationRequest,
    UpdateOrderItemsRequest,
)
from aurora.application.dto.responses import (
    ClientListResponse,
    ComponentHealthResponse,
    ContractorListResponse,
    DashboardStatsResponse,
    ErrorResponse,
    HealthResponse,
    LedgerOperationResponse,
    LotListResponse,
    LowStockItem,
    MarkAllReadResponse,
    MovementListResponse,
    NotificationListResponse,
    OrderListResponse,
    PaginatedResponse,
    ProductListResponse,
    RawMaterialListResponse,
    TaskListResponse,
    WorkerListResponse,
)

__all__ = [
    # Requests
    "AdjustStockRequest",
    "AllocationRequest",
    "AssignOrderRequest",
    "ChangeOrderStatusRequest",
    "ChangeTaskStatusRequest",
    "CreateClientRequest",
    "CreateContractorRequest",
    "CreateOrderRequest",
    "CreateProductRequest",
    "CreateRawMaterialRequest",
    "CreateTaskRequest",
    "CreateWorkerRequest",
    "IssueThreadRequest",
    "OpenLotRequest",
    "OrderItemRequest",
    "RestockRequest",
    "TaskProgressRequest",
    "ThreadAllocationRequest",
    "UpdateOrderItemsRequest",
    # Responses
    "ClientListResponse",
    "ComponentHealthResponse",
    "ContractorListResponse",
    "DashboardStatsResponse",
    "ErrorResponse",
    "HealthResponse",
    "LedgerOperationResponse",
    "LotListResponse",
    "LowStockItem",
    "MarkAllReadResponse",
    "MovementListResponse",
    "NotificationListResponse",
    "OrderListResponse",
    "PaginatedResponse",
    "ProductListResponse",
    "RawMaterialListResponse",
    "TaskListResponse",
    "WorkerListResponse",
]
