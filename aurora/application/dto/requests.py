"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from aurora.core.entities.contractor import BusinessType, SkillLevel
from aurora.core.entities.order import OrderItemStatus, OrderPriority, OrderStatus
from aurora.core.entities.product import Difficulty
from aurora.core.entities.task import TaskStatus

# --- Raw materials ---


class CreateRawMaterialRequest(BaseModel):
    """Request to register a thread type."""

    material_code: str = Field(..., min_length=1, description="Catalog code", examples=["THR-COT-40"])
    name: str = Field(..., min_length=1, description="Material name")
    type: str = Field(default="", description="Thread type", examples=["Cotton", "Polyester"])
    color: str = Field(default="", description="Color name")
    weight: str = Field(default="", description="Thread weight/count", examples=["40s", "60/2"])
    cost_per_kg: float = Field(..., ge=0, description="Purchase cost per kg")
    supplier: str | None = Field(default=None, description="Supplier name")
    min_order_qty: float = Field(default=0.0, ge=0, description="Minimum order quantity in kg")


# --- Clients, contractors, workers and products ---


class AddressRequest(BaseModel):
    street: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    country: str = ""


class CreateClientRequest(BaseModel):
    """Request to register a client."""

    client_code: str = Field(..., min_length=1, description="Client code", examples=["CL-ACME"])
    company_name: str = Field(..., min_length=1)
    contact_person_name: str = ""
    contact_phone: str = ""
    contact_email: str = ""
    billing_address: AddressRequest = Field(default_factory=AddressRequest)
    shipping_address: AddressRequest | None = None
    gst_number: str | None = None
    business_type: str = ""
    payment_terms: str = Field(default="", examples=["NET-30"])
    credit_limit: float | None = Field(default=None, ge=0)
    notes: str | None = None


class CreateContractorRequest(BaseModel):
    """Request to onboard a contractor. The contractor code is generated."""

    company_name: str | None = None
    contact_person_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    email: str | None = None
    address: AddressRequest = Field(default_factory=AddressRequest)
    business_type: BusinessType = BusinessType.INDIVIDUAL
    gst_number: str | None = None
    specialization: list[str] = Field(default_factory=list, examples=[["shirts", "polos"]])
    skill_level: SkillLevel = SkillLevel.INTERMEDIATE
    max_concurrent_orders: int = Field(default=1, ge=1)


class CreateWorkerRequest(BaseModel):
    """Request to register a worker under a contractor. The worker code is generated."""

    contractor_id: str = Field(..., min_length=1, description="Employing contractor ID")
    name: str = Field(..., min_length=1)
    phone: str | None = None
    email: str | None = None
    skills: list[str] = Field(default_factory=list)
    experience_years: int = Field(default=0, ge=0)
    skill_level: SkillLevel = SkillLevel.BEGINNER
    hourly_rate: float | None = Field(default=None, ge=0)
    piece_rate: float | None = Field(default=None, ge=0)


class ThreadRequirementRequest(BaseModel):
    raw_material_id: str
    thread_kg: float = Field(..., ge=0, description="Thread per piece in kg")


class SizeConfigRequest(BaseModel):
    size: str = Field(..., min_length=1, examples=["S", "M", "L", "XL"])
    thread_requirements: list[ThreadRequirementRequest] = Field(default_factory=list)
    labor_hours: float = Field(default=0.0, ge=0)
    wage_per_piece: float = Field(default=0.0, ge=0)
    difficulty: Difficulty = Difficulty.MEDIUM


class CreateProductRequest(BaseModel):
    """Request to add a product to the catalog."""

    product_code: str = Field(..., min_length=1, examples=["PRD-POLO-01"])
    name: str = Field(..., min_length=1)
    category: str = ""
    model: str = ""
    description: str = ""
    colors: list[str] = Field(default_factory=list)
    size_config: list[SizeConfigRequest] = Field(default_factory=list)


# --- Thread inventory ---


class OpenLotRequest(BaseModel):
    """Request to start tracking stock for a raw material."""

    raw_material_id: str = Field(..., description="Raw material ID")
    initial_stock_kg: float = Field(default=0.0, ge=0, description="Opening stock in kg")
    threshold_kg: float = Field(default=0.0, ge=0, description="Low-stock alert threshold")
    reorder_point_kg: float = Field(default=0.0, ge=0, description="Reorder point")
    max_stock_kg: float | None = Field(
        default=None, ge=0, description="Overstock ceiling (none when omitted)"
    )
    cost_per_kg: float | None = Field(
        default=None, ge=0, description="Cost per kg (defaults to the material's cost)"
    )
    location: str | None = Field(default=None, description="Storage location")


class RestockRequest(BaseModel):
    """Request to receive thread into a lot (IN movement)."""

    quantity_kg: float = Field(..., gt=0, description="Quantity received in kg")
    notes: str = Field(default="", description="Supplier delivery or PO reference")


class AdjustStockRequest(BaseModel):
    """Request to correct a lot's physical stock after a count."""

    new_stock_kg: float = Field(..., ge=0, description="Counted stock in kg")
    reason: str = Field(..., min_length=1, description="Why the stock is being corrected")


class AllocationRequest(BaseModel):
    """Request to reserve or release thread for an order."""

    quantity_kg: float = Field(..., gt=0, description="Quantity in kg")
    order_id: str = Field(..., min_length=1, description="Order the quantity is reserved for")


class IssueThreadRequest(BaseModel):
    """Request to consume free thread stock (OUT movement)."""

    quantity_kg: float = Field(..., gt=0, description="Quantity consumed in kg")
    order_id: str | None = Field(default=None, description="Order the thread was used for")
    notes: str = Field(default="", description="Additional notes")


# --- Orders ---


class ThreadAllocationRequest(BaseModel):
    raw_material_id: str
    allocated_kg: float = Field(..., ge=0)
    cost_per_kg: float = Field(default=0.0, ge=0)


class OrderItemRequest(BaseModel):
    """One product line on an order."""

    item_id: str | None = Field(default=None, description="Generated when omitted")
    product_id: str = Field(..., description="Product ID")
    product_code: str = Field(default="", description="Product code")
    product_name: str = Field(default="", description="Product name")
    size: str = Field(default="", examples=["S", "M", "L", "XL"])
    color: str = Field(default="")
    quantity: int = Field(..., gt=0, description="Pieces ordered")
    unit_price: float = Field(..., ge=0, description="Selling price per piece")
    thread_allocations: list[ThreadAllocationRequest] = Field(default_factory=list)
    estimated_labor_hours: float = Field(default=0.0, ge=0)
    total_wage: float = Field(default=0.0, ge=0, description="Labor cost for the line")
    status: OrderItemStatus = OrderItemStatus.PENDING
    assigned_contractor_id: str | None = None


class CreateOrderRequest(BaseModel):
    """Request to create an order."""

    client_id: str = Field(..., min_length=1, description="Client ID")
    required_by_date: datetime | None = Field(default=None, description="Delivery deadline")
    priority: OrderPriority = OrderPriority.MEDIUM
    items: list[OrderItemRequest] = Field(default_factory=list)
    special_instructions: str | None = None
    assigned_to: str | None = None


class UpdateOrderItemsRequest(BaseModel):
    """Request to replace an order's line items."""

    items: list[OrderItemRequest]


class ChangeOrderStatusRequest(BaseModel):
    status: OrderStatus = Field(..., description="Target status")
    notes: str | None = Field(default=None, description="Reason or comment")


class AssignOrderRequest(BaseModel):
    """Request to hand a whole order to a contractor."""

    contractor_id: str = Field(..., min_length=1, description="Contractor ID")
    notes: str | None = None


# --- Tasks ---


class CreateTaskRequest(BaseModel):
    """Request to assign an order item to a contractor."""

    order_id: str = Field(..., description="Order ID")
    order_item_id: str = Field(..., description="Item ID within the order")
    contractor_id: str = Field(..., min_length=1, description="Contractor ID")
    assigned_worker_ids: list[str] = Field(default_factory=list)
    quantity: int | None = Field(
        default=None, gt=0, description="Pieces to produce (defaults to the item quantity)"
    )
    wage_per_piece: float = Field(default=0.0, ge=0, description="Wage per finished piece")
    expected_completion_date: datetime | None = None
    special_instructions: str | None = None
    quality_check_required: bool = False


class ChangeTaskStatusRequest(BaseModel):
    status: TaskStatus = Field(..., description="Target status")
    notes: str | None = Field(
        default=None, description="Comment; becomes the rejection reason when rejecting"
    )


class TaskProgressRequest(BaseModel):
    """Request to log one day of work on a task."""

    pieces_completed: int = Field(default=0, ge=0)
    hours_worked: float = Field(default=0.0, ge=0)
    worker_ids: list[str] = Field(default_factory=list)
    notes: str | None = None
