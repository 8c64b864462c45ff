"""Production task entities."""

from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from aurora.core.entities.document import Record, utcnow
from aurora.core.entities.status import StatusHistoryEntry


class TaskStatus(str, Enum):
    PENDING_APPROVAL = "PENDING_APPROVAL"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class ApprovalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class DailyProgress(BaseModel):
    """Work reported for one day on a task."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    date: datetime = Field(default_factory=utcnow)
    pieces_completed: int = 0
    hours_worked: float = 0.0
    worker_ids: list[str] = Field(default_factory=list)
    notes: str | None = None


class Task(Record):
    """Production assignment for one order item."""

    COLLECTION: ClassVar[str] = "tasks"
    ENTITY_NAME: ClassVar[str] = "task"

    task_number: str = ""
    order_id: str
    order_item_id: str
    contractor_id: str
    assigned_worker_ids: list[str] = Field(default_factory=list)
    product_id: str
    product_name: str = ""
    quantity: int = 0
    size: str = ""
    color: str = ""
    special_instructions: str | None = None

    assigned_date: datetime = Field(default_factory=utcnow)
    expected_completion_date: datetime | None = None
    started_date: datetime | None = None
    completed_date: datetime | None = None

    status: TaskStatus = TaskStatus.PENDING_APPROVAL
    approval_status: ApprovalStatus = ApprovalStatus.PENDING
    approved_by: str | None = None
    approved_at: datetime | None = None
    rejection_reason: str | None = None

    progress_percentage: int = 0
    pieces_completed: int = 0
    hours_logged: float = 0.0
    daily_progress: list[DailyProgress] = Field(default_factory=list)

    quality_check_required: bool = False
    quality_checked: bool = False

    wage_per_piece: float = 0.0
    notes: str = ""
    status_history: list[StatusHistoryEntry] = Field(default_factory=list)
    created_by: str | None = None
    assigned_by: str | None = None

    @computed_field(alias="totalWage")  # type: ignore[prop-decorator]
    @property
    def total_wage(self) -> float:
        return self.quantity * self.wage_per_piece
