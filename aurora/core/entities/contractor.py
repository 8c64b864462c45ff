"""Contractor and worker entities."""

from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import Field

from aurora.core.entities.client import Address
from aurora.core.entities.document import Record, utcnow


class SkillLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    EXPERT = "EXPERT"


class BusinessType(str, Enum):
    INDIVIDUAL = "INDIVIDUAL"
    COMPANY = "COMPANY"


class ContractorStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    BLACKLISTED = "BLACKLISTED"


class AvailabilityStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    BUSY = "BUSY"
    OVERLOADED = "OVERLOADED"


class WorkerStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    ON_LEAVE = "ON_LEAVE"


class Contractor(Record):
    """An external workshop that takes production tasks."""

    COLLECTION: ClassVar[str] = "contractors"

    contractor_code: str = ""
    company_name: str | None = None
    contact_person_name: str
    phone: str
    email: str | None = None
    address: Address = Field(default_factory=Address)
    business_type: BusinessType = BusinessType.INDIVIDUAL
    gst_number: str | None = None
    specialization: list[str] = Field(default_factory=list)
    skill_level: SkillLevel = SkillLevel.INTERMEDIATE
    rating: float = 0.0
    total_orders_completed: int = 0
    max_concurrent_orders: int = 1
    status: ContractorStatus = ContractorStatus.ACTIVE
    availability_status: AvailabilityStatus = AvailabilityStatus.AVAILABLE
    onboarded_by: str | None = None
    onboarded_at: datetime = Field(default_factory=utcnow)

    @property
    def can_take_work(self) -> bool:
        return self.status == ContractorStatus.ACTIVE


class Worker(Record):
    """A tailor employed by a contractor."""

    COLLECTION: ClassVar[str] = "workers"

    contractor_id: str
    worker_code: str = ""
    name: str
    phone: str | None = None
    email: str | None = None
    skills: list[str] = Field(default_factory=list)
    experience_years: int = 0
    skill_level: SkillLevel = SkillLevel.BEGINNER
    hourly_rate: float | None = None
    piece_rate: float | None = None
    total_tasks_completed: int = 0
    status: WorkerStatus = WorkerStatus.ACTIVE
    joined_at: datetime = Field(default_factory=utcnow)
