"""Status history shared by orders and tasks."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from aurora.core.entities.document import utcnow


class StatusHistoryEntry(BaseModel):
    """One recorded status change."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    status: str
    timestamp: datetime = Field(default_factory=utcnow)
    changed_by: str
    notes: str | None = None
