"""Stored document and the base class for records persisted as documents."""

from datetime import UTC, datetime
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(UTC)


class Document(BaseModel):
    """
    A versioned JSON document in a named collection.

    ``version`` starts at 1 and increases by one on every successful write;
    conditional updates compare against it.
    """

    id: str
    collection: str
    version: int = 1
    data: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Record(BaseModel):
    """
    Base class for domain records stored as documents.

    Field names are snake_case in Python and camelCase in stored data.
    ``id``, ``version`` and the timestamps are document metadata owned by the
    store and are never written into the document body.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    COLLECTION: ClassVar[str]
    METADATA_FIELDS: ClassVar[set[str]] = {"id", "version", "created_at", "updated_at"}

    id: str | None = None
    version: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_document(cls, doc: Document) -> Self:
        """Build a record from a stored document."""
        return cls.model_validate(
            {
                **doc.data,
                "id": doc.id,
                "version": doc.version,
                "createdAt": doc.created_at,
                "updatedAt": doc.updated_at,
            }
        )

    def to_data(self) -> dict[str, Any]:
        """Serialize the record body for storage, derived fields included."""
        return self.model_dump(mode="json", by_alias=True, exclude=self.METADATA_FIELDS)
