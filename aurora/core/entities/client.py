"""Client entities."""

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from aurora.core.entities.document import Record


class ClientStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class Address(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    street: str = ""
    city: str = ""
    state: str = ""
    pincode: str = ""
    country: str = ""


class Client(Record):
    """A customer that places orders."""

    COLLECTION: ClassVar[str] = "clients"

    client_code: str
    company_name: str
    contact_person_name: str = ""
    contact_phone: str = ""
    contact_email: str = ""
    billing_address: Address = Field(default_factory=Address)
    shipping_address: Address | None = None
    gst_number: str | None = None
    business_type: str = ""
    payment_terms: str = ""
    credit_limit: float | None = None
    status: ClientStatus = ClientStatus.ACTIVE
    notes: str | None = None
    created_by: str | None = None
