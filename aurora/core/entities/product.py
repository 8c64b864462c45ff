"""Product catalog entities."""

from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from aurora.core.entities.document import Record


class ProductStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DISCONTINUED = "DISCONTINUED"


class Difficulty(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class ThreadRequirement(BaseModel):
    """Thread consumed per piece."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    raw_material_id: str
    thread_kg: float = Field(..., ge=0)


class SizeConfig(BaseModel):
    """Bill of materials and labor for one size of a product."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    size: str
    thread_requirements: list[ThreadRequirement] = Field(default_factory=list)
    labor_hours: float = 0.0
    wage_per_piece: float = 0.0
    difficulty: Difficulty = Difficulty.MEDIUM


class Product(Record):
    """A garment model that order items refer to."""

    COLLECTION: ClassVar[str] = "products"

    product_code: str
    name: str
    category: str = ""
    model: str = ""
    description: str = ""
    colors: list[str] = Field(default_factory=list)
    size_config: list[SizeConfig] = Field(default_factory=list)
    status: ProductStatus = ProductStatus.ACTIVE
    created_by: str | None = None

    def config_for(self, size: str) -> SizeConfig | None:
        return next((config for config in self.size_config if config.size == size), None)
