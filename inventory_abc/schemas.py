from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import settings
from .utils import clean_text, to_number

AbcCategory = Literal["A", "B", "C"]


class InventoryRecord(BaseModel):
    """
    Defines the data contract for a single, normalized inventory row.
    Aliases are the column names of the source sheet, so a raw row dict
    can be validated directly and exports keep the familiar headers.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    code: str = Field(default="", alias=settings.CODE_COLUMN)
    material: str = Field(..., min_length=1, alias=settings.MATERIAL_COLUMN)
    available_qty: float = Field(default=0, alias=settings.AVAILABLE_QTY_COLUMN)
    physical_qty: float = Field(default=0, alias=settings.PHYSICAL_QTY_COLUMN)
    unit: str = Field(default=settings.DEFAULT_UNIT, alias=settings.UNIT_COLUMN)
    unit_sale_price: float = Field(default=0, alias=settings.UNIT_SALE_PRICE_COLUMN)
    total_sale_value: float = Field(default=0, alias=settings.TOTAL_SALE_VALUE_COLUMN)
    coverage_days: Optional[float] = Field(
        default=None, alias=settings.COVERAGE_DAYS_COLUMN
    )
    abc_category: Optional[AbcCategory] = Field(default=None, alias="ABC")

    # Unparsable amounts are zero, never an error.
    @field_validator(
        "available_qty",
        "physical_qty",
        "unit_sale_price",
        "total_sale_value",
        mode="before",
    )
    @classmethod
    def _coerce_amount(cls, value):
        number = to_number(value)
        return 0.0 if number is None else number

    @field_validator("coverage_days", mode="before")
    @classmethod
    def _coerce_coverage(cls, value):
        return to_number(value)

    @field_validator("code", "material", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        return clean_text(value)

    @field_validator("unit", mode="before")
    @classmethod
    def _coerce_unit(cls, value):
        return clean_text(value) or settings.DEFAULT_UNIT


class UnitTotal(BaseModel):
    unit: str
    quantity: float = 0


class CategoryTotal(BaseModel):
    category: str
    revenue: float = 0
    quantity: float = 0


class InventorySummary(BaseModel):
    """Totals for one visible subset of classified records."""

    total_revenue: float = 0
    record_count: int = Field(default=0, ge=0)
    unit_totals: list[UnitTotal] = Field(default_factory=list)
    category_totals: list[CategoryTotal] = Field(default_factory=list)
