from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator


class GearCategory(str, Enum):
    DECK = "deck"
    TRUCK = "truck"
    WHEEL = "wheel"
    BEARING = "bearing"
    GRIPTAPE = "griptape"
    TOOL = "tool"


class UsageStatus(str, Enum):
    YES = "Yes"
    NO = "No"
    STOCK = "Stock"


class ConditionStatus(str, Enum):
    NEW = "New"
    POOR = "Poor"
    BROKEN = "Broken"


DeckSize = Literal["<7.5", "7.5", "7.75", "7.875", "8", "8.125", "8.25", "8.375", "8.5", ">8.5"]


def _blank_to_none(v: Any) -> Any:
    if isinstance(v, str) and not v.strip():
        return None
    return v


class GearDetailsBase(BaseModel):
    # Stored rows also carry gear_id; it is not part of the detail payload.
    model_config = ConfigDict(extra="ignore")

    condition: ConditionStatus = ConditionStatus.NEW
    image_url: str | None = None
    price: float | None = Field(default=None, ge=0)

    @field_validator("image_url", "price", mode="before")
    @classmethod
    def _coerce_blank(cls, v):
        return _blank_to_none(v)


class UsageDetailsBase(GearDetailsBase):
    currently_using: UsageStatus = UsageStatus.NO


class DeckDetails(UsageDetailsBase):
    model: str | None = None
    size: DeckSize
    purchase_date: date | None = None

    @field_validator("purchase_date", mode="before")
    @classmethod
    def _coerce_blank_date(cls, v):
        return _blank_to_none(v)


class TruckDetails(UsageDetailsBase):
    width: str = Field(min_length=1)
    height: str = Field(min_length=1)
    color: str | None = None
    axle_type: str | None = None
    weight: float | None = Field(default=None, ge=0)


class WheelDetails(UsageDetailsBase):
    diameter: float = Field(gt=0)
    durometer: str = Field(min_length=1)
    contact_patch: float | None = Field(default=None, ge=0)
    color: str | None = None


class BearingDetails(UsageDetailsBase):
    abec_rating: str | None = None
    material: str | None = None
    shields_type: str | None = None


class GriptapeDetails(UsageDetailsBase):
    width: str = Field(min_length=1)
    length: str = Field(min_length=1)
    grit: str | None = None
    color: str | None = None


class ToolDetails(GearDetailsBase):
    tool_type: str = Field(min_length=1)
    material: str | None = None
    included_tools: list[str] = Field(default_factory=list)
    color: str | None = None

    @field_validator("included_tools", mode="before")
    @classmethod
    def _coerce_null_list(cls, v):
        return [] if v is None else v


class DetailsStub(BaseModel):
    """Stands in for a detail row that is missing, so `details` is never null."""

    image_url: str = ""
    price: float = 0


GearDetails = Union[DeckDetails, TruckDetails, WheelDetails, BearingDetails, GriptapeDetails, ToolDetails]


DETAIL_SCHEMAS: dict[GearCategory, type[GearDetailsBase]] = {
    GearCategory.DECK: DeckDetails,
    GearCategory.TRUCK: TruckDetails,
    GearCategory.WHEEL: WheelDetails,
    GearCategory.BEARING: BearingDetails,
    GearCategory.GRIPTAPE: GriptapeDetails,
    GearCategory.TOOL: ToolDetails,
}

DETAIL_COLLECTIONS: dict[GearCategory, str] = {
    GearCategory.DECK: "deck_details",
    GearCategory.TRUCK: "truck_details",
    GearCategory.WHEEL: "wheel_details",
    GearCategory.BEARING: "bearing_details",
    GearCategory.GRIPTAPE: "griptape_details",
    GearCategory.TOOL: "tool_details",
}

# Display order of the category buckets.
CATEGORY_LABELS: dict[GearCategory, str] = {
    GearCategory.DECK: "Decks",
    GearCategory.TRUCK: "Trucks",
    GearCategory.WHEEL: "Wheels",
    GearCategory.BEARING: "Bearings",
    GearCategory.GRIPTAPE: "Griptape",
    GearCategory.TOOL: "Tools",
}


def parse_gear_details(category: GearCategory, data: dict[str, Any] | None) -> GearDetails:
    """Validate a detail payload against its category's schema.

    Raises pydantic.ValidationError when the payload does not fit.
    """

    return DETAIL_SCHEMAS[category].model_validate(data or {})


class GearView(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    user_id: str
    category: GearCategory
    name: str
    brand: str | None = None
    specs: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    details: GearDetails | DetailsStub

    @model_validator(mode="before")
    @classmethod
    def _select_details_schema(cls, data: Any) -> Any:
        # `details` is a union keyed by `category`; pick the member explicitly.
        # Detail rows always carry `condition`, the stub never does.
        if isinstance(data, dict) and isinstance(data.get("details"), dict):
            details = data["details"]
            if "condition" in details:
                schema = DETAIL_SCHEMAS[GearCategory(data.get("category"))]
                data = {**data, "details": schema.model_validate(details)}
            else:
                data = {**data, "details": DetailsStub.model_validate(details)}
        return data


class CategoryBucket(BaseModel):
    name: str
    category: GearCategory
    items: list[GearView] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def count(self) -> int:
        return len(self.items)


class GearCreate(BaseModel):
    category: GearCategory
    name: str = Field(min_length=1, max_length=255)
    brand: str | None = None
    specs: str | None = None
    details: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        value = (v or "").strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class GearUpdate(BaseModel):
    # No category field: the category is fixed when the gear is created.
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=255)
    brand: str | None = None
    specs: str | None = None
    details: dict[str, Any] | None = None

    @field_validator("name")
    @classmethod
    def _name_not_cleared(cls, v: str | None) -> str:
        value = (v or "").strip()
        if not value:
            raise ValueError("name must not be blank")
        return value


class GearWriteResult(BaseModel):
    categories: list[CategoryBucket]
    warnings: list[str] = Field(default_factory=list)
