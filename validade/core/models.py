# validade/core/models.py
from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, List, Union
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, field_validator


def new_item_id() -> str:
    return uuid4().hex


# ---------- Core value objects ----------

class Item(BaseModel):
    """A single tracked inventory record. Never mutated after creation."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=new_item_id, min_length=1, description="Opaque unique id")
    name: str = Field(..., min_length=1, description="Display name of the product")
    expiry_date: str = Field(..., alias="expiryDate", description="DD/MM/YYYY, or the raw text when it could not be normalized")
    quantity: int = Field(0, ge=0, description="Non-negative quantity")

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Item.name cannot be blank")
        return v


class ItemCreate(BaseModel):
    """Raw add-item input, exactly as a form submits it. Checked by InventoryService."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    expiry_date: str = Field("", alias="expiryDate")
    # Strict so JSON booleans and floats are not coerced into a count
    quantity: Union[StrictInt, StrictStr] = ""


class Inventory(BaseModel):
    items: List[Item] = Field(default_factory=list)


class ItemView(BaseModel):
    """Item as shown in a product list, with its derived expiry numbers."""
    model_config = ConfigDict(populate_by_name=True)

    item: Item
    days_to_expiry: Optional[int] = Field(None, alias="daysToExpiry")
    expired: Optional[bool] = None


# ---------- Auditing / events ----------

class InventoryEvent(BaseModel):
    ts: datetime = Field(default_factory=datetime.utcnow)
    type: Literal["add", "delete", "report"]
    payload: dict
    schema_version: int = 1
