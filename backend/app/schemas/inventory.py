from pydantic import Field, computed_field
from typing import Optional
from datetime import datetime

from app.core.config import settings
from app.models.inventory import InventoryCategory, ItemCondition
from app.schemas.base import CamelModel


class InventoryItemCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: InventoryCategory
    description: Optional[str] = None
    quantity: int = Field(0, ge=0)
    condition: ItemCondition = ItemCondition.GOOD
    location: str = Field(..., min_length=1, max_length=255)
    district: str = Field(..., min_length=1, max_length=100)
    last_inspection: Optional[datetime] = None
    next_inspection: Optional[datetime] = None


class InventoryItemUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[InventoryCategory] = None
    description: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0)
    condition: Optional[ItemCondition] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    next_inspection: Optional[datetime] = None


class InspectionRecord(CamelModel):
    condition: Optional[ItemCondition] = None
    next_inspection: Optional[datetime] = None


class InventoryItemResponse(CamelModel):
    id: str
    name: str
    category: InventoryCategory
    description: Optional[str] = None
    quantity: int
    condition: ItemCondition
    location: str
    district: str
    last_inspection: Optional[datetime] = None
    next_inspection: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    @computed_field
    @property
    def is_low_stock(self) -> bool:
        return self.quantity < settings.LOW_STOCK_THRESHOLD
