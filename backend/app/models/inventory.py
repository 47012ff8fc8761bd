from sqlalchemy import Column, String, DateTime, Text, Integer, CheckConstraint, Index
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid, enum_column


class InventoryCategory(str, enum.Enum):
    MEDICAL_SUPPLIES = "medical_supplies"
    COMMUNICATION_EQUIPMENT = "communication_equipment"
    RESCUE_EQUIPMENT = "rescue_equipment"
    VEHICLES = "vehicles"
    SAFETY_GEAR = "safety_gear"
    OTHER = "other"


class ItemCondition(str, enum.Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"
    NEEDS_REPAIR = "needs_repair"


class InventoryItem(Base):
    """Equipment or supplies held at a district store"""
    __tablename__ = "inventory"

    __table_args__ = (
        CheckConstraint('quantity >= 0', name='ck_inventory_quantity_non_negative'),
        Index('ix_inventory_district_category', 'district', 'category'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    category = Column(enum_column(InventoryCategory, "inventory_category"), nullable=False)
    description = Column(Text, nullable=True)
    quantity = Column(Integer, default=0, nullable=False)
    condition = Column(enum_column(ItemCondition, "item_condition"), default=ItemCondition.GOOD, nullable=False)
    location = Column(String(255), nullable=False)
    district = Column(String(100), nullable=False)

    last_inspection = Column(DateTime, nullable=True)
    next_inspection = Column(DateTime, nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<InventoryItem {self.name} x{self.quantity} [{self.district}]>"
