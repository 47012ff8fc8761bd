"""
Inventory Service - district stores of equipment and supplies
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_
from datetime import datetime
from typing import List, Optional
import logging

from app.core.config import settings
from app.core.exceptions import AuthorizationError, InventoryItemNotFoundError, RecordAccessDeniedError
from app.core.types import generate_uuid
from app.models.inventory import InventoryCategory, InventoryItem
from app.modules.auth.dependencies import RequestContext
from app.modules.auth.permissions import Scope
from app.modules.auth.scoping import is_visible, scope_records
from app.modules.workflows.state_machine import parse_status
from app.schemas.inventory import InspectionRecord, InventoryItemCreate, InventoryItemUpdate
from app.services.audit_service import audit_service

logger = logging.getLogger(__name__)


class InventoryService:
    """Service for inventory items"""

    async def list_items(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        category: Optional[str] = None,
        search: Optional[str] = None,
        low_stock_only: bool = False,
    ) -> List[InventoryItem]:
        query = select(InventoryItem)

        if category:
            query = query.where(InventoryItem.category == parse_status(InventoryCategory, category, "category"))
        if low_stock_only:
            query = query.where(InventoryItem.quantity < settings.LOW_STOCK_THRESHOLD)
        if search and search.strip():
            term = f"%{search.strip()}%"
            query = query.where(
                or_(
                    InventoryItem.name.ilike(term),
                    InventoryItem.description.ilike(term),
                    InventoryItem.location.ilike(term),
                    InventoryItem.district.ilike(term),
                )
            )

        result = await db.execute(query.order_by(InventoryItem.name))
        return scope_records(result.scalars().all(), ctx.role, ctx.district)

    async def get_item(self, db: AsyncSession, ctx: RequestContext, item_id: str) -> InventoryItem:
        item = await db.get(InventoryItem, item_id)
        if item is None:
            raise InventoryItemNotFoundError(item_id)
        if not is_visible(item, ctx.role, ctx.district):
            raise RecordAccessDeniedError("InventoryItem", item_id)
        return item

    async def create_item(self, db: AsyncSession, ctx: RequestContext, data: InventoryItemCreate) -> InventoryItem:
        ctx.require("can_manage_inventory")
        if ctx.scope is Scope.DISTRICT and data.district != ctx.district:
            raise AuthorizationError("District administrators can only stock their own district")

        item = InventoryItem(id=generate_uuid(), **data.model_dump())
        db.add(item)
        audit_service.record(
            db,
            action="inventory_created",
            target_type="inventory",
            target_id=item.id,
            actor_id=ctx.user_id,
            district=item.district,
            details={"name": item.name, "quantity": item.quantity},
        )
        await db.commit()
        await db.refresh(item)

        logger.info(f"Inventory item {item.name} added to {item.district}")
        return item

    async def update_item(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        item_id: str,
        data: InventoryItemUpdate,
    ) -> InventoryItem:
        ctx.require("can_manage_inventory")
        item = await self.get_item(db, ctx, item_id)

        changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        previous_quantity = item.quantity
        for field_name, value in changes.items():
            setattr(item, field_name, value)

        details = {"fields": sorted(changes)}
        if "quantity" in changes:
            details["quantity"] = {"from": previous_quantity, "to": item.quantity}
        audit_service.record(
            db,
            action="inventory_updated",
            target_type="inventory",
            target_id=item.id,
            actor_id=ctx.user_id,
            district=item.district,
            details=details,
        )
        await db.commit()
        await db.refresh(item)
        return item

    async def record_inspection(
        self,
        db: AsyncSession,
        ctx: RequestContext,
        item_id: str,
        data: InspectionRecord,
        now: Optional[datetime] = None,
    ) -> InventoryItem:
        ctx.require("can_manage_inventory")
        item = await self.get_item(db, ctx, item_id)

        item.last_inspection = now or datetime.utcnow()
        if data.condition is not None:
            item.condition = data.condition
        if data.next_inspection is not None:
            item.next_inspection = data.next_inspection

        audit_service.record(
            db,
            action="inventory_inspected",
            target_type="inventory",
            target_id=item.id,
            actor_id=ctx.user_id,
            district=item.district,
            details={"condition": item.condition.value if item.condition else None},
        )
        await db.commit()
        await db.refresh(item)
        return item

    async def delete_item(self, db: AsyncSession, ctx: RequestContext, item_id: str) -> None:
        ctx.require("can_manage_inventory")
        item = await self.get_item(db, ctx, item_id)

        audit_service.record(
            db,
            action="inventory_deleted",
            target_type="inventory",
            target_id=item.id,
            actor_id=ctx.user_id,
            district=item.district,
            details={"name": item.name},
        )
        await db.delete(item)
        await db.commit()


# Singleton instance
inventory_service = InventoryService()
