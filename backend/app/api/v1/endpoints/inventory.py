"""
Inventory endpoints
"""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.modules.auth.dependencies import RequestContext, get_request_context
from app.schemas.base import MessageResponse
from app.schemas.inventory import InspectionRecord, InventoryItemCreate, InventoryItemResponse, InventoryItemUpdate
from app.services.inventory_service import inventory_service

router = APIRouter()


@router.get("", response_model=List[InventoryItemResponse])
async def list_inventory(
    category: Optional[str] = None,
    search: Optional[str] = None,
    low_stock: bool = Query(False, alias="lowStock"),
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await inventory_service.list_items(
        db, ctx, category=category, search=search, low_stock_only=low_stock
    )


@router.post("", response_model=InventoryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_inventory_item(
    data: InventoryItemCreate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await inventory_service.create_item(db, ctx, data)


@router.get("/{item_id}", response_model=InventoryItemResponse)
async def get_inventory_item(
    item_id: str,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await inventory_service.get_item(db, ctx, item_id)


@router.patch("/{item_id}", response_model=InventoryItemResponse)
async def update_inventory_item(
    item_id: str,
    data: InventoryItemUpdate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await inventory_service.update_item(db, ctx, item_id, data)


@router.post("/{item_id}/inspection", response_model=InventoryItemResponse)
async def record_inspection(
    item_id: str,
    data: InspectionRecord,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Stamp last inspection as now, optionally updating condition"""
    return await inventory_service.record_inspection(db, ctx, item_id, data)


@router.delete("/{item_id}", response_model=MessageResponse)
async def delete_inventory_item(
    item_id: str,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    await inventory_service.delete_item(db, ctx, item_id)
    return {"message": "Inventory item deleted"}
