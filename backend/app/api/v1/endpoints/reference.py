from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.core.database import get_db
from app.schemas.reference import DepartmentResponse, DistrictResponse
from app.services.reference_service import reference_service

router = APIRouter()


@router.get("/districts", response_model=List[DistrictResponse])
async def list_districts(db: AsyncSession = Depends(get_db)):
    return await reference_service.list_districts(db)


@router.get("/departments", response_model=List[DepartmentResponse])
async def list_departments(db: AsyncSession = Depends(get_db)):
    return await reference_service.list_departments(db)
