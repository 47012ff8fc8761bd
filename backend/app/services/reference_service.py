"""Reference Service - district and department lookups"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from app.models.reference import Department, District


class ReferenceService:

    async def list_districts(self, db: AsyncSession) -> List[District]:
        result = await db.execute(select(District).order_by(District.name))
        return list(result.scalars().all())

    async def list_departments(self, db: AsyncSession) -> List[Department]:
        result = await db.execute(select(Department).order_by(Department.name))
        return list(result.scalars().all())


# Singleton instance
reference_service = ReferenceService()
