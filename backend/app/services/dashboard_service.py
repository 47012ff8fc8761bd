"""
Dashboard Service - loads the caller's scoped snapshot and aggregates it
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from datetime import datetime
from typing import Any, Dict, List, Optional

from app.core.config import settings
from app.db.reference_data import ODISHA_DISTRICT_NAMES
from app.models.incident import Incident
from app.models.inventory import InventoryItem
from app.models.reference import District
from app.models.training import TrainingSession
from app.models.volunteer import Volunteer
from app.modules.auth.dependencies import RequestContext
from app.modules.auth.navigation import dashboard_subtitle, dashboard_title
from app.modules.auth.permissions import Scope
from app.modules.auth.scoping import scope_records
from app.modules.dashboard import aggregation
from app.modules.workflows.training_schedule import is_upcoming
from app.services.assignment_service import assignment_service
from app.services.training_service import training_service
from app.services.volunteer_service import volunteer_service


class DashboardService:
    """Computes dashboard cards and charts on every read"""

    async def _scoped(self, db: AsyncSession, ctx: RequestContext, model) -> List[Any]:
        result = await db.execute(select(model))
        return scope_records(result.scalars().all(), ctx.role, ctx.district)

    async def summary(self, db: AsyncSession, ctx: RequestContext, now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or datetime.utcnow()
        volunteers = await self._scoped(db, ctx, Volunteer)
        incidents = await self._scoped(db, ctx, Incident)
        items = await self._scoped(db, ctx, InventoryItem)
        if ctx.scope is Scope.VOLUNTEER:
            trainings = []
        else:
            trainings = await training_service.list_sessions(db, ctx)

        return {
            "title": dashboard_title(ctx.role),
            "subtitle": dashboard_subtitle(ctx.role, ctx.district),
            "scope": ctx.scope.value,
            "district": ctx.district if ctx.scope is Scope.DISTRICT else None,
            "volunteers": aggregation.volunteer_summary(volunteers),
            "incidents": aggregation.incident_summary(incidents),
            "inventory": aggregation.inventory_summary(items, settings.LOW_STOCK_THRESHOLD),
            "trainings": aggregation.training_summary(trainings, now),
            "volunteer_status_chart": aggregation.volunteer_status_chart(volunteers),
            "severity_chart": aggregation.severity_chart(incidents),
            "category_chart": aggregation.category_chart(items),
            "condition_chart": aggregation.condition_chart(items),
            "monthly_trend": aggregation.monthly_trend(
                volunteers, incidents, months=settings.DASHBOARD_TREND_MONTHS, now=now
            ),
        }

    async def district_names(self, db: AsyncSession) -> List[str]:
        result = await db.execute(select(District.name).order_by(District.name))
        names = list(result.scalars().all())
        return names or list(ODISHA_DISTRICT_NAMES)

    async def district_stats(self, db: AsyncSession, ctx: RequestContext,
                             now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        if ctx.scope is Scope.STATE:
            districts = await self.district_names(db)
        elif ctx.scope is Scope.DISTRICT and ctx.district:
            districts = [ctx.district]
        else:
            return []

        volunteers = await self._scoped(db, ctx, Volunteer)
        incidents = await self._scoped(db, ctx, Incident)
        trainings = await self._scoped(db, ctx, TrainingSession)
        return aggregation.district_breakdown(districts, volunteers, incidents, trainings, now=now)

    async def volunteer_dashboard(self, db: AsyncSession, ctx: RequestContext,
                                  now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or datetime.utcnow()
        profile = await volunteer_service.get_profile_for_user(db, ctx.user_id)
        if profile is None:
            return {"assignments": aggregation.assignment_summary([])}

        assignments = await assignment_service.my_assignments(db, ctx)
        registrations = await training_service.my_registrations(db, ctx)
        return {
            "volunteer_id": str(profile.id),
            "status": profile.status.value,
            "assignments": aggregation.assignment_summary(assignments),
            "registered_trainings": len(registrations),
            "upcoming_trainings": sum(
                1 for _, session in registrations if is_upcoming(session, now)
            ),
        }


# Singleton instance
dashboard_service = DashboardService()
