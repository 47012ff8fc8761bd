"""Dashboard response models"""
from pydantic import Field
from typing import Dict, List, Optional

from app.schemas.base import CamelModel


class ChartPoint(CamelModel):
    key: str
    label: str
    count: int


class TrendPoint(CamelModel):
    month: str
    year: int
    volunteers: int
    incidents: int
    resolved: int


class VolunteerCounts(CamelModel):
    total: int
    approved: int
    pending: int
    rejected: int
    ex_servicemen: int


class IncidentCounts(CamelModel):
    total: int
    active: int
    resolved: int
    critical: int
    by_status: Dict[str, int]


class InventoryCounts(CamelModel):
    total_items: int
    total_quantity: int
    low_stock: int
    adequate_stock: int
    needs_repair: int


class TrainingCounts(CamelModel):
    total: int
    upcoming: int
    completed: int
    cancelled: int


class DashboardSummary(CamelModel):
    title: str
    subtitle: str
    scope: str
    district: Optional[str] = None
    volunteers: VolunteerCounts
    incidents: IncidentCounts
    inventory: InventoryCounts
    trainings: TrainingCounts
    volunteer_status_chart: List[ChartPoint]
    severity_chart: List[ChartPoint]
    category_chart: List[ChartPoint]
    condition_chart: List[ChartPoint]
    monthly_trend: List[TrendPoint]


class DistrictVolunteerCounts(CamelModel):
    total: int
    approved: int
    pending: int


class DistrictIncidentCounts(CamelModel):
    total: int
    active: int
    critical: int


class DistrictTrainingCounts(CamelModel):
    total: int
    upcoming: int


class DistrictStats(CamelModel):
    district: str
    volunteers: DistrictVolunteerCounts
    incidents: DistrictIncidentCounts
    trainings: DistrictTrainingCounts


class VolunteerDashboard(CamelModel):
    volunteer_id: Optional[str] = None
    status: Optional[str] = None
    assignments: Dict[str, int] = Field(default_factory=dict)
    registered_trainings: int = 0
    upcoming_trainings: int = 0
