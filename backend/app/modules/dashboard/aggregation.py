"""
Dashboard aggregation.

Pure functions over collections that have already been scoped to the
caller. Records may be ORM rows or plain mappings. Nothing is cached:
every dashboard read recomputes from the rows it is given, and empty
input yields zero counts.
"""

from collections import Counter
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence

from app.models.incident import IncidentSeverity, IncidentStatus
from app.models.inventory import InventoryCategory, ItemCondition
from app.models.assignment import AssignmentStatus
from app.models.training import TrainingStatus
from app.models.volunteer import VolunteerStatus
from app.modules.workflows.incident_lifecycle import is_active_incident
from app.modules.workflows.training_schedule import is_upcoming

LOW_STOCK_THRESHOLD = 10

SEVERITY_LABELS = {
    IncidentSeverity.LOW: "Low",
    IncidentSeverity.MEDIUM: "Medium",
    IncidentSeverity.HIGH: "High",
    IncidentSeverity.CRITICAL: "Critical",
}

CATEGORY_LABELS = {
    InventoryCategory.MEDICAL_SUPPLIES: "Medical",
    InventoryCategory.COMMUNICATION_EQUIPMENT: "Communication",
    InventoryCategory.RESCUE_EQUIPMENT: "Rescue",
    InventoryCategory.VEHICLES: "Vehicles",
    InventoryCategory.SAFETY_GEAR: "Safety",
    InventoryCategory.OTHER: "Other",
}

CONDITION_LABELS = {
    ItemCondition.EXCELLENT: "Excellent",
    ItemCondition.GOOD: "Good",
    ItemCondition.FAIR: "Fair",
    ItemCondition.POOR: "Poor",
    ItemCondition.NEEDS_REPAIR: "Needs Repair",
}

VOLUNTEER_STATUS_LABELS = {
    VolunteerStatus.PENDING: "Pending",
    VolunteerStatus.APPROVED: "Approved",
    VolunteerStatus.REJECTED: "Rejected",
}


def _get(record: Any, name: str, default: Any = None) -> Any:
    if isinstance(record, dict):
        return record.get(name, default)
    return getattr(record, name, default)


def _value(raw: Any) -> Any:
    return raw.value if isinstance(raw, Enum) else raw


def count_by(records: Iterable[Any], field_name: str, keys: Sequence[Enum]) -> Dict[str, int]:
    """Occurrences of each enum value in field_name; every key is present, unknown values are ignored"""
    counts = Counter(_value(_get(r, field_name)) for r in records)
    return {key.value: counts.get(key.value, 0) for key in keys}


def _labelled(counts: Dict[str, int], labels: Dict[Enum, str]) -> List[Dict[str, Any]]:
    return [{"key": key.value, "label": label, "count": counts.get(key.value, 0)} for key, label in labels.items()]


# ==========================================
# Volunteers
# ==========================================

def volunteer_summary(volunteers: Sequence[Any]) -> Dict[str, int]:
    by_status = count_by(volunteers, "status", list(VolunteerStatus))
    return {
        "total": len(volunteers),
        "approved": by_status[VolunteerStatus.APPROVED.value],
        "pending": by_status[VolunteerStatus.PENDING.value],
        "rejected": by_status[VolunteerStatus.REJECTED.value],
        "ex_servicemen": sum(1 for v in volunteers if _get(v, "is_ex_serviceman")),
    }


def volunteer_status_chart(volunteers: Sequence[Any]) -> List[Dict[str, Any]]:
    return _labelled(count_by(volunteers, "status", list(VolunteerStatus)), VOLUNTEER_STATUS_LABELS)


# ==========================================
# Incidents
# ==========================================

def incident_summary(incidents: Sequence[Any]) -> Dict[str, int]:
    by_status = count_by(incidents, "status", list(IncidentStatus))
    return {
        "total": len(incidents),
        "active": sum(1 for i in incidents if is_active_incident(i)),
        "resolved": by_status[IncidentStatus.RESOLVED.value] + by_status[IncidentStatus.CLOSED.value],
        "critical": sum(1 for i in incidents if _value(_get(i, "severity")) == IncidentSeverity.CRITICAL.value),
        "by_status": by_status,
    }


def severity_chart(incidents: Sequence[Any]) -> List[Dict[str, Any]]:
    return _labelled(count_by(incidents, "severity", list(IncidentSeverity)), SEVERITY_LABELS)


# ==========================================
# Inventory
# ==========================================

def is_low_stock(quantity: Optional[int], threshold: int = LOW_STOCK_THRESHOLD) -> bool:
    return (quantity or 0) < threshold


def inventory_summary(items: Sequence[Any], threshold: int = LOW_STOCK_THRESHOLD) -> Dict[str, int]:
    low_stock = sum(1 for item in items if is_low_stock(_get(item, "quantity"), threshold))
    return {
        "total_items": len(items),
        "total_quantity": sum(_get(item, "quantity") or 0 for item in items),
        "low_stock": low_stock,
        "adequate_stock": len(items) - low_stock,
        "needs_repair": sum(
            1 for item in items if _value(_get(item, "condition")) == ItemCondition.NEEDS_REPAIR.value
        ),
    }


def category_chart(items: Sequence[Any]) -> List[Dict[str, Any]]:
    return _labelled(count_by(items, "category", list(InventoryCategory)), CATEGORY_LABELS)


def condition_chart(items: Sequence[Any]) -> List[Dict[str, Any]]:
    return _labelled(count_by(items, "condition", list(ItemCondition)), CONDITION_LABELS)


# ==========================================
# Trends
# ==========================================

def _month_starts(now: datetime, months: int) -> List[datetime]:
    """First day of each of the last `months` months, oldest first, ending with now's month"""
    year, month = now.year, now.month
    starts = []
    for _ in range(months):
        starts.append(datetime(year, month, 1))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return list(reversed(starts))


def _bucket(timestamp: Optional[datetime]):
    return (timestamp.year, timestamp.month) if timestamp else None


def monthly_trend(
    volunteers: Sequence[Any],
    incidents: Sequence[Any],
    months: int = 6,
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """
    Per-month counts for the trend chart.

    volunteers: registrations by created_at. incidents: reports by
    created_at. resolved: incidents by resolved_at.
    """
    now = now or datetime.utcnow()
    registered = Counter(_bucket(_get(v, "created_at")) for v in volunteers)
    reported = Counter(_bucket(_get(i, "created_at")) for i in incidents)
    resolved = Counter(_bucket(_get(i, "resolved_at")) for i in incidents)

    series = []
    for start in _month_starts(now, months):
        key = (start.year, start.month)
        series.append({
            "month": start.strftime("%b"),
            "year": start.year,
            "volunteers": registered.get(key, 0),
            "incidents": reported.get(key, 0),
            "resolved": resolved.get(key, 0),
        })
    return series


# ==========================================
# District breakdown
# ==========================================

def district_breakdown(
    districts: Sequence[str],
    volunteers: Sequence[Any],
    incidents: Sequence[Any],
    trainings: Sequence[Any],
    now: Optional[datetime] = None,
) -> List[Dict[str, Any]]:
    """One row per district name, in the order given"""
    now = now or datetime.utcnow()
    rows = {
        name: {
            "district": name,
            "volunteers": {"total": 0, "approved": 0, "pending": 0},
            "incidents": {"total": 0, "active": 0, "critical": 0},
            "trainings": {"total": 0, "upcoming": 0},
        }
        for name in districts
    }

    for v in volunteers:
        row = rows.get(_get(v, "district"))
        if row is None:
            continue
        row["volunteers"]["total"] += 1
        status = _value(_get(v, "status"))
        if status == VolunteerStatus.APPROVED.value:
            row["volunteers"]["approved"] += 1
        elif status == VolunteerStatus.PENDING.value:
            row["volunteers"]["pending"] += 1

    for i in incidents:
        row = rows.get(_get(i, "district"))
        if row is None:
            continue
        row["incidents"]["total"] += 1
        if is_active_incident(i):
            row["incidents"]["active"] += 1
        if _value(_get(i, "severity")) == IncidentSeverity.CRITICAL.value:
            row["incidents"]["critical"] += 1

    for t in trainings:
        row = rows.get(_get(t, "district"))
        if row is None:
            continue
        row["trainings"]["total"] += 1
        if is_upcoming(t, now):
            row["trainings"]["upcoming"] += 1

    return [rows[name] for name in districts]


def assignment_summary(assignments: Sequence[Any]) -> Dict[str, int]:
    counts = count_by(assignments, "status", list(AssignmentStatus))
    counts["total"] = len(assignments)
    return counts


def training_summary(trainings: Sequence[Any], now: Optional[datetime] = None) -> Dict[str, int]:
    now = now or datetime.utcnow()
    by_status = count_by(trainings, "status", list(TrainingStatus))
    return {
        "total": len(trainings),
        "upcoming": sum(1 for t in trainings if is_upcoming(t, now)),
        "completed": by_status[TrainingStatus.COMPLETED.value],
        "cancelled": by_status[TrainingStatus.CANCELLED.value],
    }
