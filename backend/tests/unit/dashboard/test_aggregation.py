"""
Unit Tests for Dashboard Aggregation
Tests for: summaries, charts, monthly trend, district breakdown
"""
import pytest
from datetime import datetime, timedelta

from app.models.assignment import AssignmentStatus
from app.models.incident import IncidentSeverity
from app.modules.dashboard.aggregation import (
    assignment_summary,
    category_chart,
    condition_chart,
    count_by,
    district_breakdown,
    incident_summary,
    inventory_summary,
    is_low_stock,
    monthly_trend,
    severity_chart,
    training_summary,
    volunteer_status_chart,
    volunteer_summary,
)

NOW = datetime(2024, 3, 15, 12, 0)

INCIDENT_STATUSES = ["reported", "assigned", "in_progress", "resolved", "closed"]


def chart_counts(chart):
    return {row["label"]: row["count"] for row in chart}


class TestEmptyInput:
    """Every aggregate is defined on empty collections"""

    def test_zero_counts(self):
        assert volunteer_summary([]) == {"total": 0, "approved": 0, "pending": 0, "rejected": 0, "ex_servicemen": 0}
        assert incident_summary([])["active"] == 0
        assert inventory_summary([])["low_stock"] == 0
        assert training_summary([], NOW) == {"total": 0, "upcoming": 0, "completed": 0, "cancelled": 0}
        assert assignment_summary([])["total"] == 0

    def test_charts_list_every_bucket(self):
        assert chart_counts(severity_chart([])) == {"Low": 0, "Medium": 0, "High": 0, "Critical": 0}
        assert len(category_chart([])) == 6
        assert len(condition_chart([])) == 5
        assert [row["label"] for row in volunteer_status_chart([])] == ["Pending", "Approved", "Rejected"]


class TestIncidents:

    def test_single_critical_report(self):
        incidents = [{"severity": "critical", "status": "reported", "district": "Puri"}]

        summary = incident_summary(incidents)

        assert summary["active"] == 1
        assert summary["critical"] == 1
        assert chart_counts(severity_chart(incidents))["Critical"] == 1

    @pytest.mark.parametrize("statuses", [
        INCIDENT_STATUSES,
        ["reported", "reported", "closed"],
        ["resolved", "closed"],
        ["in_progress"] * 4 + ["assigned"],
    ])
    def test_active_counts_open_statuses(self, statuses):
        incidents = [{"status": s, "severity": "low"} for s in statuses]

        expected = sum(1 for s in statuses if s in ("reported", "assigned", "in_progress"))

        assert incident_summary(incidents)["active"] == expected

    def test_resolved_includes_closed(self):
        incidents = [{"status": s, "severity": "medium"} for s in INCIDENT_STATUSES]

        summary = incident_summary(incidents)

        assert summary["resolved"] == 2
        assert summary["by_status"] == {s: 1 for s in INCIDENT_STATUSES}

    def test_enum_and_string_severities_count_together(self):
        incidents = [
            {"status": "reported", "severity": IncidentSeverity.HIGH},
            {"status": "reported", "severity": "high"},
        ]

        assert chart_counts(severity_chart(incidents))["High"] == 2


class TestVolunteers:

    def test_summary(self):
        volunteers = [
            {"status": "approved", "is_ex_serviceman": True},
            {"status": "approved", "is_ex_serviceman": False},
            {"status": "pending"},
            {"status": "rejected"},
        ]

        assert volunteer_summary(volunteers) == {
            "total": 4, "approved": 2, "pending": 1, "rejected": 1, "ex_servicemen": 1,
        }


class TestInventory:

    @pytest.mark.parametrize("quantity,low", [(0, True), (9, True), (10, False), (None, True)])
    def test_low_stock_threshold(self, quantity, low):
        assert is_low_stock(quantity, 10) is low

    def test_summary(self):
        items = [
            {"quantity": 3, "category": "medical_supplies", "condition": "good"},
            {"quantity": 40, "category": "vehicles", "condition": "needs_repair"},
            {"quantity": 12, "category": "vehicles", "condition": "fair"},
        ]

        summary = inventory_summary(items, threshold=10)

        assert summary == {
            "total_items": 3,
            "total_quantity": 55,
            "low_stock": 1,
            "adequate_stock": 2,
            "needs_repair": 1,
        }
        assert chart_counts(category_chart(items))["Vehicles"] == 2
        assert chart_counts(condition_chart(items))["Needs Repair"] == 1


class TestMonthlyTrend:

    def test_buckets_by_month(self):
        volunteers = [{"created_at": datetime(2024, 3, 2)}, {"created_at": datetime(2024, 1, 20)}]
        incidents = [
            {"created_at": datetime(2024, 2, 10), "resolved_at": datetime(2024, 3, 1)},
            {"created_at": datetime(2023, 5, 1), "resolved_at": None},
        ]

        trend = monthly_trend(volunteers, incidents, months=3, now=NOW)

        assert [row["month"] for row in trend] == ["Jan", "Feb", "Mar"]
        assert [row["volunteers"] for row in trend] == [1, 0, 1]
        assert [row["incidents"] for row in trend] == [0, 1, 0]
        assert [row["resolved"] for row in trend] == [0, 0, 1]

    def test_crosses_year_boundary(self):
        trend = monthly_trend([], [], months=4, now=datetime(2024, 2, 1))

        assert [(row["month"], row["year"]) for row in trend] == [
            ("Nov", 2023), ("Dec", 2023), ("Jan", 2024), ("Feb", 2024),
        ]


class TestDistrictBreakdown:

    def test_rows_follow_district_order(self):
        volunteers = [
            {"district": "Puri", "status": "approved"},
            {"district": "Puri", "status": "pending"},
            {"district": "Atlantis", "status": "approved"},
        ]
        incidents = [{"district": "Cuttack", "status": "reported", "severity": "critical"}]
        trainings = [
            {"district": "Puri", "status": "scheduled", "scheduled_at": NOW + timedelta(days=2)},
            {"district": "Puri", "status": "completed", "scheduled_at": NOW - timedelta(days=2)},
        ]

        rows = district_breakdown(["Cuttack", "Puri"], volunteers, incidents, trainings, now=NOW)

        assert [r["district"] for r in rows] == ["Cuttack", "Puri"]
        assert rows[0]["incidents"] == {"total": 1, "active": 1, "critical": 1}
        assert rows[1]["volunteers"] == {"total": 2, "approved": 1, "pending": 1}
        assert rows[1]["trainings"] == {"total": 2, "upcoming": 1}


class TestCountBy:

    def test_unknown_values_are_ignored(self):
        counts = count_by([{"status": "assigned"}, {"status": "lost"}], "status", list(AssignmentStatus))

        assert counts["assigned"] == 1
        assert "lost" not in counts
        assert sum(counts.values()) == 1
