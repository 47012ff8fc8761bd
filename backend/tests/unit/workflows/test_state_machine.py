"""
Unit Tests for Transition Tables
Tests for: allowed moves, terminal states, transition records, status parsing
"""
import pytest
from datetime import datetime

from app.core.exceptions import InvalidTransitionError, ValidationError
from app.models.incident import IncidentStatus
from app.models.training import TrainingStatus
from app.modules.workflows.incident_lifecycle import incident_workflow
from app.modules.workflows.state_machine import TransitionTable, parse_status
from app.modules.workflows.training_schedule import training_workflow


class TestTransitionTable:
    """Generic table behaviour, exercised through the incident table"""

    def test_allowed_move(self):
        assert incident_workflow.can_transition(IncidentStatus.REPORTED, IncidentStatus.ASSIGNED)

    def test_skipping_a_step_is_not_allowed(self):
        assert not incident_workflow.can_transition(IncidentStatus.REPORTED, IncidentStatus.RESOLVED)

    def test_ensure_raises_with_allowed_targets(self):
        with pytest.raises(InvalidTransitionError) as exc_info:
            incident_workflow.ensure(IncidentStatus.ASSIGNED, IncidentStatus.CLOSED)

        error = exc_info.value
        assert error.status_code == 409
        assert error.details["current_status"] == "assigned"
        assert error.details["target_status"] == "closed"
        assert error.details["allowed"] == ["in_progress"]

    def test_terminal_states(self):
        assert incident_workflow.is_terminal(IncidentStatus.CLOSED)
        assert training_workflow.is_terminal(TrainingStatus.CANCELLED)
        assert not training_workflow.is_terminal(TrainingStatus.SCHEDULED)

    def test_unknown_state_has_no_moves(self):
        table = TransitionTable("Empty", {})

        assert table.allowed_from(IncidentStatus.REPORTED) == frozenset()

    def test_record_describes_the_move(self):
        now = datetime(2024, 3, 1, 12, 0)

        transition = incident_workflow.record(
            42, IncidentStatus.REPORTED, IncidentStatus.CLOSED, actor_id="admin-1", timestamp=now, note="dup"
        )

        assert transition.entity == "Incident"
        assert transition.entity_id == "42"
        assert transition.to_dict() == {
            "entity": "Incident",
            "entity_id": "42",
            "from": "reported",
            "to": "closed",
            "actor_id": "admin-1",
            "timestamp": now.isoformat(),
            "reason": None,
            "metadata": {"note": "dup"},
        }


class TestParseStatus:

    def test_parses_value(self):
        assert parse_status(IncidentStatus, "in_progress") is IncidentStatus.IN_PROGRESS

    def test_passes_enum_through(self):
        assert parse_status(IncidentStatus, IncidentStatus.CLOSED) is IncidentStatus.CLOSED

    def test_unknown_value_is_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_status(IncidentStatus, "archived", field_name="status")

        assert exc_info.value.status_code == 400
        assert exc_info.value.details == {"field": "status"}
        assert "reported" in exc_info.value.message
