"""
Unit Tests for Assignment Lifecycle
Tests for: volunteer-driven status updates, ownership check
"""
import pytest
from datetime import datetime
from faker import Faker

from app.core.exceptions import InvalidTransitionError, RecordAccessDeniedError
from app.models.assignment import Assignment, AssignmentStatus
from app.modules.workflows.assignment_lifecycle import advance_assignment

fake = Faker()


def make_assignment(volunteer_id="vol-1", status=AssignmentStatus.ASSIGNED):
    return Assignment(id=fake.uuid4(), volunteer_id=volunteer_id, incident_id=fake.uuid4(), status=status)


class TestOwnership:
    """Only the assigned volunteer may move an assignment"""

    def test_owner_can_accept(self):
        assignment = make_assignment()

        transition = advance_assignment(assignment, "accepted", "vol-1", actor_id="user-1")

        assert assignment.status is AssignmentStatus.ACCEPTED
        assert transition.actor_id == "user-1"

    def test_other_volunteer_is_denied(self):
        assignment = make_assignment()

        with pytest.raises(RecordAccessDeniedError) as exc_info:
            advance_assignment(assignment, "accepted", "vol-2")

        assert exc_info.value.public_status_code == 404
        assert assignment.status is AssignmentStatus.ASSIGNED

    def test_caller_without_profile_is_denied(self):
        with pytest.raises(RecordAccessDeniedError):
            advance_assignment(make_assignment(), "accepted", None)


class TestProgression:

    def test_accept_start_complete(self):
        assignment = make_assignment()
        now = datetime(2024, 8, 15, 17, 45)

        for step in ("accepted", "in_progress", "completed"):
            advance_assignment(assignment, step, "vol-1", now=now)

        assert assignment.status is AssignmentStatus.COMPLETED
        assert assignment.completed_at == now

    def test_start_directly_from_assigned(self):
        assignment = make_assignment()

        advance_assignment(assignment, AssignmentStatus.IN_PROGRESS, "vol-1")

        assert assignment.status is AssignmentStatus.IN_PROGRESS

    @pytest.mark.parametrize("start", [AssignmentStatus.ASSIGNED, AssignmentStatus.ACCEPTED])
    def test_decline(self, start):
        assignment = make_assignment(status=start)

        advance_assignment(assignment, "declined", "vol-1")

        assert assignment.status is AssignmentStatus.DECLINED
        assert assignment.completed_at is None

    def test_cannot_decline_once_started(self):
        assignment = make_assignment(status=AssignmentStatus.IN_PROGRESS)

        with pytest.raises(InvalidTransitionError):
            advance_assignment(assignment, "declined", "vol-1")

    @pytest.mark.parametrize("terminal", [AssignmentStatus.COMPLETED, AssignmentStatus.DECLINED])
    def test_terminal_states(self, terminal):
        with pytest.raises(InvalidTransitionError):
            advance_assignment(make_assignment(status=terminal), "in_progress", "vol-1")
