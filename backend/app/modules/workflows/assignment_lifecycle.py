"""
Assignment lifecycle, driven by the assigned volunteer.

    assigned -> accepted -> in_progress -> completed
    assigned -> in_progress
    assigned | accepted -> declined
"""

from datetime import datetime
from typing import Optional, Union

from app.core.exceptions import RecordAccessDeniedError
from app.models.assignment import Assignment, AssignmentStatus
from app.modules.workflows.state_machine import StateTransition, TransitionTable, parse_status


ASSIGNMENT_TRANSITIONS = {
    AssignmentStatus.ASSIGNED: {
        AssignmentStatus.ACCEPTED,
        AssignmentStatus.IN_PROGRESS,
        AssignmentStatus.DECLINED,
    },
    AssignmentStatus.ACCEPTED: {AssignmentStatus.IN_PROGRESS, AssignmentStatus.DECLINED},
    AssignmentStatus.IN_PROGRESS: {AssignmentStatus.COMPLETED},
    AssignmentStatus.COMPLETED: set(),
    AssignmentStatus.DECLINED: set(),
}

OPEN_ASSIGNMENT_STATUSES = frozenset({
    AssignmentStatus.ASSIGNED,
    AssignmentStatus.ACCEPTED,
    AssignmentStatus.IN_PROGRESS,
})

assignment_workflow = TransitionTable("Assignment", ASSIGNMENT_TRANSITIONS)


def advance_assignment(
    assignment: Assignment,
    target: Union[AssignmentStatus, str],
    caller_volunteer_id: Optional[str],
    actor_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> StateTransition:
    """Apply the owning volunteer's status update in place"""
    if caller_volunteer_id is None or str(assignment.volunteer_id) != str(caller_volunteer_id):
        raise RecordAccessDeniedError(
            "Assignment",
            str(assignment.id),
            "Assignment does not belong to this volunteer",
        )

    target = parse_status(AssignmentStatus, target)
    current = AssignmentStatus(assignment.status)
    assignment_workflow.ensure(current, target)

    now = now or datetime.utcnow()
    assignment.status = target
    assignment.updated_at = now
    if target is AssignmentStatus.COMPLETED:
        assignment.completed_at = now

    return assignment_workflow.record(assignment.id, current, target, actor_id=actor_id, timestamp=now)
