"""Volunteer application review: pending -> approved | rejected"""

from datetime import datetime
from typing import Optional, Union

from app.core.exceptions import (
    AlreadyDecidedError,
    MissingCapabilityError,
    RejectionReasonRequiredError,
    ValidationError,
)
from app.models.volunteer import Volunteer, VolunteerStatus
from app.modules.auth.permissions import RolePermissions
from app.modules.workflows.state_machine import StateTransition, TransitionTable, parse_status


VOLUNTEER_TRANSITIONS = {
    VolunteerStatus.PENDING: {VolunteerStatus.APPROVED, VolunteerStatus.REJECTED},
    VolunteerStatus.APPROVED: set(),
    VolunteerStatus.REJECTED: set(),
}

volunteer_workflow = TransitionTable("Volunteer", VOLUNTEER_TRANSITIONS)


def decide_application(
    volunteer: Volunteer,
    target: Union[VolunteerStatus, str],
    reviewer_id: str,
    permissions: RolePermissions,
    rejection_reason: Optional[str] = None,
    now: Optional[datetime] = None,
) -> StateTransition:
    """
    Approve or reject a pending application in place.

    Checks run in order: reviewer capability, target value, rejection
    reason, then current status. A decided application can never be
    re-decided.
    """
    if not permissions.can_approve_volunteers:
        raise MissingCapabilityError("can_approve_volunteers")

    target = parse_status(VolunteerStatus, target)
    if target is VolunteerStatus.PENDING:
        raise ValidationError("Status must be 'approved' or 'rejected'", field="status")

    reason = None
    if target is VolunteerStatus.REJECTED:
        reason = (rejection_reason or "").strip()
        if not reason:
            raise RejectionReasonRequiredError()

    current = VolunteerStatus(volunteer.status)
    if current is not VolunteerStatus.PENDING:
        raise AlreadyDecidedError(str(volunteer.id), current.value, target.value)
    volunteer_workflow.ensure(current, target)

    now = now or datetime.utcnow()
    volunteer.status = target
    volunteer.updated_at = now
    if target is VolunteerStatus.APPROVED:
        volunteer.approved_by = reviewer_id
        volunteer.approved_at = now
        volunteer.rejection_reason = None
    else:
        volunteer.rejection_reason = reason

    transition = volunteer_workflow.record(volunteer.id, current, target, actor_id=reviewer_id, timestamp=now)
    transition.reason = reason
    return transition
