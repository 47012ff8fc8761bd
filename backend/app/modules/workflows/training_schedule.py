"""Training session status and registration rules"""

from datetime import datetime
from typing import Any, Optional, Union

from app.core.exceptions import CapacityExceededError, DuplicateResourceError, StateConflictError
from app.models.training import RegistrationStatus, TrainingRegistration, TrainingSession, TrainingStatus
from app.modules.workflows.state_machine import StateTransition, TransitionTable, parse_status


TRAINING_TRANSITIONS = {
    TrainingStatus.SCHEDULED: {TrainingStatus.COMPLETED, TrainingStatus.CANCELLED},
    TrainingStatus.COMPLETED: set(),
    TrainingStatus.CANCELLED: set(),
}

training_workflow = TransitionTable("TrainingSession", TRAINING_TRANSITIONS)


def change_training_status(
    session: TrainingSession,
    target: Union[TrainingStatus, str],
    actor_id: str,
    now: Optional[datetime] = None,
) -> StateTransition:
    target = parse_status(TrainingStatus, target)
    current = TrainingStatus(session.status)
    training_workflow.ensure(current, target)

    now = now or datetime.utcnow()
    session.status = target
    session.updated_at = now
    return training_workflow.record(session.id, current, target, actor_id=actor_id, timestamp=now)


def is_upcoming(session: Any, now: Optional[datetime] = None) -> bool:
    """Scheduled and not yet started"""
    now = now or datetime.utcnow()
    status = session.get("status") if isinstance(session, dict) else session.status
    scheduled_at = session.get("scheduled_at") if isinstance(session, dict) else session.scheduled_at
    return status in (TrainingStatus.SCHEDULED, TrainingStatus.SCHEDULED.value) and scheduled_at > now


def is_open_to_district(session: TrainingSession, district: Optional[str]) -> bool:
    """Statewide sessions (no district) are open to every district"""
    return session.district is None or session.district == district


def ensure_can_register(
    session: TrainingSession,
    existing: Optional[TrainingRegistration],
    confirmed_count: int,
) -> None:
    """
    Validate a new registration.

    existing is the volunteer's previous registration for this session,
    if any; a cancelled one may be reactivated.
    """
    if TrainingStatus(session.status) is not TrainingStatus.SCHEDULED:
        raise StateConflictError(
            f"Training session is {TrainingStatus(session.status).value} and not open for registration",
            code="TRAINING_CLOSED",
        )

    if existing is not None and RegistrationStatus(existing.status) is not RegistrationStatus.CANCELLED:
        raise DuplicateResourceError("Already registered for this training session", field="trainingSessionId")

    if confirmed_count >= session.capacity:
        raise CapacityExceededError(str(session.id), session.capacity)
