"""
Incident lifecycle.

    reported -> assigned -> in_progress -> resolved -> closed
    reported -> closed  (dismissed report)

Severity is not part of the lifecycle and is edited separately.
"""

from datetime import datetime
from typing import Any, Iterable, List, Optional, Union

from app.core.exceptions import ValidationError
from app.models.incident import Incident, IncidentStatus
from app.modules.workflows.state_machine import StateTransition, TransitionTable, parse_status


INCIDENT_TRANSITIONS = {
    IncidentStatus.REPORTED: {IncidentStatus.ASSIGNED, IncidentStatus.CLOSED},
    IncidentStatus.ASSIGNED: {IncidentStatus.IN_PROGRESS},
    IncidentStatus.IN_PROGRESS: {IncidentStatus.RESOLVED},
    IncidentStatus.RESOLVED: {IncidentStatus.CLOSED},
    IncidentStatus.CLOSED: set(),
}

ACTIVE_INCIDENT_STATUSES = frozenset({
    IncidentStatus.REPORTED,
    IncidentStatus.ASSIGNED,
    IncidentStatus.IN_PROGRESS,
})

# Statuses in which the responder list may not be empty
_STAFFED_STATUSES = frozenset({IncidentStatus.ASSIGNED, IncidentStatus.IN_PROGRESS})

incident_workflow = TransitionTable("Incident", INCIDENT_TRANSITIONS)


def _status_of(incident_or_status: Any) -> Optional[IncidentStatus]:
    if isinstance(incident_or_status, IncidentStatus):
        return incident_or_status
    if isinstance(incident_or_status, str):
        value = incident_or_status
    elif isinstance(incident_or_status, dict):
        value = incident_or_status.get("status")
    else:
        value = getattr(incident_or_status, "status", None)
    try:
        return IncidentStatus(value)
    except ValueError:
        return None


def is_active_incident(incident_or_status: Any) -> bool:
    """Whether an incident (row, mapping or bare status) still needs attention"""
    return _status_of(incident_or_status) in ACTIVE_INCIDENT_STATUSES


def advance_incident(
    incident: Incident,
    target: Union[IncidentStatus, str],
    actor_id: str,
    now: Optional[datetime] = None,
) -> StateTransition:
    """Move an incident one step along its lifecycle in place"""
    target = parse_status(IncidentStatus, target)
    current = IncidentStatus(incident.status)
    incident_workflow.ensure(current, target)

    if target is IncidentStatus.ASSIGNED and not incident.assigned_to:
        raise ValidationError("Assign at least one volunteer before marking the incident assigned",
                              field="assignedTo")

    now = now or datetime.utcnow()
    incident.status = target
    incident.updated_at = now
    if target is IncidentStatus.RESOLVED:
        incident.resolved_by = actor_id
        incident.resolved_at = now

    return incident_workflow.record(incident.id, current, target, actor_id=actor_id, timestamp=now)


def attach_responders(
    incident: Incident,
    volunteer_ids: Iterable[str],
    actor_id: str,
    now: Optional[datetime] = None,
) -> Optional[StateTransition]:
    """
    Replace the responder list.

    A reported incident that gains responders moves to assigned. Returns
    that transition, or None when the status did not change.
    """
    responders: List[str] = []
    for volunteer_id in volunteer_ids:
        volunteer_id = str(volunteer_id)
        if volunteer_id not in responders:
            responders.append(volunteer_id)

    current = IncidentStatus(incident.status)
    if not responders and current in _STAFFED_STATUSES:
        raise ValidationError("An assigned incident needs at least one responder", field="assignedTo")
    if current not in ACTIVE_INCIDENT_STATUSES and responders != list(incident.assigned_to or []):
        raise ValidationError(f"Responders cannot change on a {current.value} incident", field="assignedTo")

    incident.assigned_to = responders
    incident.updated_at = now or datetime.utcnow()

    if current is IncidentStatus.REPORTED and responders:
        return advance_incident(incident, IncidentStatus.ASSIGNED, actor_id, now=now)
    return None
