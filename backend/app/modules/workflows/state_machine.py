"""
Transition tables for the portal workflows.

Records carry their own status column, so the machines here are stateless:
they validate a (current, target) pair and describe the move. Callers
apply the change to the record and persist it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Set

from app.core.exceptions import InvalidTransitionError, ValidationError


@dataclass
class StateTransition:
    """Record of a status change applied to an entity"""
    entity: str
    entity_id: str
    from_state: str
    to_state: str
    actor_id: Optional[str] = None
    timestamp: datetime = field(default_factory=datetime.utcnow)
    reason: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entity": self.entity,
            "entity_id": self.entity_id,
            "from": self.from_state,
            "to": self.to_state,
            "actor_id": self.actor_id,
            "timestamp": self.timestamp.isoformat(),
            "reason": self.reason,
            "metadata": self.metadata,
        }


class TransitionTable:
    """Allowed moves between the members of one status enum"""

    def __init__(self, name: str, transitions: Mapping[Enum, Set[Enum]]):
        self.name = name
        self._transitions: Dict[Enum, FrozenSet[Enum]] = {
            state: frozenset(targets) for state, targets in transitions.items()
        }

    def allowed_from(self, state: Enum) -> FrozenSet[Enum]:
        return self._transitions.get(state, frozenset())

    def can_transition(self, current: Enum, target: Enum) -> bool:
        return target in self.allowed_from(current)

    def is_terminal(self, state: Enum) -> bool:
        return not self.allowed_from(state)

    def ensure(self, current: Enum, target: Enum) -> None:
        """Raise InvalidTransitionError unless current -> target is allowed"""
        if not self.can_transition(current, target):
            raise InvalidTransitionError(
                self.name,
                _value(current),
                _value(target),
                [_value(s) for s in self.allowed_from(current)],
            )

    def record(self, entity_id: Any, current: Enum, target: Enum, actor_id: Optional[str] = None,
               timestamp: Optional[datetime] = None, **metadata) -> StateTransition:
        return StateTransition(
            entity=self.name,
            entity_id=str(entity_id),
            from_state=_value(current),
            to_state=_value(target),
            actor_id=actor_id,
            timestamp=timestamp or datetime.utcnow(),
            metadata=metadata,
        )


def _value(state: Any) -> str:
    return state.value if isinstance(state, Enum) else str(state)


def parse_status(enum_cls, value: Any, field_name: str = "status"):
    """Coerce a request value to enum_cls, raising ValidationError when unknown"""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field_name} '{value}'. Expected one of: {allowed}", field=field_name)
