"""Role-based visibility filter for district-owned records"""

from typing import Any, Iterable, List, Mapping, Optional, TypeVar, Union

from app.models.user import UserRole
from app.modules.auth.permissions import Scope, get_role_permissions

T = TypeVar("T")


def record_district(record: Any) -> Optional[str]:
    """District of an ORM row, a dataclass-like object or a plain mapping"""
    if isinstance(record, Mapping):
        return record.get("district")
    return getattr(record, "district", None)


def scope_records(
    records: Iterable[T],
    role: Union[UserRole, str, None],
    user_district: Optional[str],
) -> List[T]:
    """
    Restrict records to what the role may see.

    State scope sees everything. District scope sees records whose district
    equals user_district exactly; a district user with no district sees
    nothing. Every other scope sees nothing. Input order is kept and the
    input is never modified.
    """
    scope = get_role_permissions(role).scope

    if scope is Scope.STATE:
        return list(records)

    if scope is Scope.DISTRICT and user_district:
        return [r for r in records if record_district(r) == user_district]

    return []


def is_visible(record: Any, role: Union[UserRole, str, None], user_district: Optional[str]) -> bool:
    """Single-record form of scope_records"""
    return bool(scope_records([record], role, user_district))
