from typing import Any, Dict, Optional
from datetime import datetime

from app.schemas.base import CamelModel


class AuditLogResponse(CamelModel):
    id: str
    actor_id: Optional[str] = None
    action: str
    target_type: str
    target_id: Optional[str] = None
    district: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    ip_address: Optional[str] = None
    created_at: datetime
