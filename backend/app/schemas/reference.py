from typing import Optional

from app.schemas.base import CamelModel


class DistrictResponse(CamelModel):
    id: str
    name: str
    code: str
    state: str
    region: Optional[str] = None


class DepartmentResponse(CamelModel):
    id: str
    name: str
    description: Optional[str] = None
