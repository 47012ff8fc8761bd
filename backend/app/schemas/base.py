"""Shared schema base: camelCase on the wire, snake_case in Python"""

from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    success: bool = True
    message: str


class Page(CamelModel, Generic[T]):
    items: List[T]
    total: int
