from pydantic import Field
from typing import Optional
from datetime import datetime

from app.schemas.base import CamelModel


class HeroBannerBase(CamelModel):
    title_en: str = Field(..., min_length=1, max_length=255)
    title_or: Optional[str] = Field(None, max_length=255)
    subtitle_en: Optional[str] = None
    subtitle_or: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    button_text: Optional[str] = Field(None, max_length=100)
    button_link: Optional[str] = Field(None, max_length=500)
    display_order: int = 0
    is_active: bool = True


class HeroBannerCreate(HeroBannerBase):
    pass


class HeroBannerUpdate(CamelModel):
    title_en: Optional[str] = Field(None, min_length=1, max_length=255)
    title_or: Optional[str] = Field(None, max_length=255)
    subtitle_en: Optional[str] = None
    subtitle_or: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    button_text: Optional[str] = Field(None, max_length=100)
    button_link: Optional[str] = Field(None, max_length=500)
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class HeroBannerResponse(HeroBannerBase):
    id: str
    updated_at: Optional[datetime] = None


class TranslationUpsert(CamelModel):
    key: str = Field(..., min_length=1, max_length=255)
    language: str = Field(..., pattern=r'^(en|or)$')
    value: str
    category: Optional[str] = Field(None, max_length=100)


class TranslationResponse(TranslationUpsert):
    id: str


class SiteSettingUpsert(CamelModel):
    value: Optional[str] = None
    description: Optional[str] = None


class SiteSettingResponse(CamelModel):
    id: str
    key: str
    value: Optional[str] = None
    description: Optional[str] = None
    updated_at: Optional[datetime] = None
