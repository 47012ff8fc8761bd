"""
Public site content. Reads are anonymous; writes need can_manage_cms.
"""
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from app.core.database import get_db
from app.modules.auth.dependencies import RequestContext, get_request_context, require_capability
from app.schemas.base import MessageResponse
from app.schemas.cms import (
    HeroBannerCreate,
    HeroBannerResponse,
    HeroBannerUpdate,
    SiteSettingResponse,
    SiteSettingUpsert,
    TranslationResponse,
    TranslationUpsert,
)
from app.services.cms_service import cms_service

router = APIRouter()


# ==================== Banners ====================

@router.get("/banners", response_model=List[HeroBannerResponse])
async def list_banners(db: AsyncSession = Depends(get_db)):
    """Active banners in display order"""
    return await cms_service.list_banners(db)


@router.get("/banners/all", response_model=List[HeroBannerResponse])
async def list_all_banners(
    ctx: RequestContext = Depends(require_capability("can_manage_cms")),
    db: AsyncSession = Depends(get_db)
):
    """Every banner, inactive ones included"""
    return await cms_service.list_banners(db, include_inactive=True)


@router.post("/banners", response_model=HeroBannerResponse, status_code=status.HTTP_201_CREATED)
async def create_banner(
    data: HeroBannerCreate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await cms_service.create_banner(db, ctx, data)


@router.patch("/banners/{banner_id}", response_model=HeroBannerResponse)
async def update_banner(
    banner_id: str,
    data: HeroBannerUpdate,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await cms_service.update_banner(db, ctx, banner_id, data)


@router.delete("/banners/{banner_id}", response_model=MessageResponse)
async def delete_banner(
    banner_id: str,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    await cms_service.delete_banner(db, ctx, banner_id)
    return {"message": "Banner deleted"}


# ==================== Translations ====================

@router.get("/translations", response_model=List[TranslationResponse])
async def list_translations(
    language: Optional[str] = None,
    category: Optional[str] = None,
    db: AsyncSession = Depends(get_db)
):
    return await cms_service.list_translations(db, language=language, category=category)


@router.put("/translations", response_model=TranslationResponse)
async def upsert_translation(
    data: TranslationUpsert,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    """Create or replace the text for a key in one language"""
    return await cms_service.upsert_translation(db, ctx, data)


@router.delete("/translations/{translation_id}", response_model=MessageResponse)
async def delete_translation(
    translation_id: str,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    await cms_service.delete_translation(db, ctx, translation_id)
    return {"message": "Translation deleted"}


# ==================== Settings ====================

@router.get("/settings", response_model=List[SiteSettingResponse])
async def list_settings(db: AsyncSession = Depends(get_db)):
    return await cms_service.list_settings(db)


@router.put("/settings/{key}", response_model=SiteSettingResponse)
async def upsert_setting(
    data: SiteSettingUpsert,
    key: str = Path(..., min_length=1, max_length=100),
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db)
):
    return await cms_service.upsert_setting(db, ctx, key, data)
