"""
CMS Service - banners, translations and site settings for the public site

Settings are read from the database on every call; there is no
process-level settings cache to go stale.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List, Optional
import logging

from app.core.exceptions import ContentNotFoundError
from app.core.types import generate_uuid
from app.models.cms import HeroBanner, SiteSetting, Translation
from app.modules.auth.dependencies import RequestContext
from app.schemas.cms import HeroBannerCreate, HeroBannerUpdate, SiteSettingUpsert, TranslationUpsert
from app.services.audit_service import audit_service

logger = logging.getLogger(__name__)


class CMSService:
    """Service for editable site content"""

    REQUIRED_BANNER_FIELDS = frozenset({"title_en", "display_order", "is_active"})

    # ==================== BANNERS ====================

    async def list_banners(self, db: AsyncSession, include_inactive: bool = False) -> List[HeroBanner]:
        query = select(HeroBanner)
        if not include_inactive:
            query = query.where(HeroBanner.is_active.is_(True))
        result = await db.execute(query.order_by(HeroBanner.display_order, HeroBanner.created_at))
        return list(result.scalars().all())

    async def create_banner(self, db: AsyncSession, ctx: RequestContext, data: HeroBannerCreate) -> HeroBanner:
        ctx.require("can_manage_cms")
        banner = HeroBanner(id=generate_uuid(), **data.model_dump())
        db.add(banner)
        audit_service.record(db, "banner_created", "banner", target_id=banner.id, actor_id=ctx.user_id)
        await db.commit()
        await db.refresh(banner)
        return banner

    async def update_banner(self, db: AsyncSession, ctx: RequestContext, banner_id: str,
                            data: HeroBannerUpdate) -> HeroBanner:
        ctx.require("can_manage_cms")
        banner = await db.get(HeroBanner, banner_id)
        if banner is None:
            raise ContentNotFoundError("Banner", banner_id)

        changes = {
            k: v for k, v in data.model_dump(exclude_unset=True).items()
            if v is not None or k not in self.REQUIRED_BANNER_FIELDS
        }
        for field_name, value in changes.items():
            setattr(banner, field_name, value)
        audit_service.record(db, "banner_updated", "banner", target_id=banner.id, actor_id=ctx.user_id,
                             details={"fields": sorted(changes)})
        await db.commit()
        await db.refresh(banner)
        return banner

    async def delete_banner(self, db: AsyncSession, ctx: RequestContext, banner_id: str) -> None:
        ctx.require("can_manage_cms")
        banner = await db.get(HeroBanner, banner_id)
        if banner is None:
            raise ContentNotFoundError("Banner", banner_id)
        audit_service.record(db, "banner_deleted", "banner", target_id=banner.id, actor_id=ctx.user_id)
        await db.delete(banner)
        await db.commit()

    # ==================== TRANSLATIONS ====================

    async def list_translations(self, db: AsyncSession, language: Optional[str] = None,
                                category: Optional[str] = None) -> List[Translation]:
        query = select(Translation)
        if language:
            query = query.where(Translation.language == language)
        if category:
            query = query.where(Translation.category == category)
        result = await db.execute(query.order_by(Translation.key, Translation.language))
        return list(result.scalars().all())

    async def upsert_translation(self, db: AsyncSession, ctx: RequestContext, data: TranslationUpsert) -> Translation:
        """Create or replace the value for (key, language)"""
        ctx.require("can_manage_cms")
        result = await db.execute(
            select(Translation).where(Translation.key == data.key, Translation.language == data.language)
        )
        translation = result.scalar_one_or_none()
        if translation is None:
            translation = Translation(id=generate_uuid(), key=data.key, language=data.language)
            db.add(translation)
        translation.value = data.value
        translation.category = data.category

        audit_service.record(db, "translation_saved", "translation", target_id=translation.id,
                             actor_id=ctx.user_id, details={"key": data.key, "language": data.language})
        await db.commit()
        await db.refresh(translation)
        return translation

    async def delete_translation(self, db: AsyncSession, ctx: RequestContext, translation_id: str) -> None:
        ctx.require("can_manage_cms")
        translation = await db.get(Translation, translation_id)
        if translation is None:
            raise ContentNotFoundError("Translation", translation_id)
        audit_service.record(db, "translation_deleted", "translation", target_id=translation.id,
                             actor_id=ctx.user_id, details={"key": translation.key})
        await db.delete(translation)
        await db.commit()

    # ==================== SITE SETTINGS ====================

    async def list_settings(self, db: AsyncSession) -> List[SiteSetting]:
        result = await db.execute(select(SiteSetting).order_by(SiteSetting.key))
        return list(result.scalars().all())

    async def upsert_setting(self, db: AsyncSession, ctx: RequestContext, key: str,
                             data: SiteSettingUpsert) -> SiteSetting:
        ctx.require("can_manage_cms")
        result = await db.execute(select(SiteSetting).where(SiteSetting.key == key))
        setting = result.scalar_one_or_none()
        if setting is None:
            setting = SiteSetting(id=generate_uuid(), key=key)
            db.add(setting)
        setting.value = data.value
        if data.description is not None:
            setting.description = data.description

        audit_service.record(db, "setting_saved", "site_setting", target_id=setting.id,
                             actor_id=ctx.user_id, details={"key": key})
        await db.commit()
        await db.refresh(setting)

        logger.info(f"Site setting '{key}' updated")
        return setting


# Singleton instance
cms_service = CMSService()
