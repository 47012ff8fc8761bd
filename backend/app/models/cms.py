"""Editable public-site content: banners, translations, site settings"""
from sqlalchemy import Column, String, DateTime, Text, Integer, Boolean, UniqueConstraint
from datetime import datetime

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class HeroBanner(Base):
    """Landing page banner with English and Odia copy"""
    __tablename__ = "hero_banners"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    title_en = Column(String(255), nullable=False)
    title_or = Column(String(255), nullable=True)
    subtitle_en = Column(Text, nullable=True)
    subtitle_or = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    button_text = Column(String(100), nullable=True)
    button_link = Column(String(500), nullable=True)
    display_order = Column(Integer, default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Translation(Base):
    __tablename__ = "translations"

    __table_args__ = (
        UniqueConstraint('key', 'language', name='uq_translation_key_language'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    key = Column(String(255), nullable=False, index=True)
    language = Column(String(10), nullable=False)  # "en" or "or"
    value = Column(Text, nullable=False)
    category = Column(String(100), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class SiteSetting(Base):
    __tablename__ = "site_settings"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    key = Column(String(100), unique=True, nullable=False)
    value = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<SiteSetting {self.key}>"
