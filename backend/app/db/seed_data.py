"""
Database Seed Data Module

Reference districts and departments, one demo login per role, and the
default site content. Every step skips rows that already exist, so the
seeder can be re-run safely.

Run with: python -m app.db.seed_data
"""
import asyncio
from typing import List

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.database import AsyncSessionLocal, init_db
from app.core.security import get_password_hash
from app.db.reference_data import DEPARTMENTS, ODISHA_DISTRICTS
from app.models.cms import HeroBanner, SiteSetting
from app.models.reference import Department, District
from app.models.user import User, UserRole


# ==================== Sample Data Constants ====================

DEMO_USERS = [
    {"username": "volunteer1", "password": "volunteer123", "first_name": "John", "last_name": "Volunteer",
     "email": "volunteer@example.com", "role": UserRole.VOLUNTEER, "district": "Khordha"},
    {"username": "district_admin", "password": "district123", "first_name": "District", "last_name": "Administrator",
     "email": "district.admin@odisha.gov.in", "role": UserRole.DISTRICT_ADMIN, "district": "Khordha"},
    {"username": "dept_admin", "password": "department123", "first_name": "Department", "last_name": "Administrator",
     "email": "dept.admin@odisha.gov.in", "role": UserRole.DEPARTMENT_ADMIN, "district": None},
    {"username": "state_admin", "password": "state123", "first_name": "State", "last_name": "Administrator",
     "email": "state.admin@odisha.gov.in", "role": UserRole.STATE_ADMIN, "district": None},
    {"username": "cms_manager", "password": "cms123", "first_name": "Content", "last_name": "Manager",
     "email": "cms@odisha.gov.in", "role": UserRole.CMS_MANAGER, "district": None},
]

DEFAULT_SITE_SETTINGS = [
    ("site_title", "Civil Defence Volunteer Portal", "Title shown in the public header"),
    ("helpline_number", "1077", "Disaster helpline displayed on the landing page"),
    ("contact_email", "civildefence@odisha.gov.in", "Public contact address"),
    ("default_language", "en", "Language used when the visitor has not chosen one"),
]

DEFAULT_BANNERS = [
    {
        "title_en": "Serve your community",
        "title_or": "ଆପଣଙ୍କ ସମାଜର ସେବା କରନ୍ତୁ",
        "subtitle_en": f"Join the {settings.STATE_NAME} Civil Defence volunteer corps",
        "button_text": "Register",
        "button_link": "/volunteer/register",
        "display_order": 0,
    },
]


async def seed_districts(db: AsyncSession) -> List[District]:
    """Create the district lookup table"""
    existing = set((await db.execute(select(District.code))).scalars().all())
    districts = []
    for name, code, region in ODISHA_DISTRICTS:
        if code in existing:
            continue
        district = District(name=name, code=code, state=settings.STATE_NAME, region=region)
        db.add(district)
        districts.append(district)

    print(f"Created {len(districts)} districts")
    return districts


async def seed_departments(db: AsyncSession) -> List[Department]:
    existing = set((await db.execute(select(Department.name))).scalars().all())
    departments = []
    for name, description in DEPARTMENTS:
        if name in existing:
            continue
        department = Department(name=name, description=description)
        db.add(department)
        departments.append(department)

    print(f"Created {len(departments)} departments")
    return departments


async def seed_users(db: AsyncSession) -> List[User]:
    """Create one demo account per role"""
    existing = set((await db.execute(select(User.username))).scalars().all())
    users = []
    for data in DEMO_USERS:
        if data["username"] in existing:
            print(f"User {data['username']} already exists, skipping...")
            continue
        values = {k: v for k, v in data.items() if k != "password"}
        user = User(hashed_password=get_password_hash(data["password"]), **values)
        db.add(user)
        users.append(user)

    print(f"Created {len(users)} users")
    return users


async def seed_site_content(db: AsyncSession) -> None:
    """Default site settings, plus a banner when none exist"""
    existing = set((await db.execute(select(SiteSetting.key))).scalars().all())
    created = 0
    for key, value, description in DEFAULT_SITE_SETTINGS:
        if key not in existing:
            db.add(SiteSetting(key=key, value=value, description=description))
            created += 1

    has_banner = (await db.execute(select(HeroBanner.id).limit(1))).first() is not None
    if not has_banner:
        for banner in DEFAULT_BANNERS:
            db.add(HeroBanner(**banner))

    print(f"Created {created} site settings")


async def seed_all():
    """Seed all reference and demo data"""
    print("=" * 50)
    print("Starting database seeding...")
    print("=" * 50)

    await init_db()

    async with AsyncSessionLocal() as db:
        try:
            await seed_districts(db)
            await seed_departments(db)
            await seed_users(db)
            await seed_site_content(db)

            await db.commit()
            print("=" * 50)
            print("Database seeding completed successfully!")
            print("=" * 50)

        except Exception as e:
            await db.rollback()
            print(f"Error seeding database: {e}")
            raise


async def clear_all():
    """Remove demo users and site content. Reference tables are kept."""
    print("Clearing demo data...")
    async with AsyncSessionLocal() as db:
        await db.execute(delete(User).where(User.username.in_([u["username"] for u in DEMO_USERS])))
        await db.execute(delete(HeroBanner))
        await db.execute(delete(SiteSetting))
        await db.commit()
        print("Demo data cleared!")


if __name__ == "__main__":
    import sys

    if len(sys.argv) > 1 and sys.argv[1] == "clear":
        asyncio.run(clear_all())
    else:
        asyncio.run(seed_all())
