import asyncio
import logging
import sys
from typing import TextIO

from sqlalchemy import select

from brandkeeper.core.auth.security import generate_random_password, hash_password
from brandkeeper.core.companies.models import Company
from brandkeeper.core.companies.service import generate_slug
from brandkeeper.core.countries.models import Country
from brandkeeper.core.policy import UserRole
from brandkeeper.core.users.models import UserProfile
from brandkeeper.db.session import get_session
from brandkeeper.logging_config import setup_logging
from brandkeeper.settings import Settings, get_settings

logger = logging.getLogger(__name__)

COUNTRIES = [
    ("Argentina", "AR", "América del Sur"),
    ("Bolivia", "BO", "América del Sur"),
    ("Brasil", "BR", "América del Sur"),
    ("Chile", "CL", "América del Sur"),
    ("Colombia", "CO", "América del Sur"),
    ("Ecuador", "EC", "América del Sur"),
    ("Paraguay", "PY", "América del Sur"),
    ("Perú", "PE", "América del Sur"),
    ("Uruguay", "UY", "América del Sur"),
    ("Venezuela", "VE", "América del Sur"),
    ("Costa Rica", "CR", "América Central"),
    ("El Salvador", "SV", "América Central"),
    ("Guatemala", "GT", "América Central"),
    ("Honduras", "HN", "América Central"),
    ("Nicaragua", "NI", "América Central"),
    ("Panamá", "PA", "América Central"),
    ("Cuba", "CU", "Caribe"),
    ("Puerto Rico", "PR", "Caribe"),
    ("República Dominicana", "DO", "Caribe"),
    ("Canadá", "CA", "América del Norte"),
    ("Estados Unidos", "US", "América del Norte"),
    ("México", "MX", "América del Norte"),
    ("Alemania", "DE", "Europa"),
    ("España", "ES", "Europa"),
    ("Francia", "FR", "Europa"),
    ("Italia", "IT", "Europa"),
    ("Portugal", "PT", "Europa"),
    ("Reino Unido", "GB", "Europa"),
]


async def seed_countries(db) -> int:
    existing = set((await db.execute(select(Country.code))).scalars().all())
    added = 0
    for name, code, region in COUNTRIES:
        if code in existing:
            continue
        db.add(Country(name=name, code=code, region=region))
        added += 1
    await db.flush()
    return added


def build_super_admin(company_id, settings: Settings, out: TextIO = sys.stdout) -> UserProfile:
    """A generated password is written to ``out`` once and never logged."""
    password = settings.SEED_ADMIN_PASSWORD
    if not password:
        password = generate_random_password()
        print(f"Generated password for {settings.SEED_ADMIN_EMAIL.lower()}: {password}", file=out)
    return UserProfile(
        company_id=company_id,
        email=settings.SEED_ADMIN_EMAIL.lower(),
        hashed_password=hash_password(password),
        full_name="Super Admin",
        role=UserRole.SUPER_ADMIN.value,
    )


async def seed() -> None:
    settings = get_settings()
    setup_logging(settings)
    parent_name = settings.SEED_PARENT_COMPANY_NAME
    admin_email = settings.SEED_ADMIN_EMAIL.lower()

    async with get_session() as db:
        parent = (await db.execute(select(Company).where(Company.is_parent == True))).scalar_one_or_none()
        if not parent:
            parent = Company(name=parent_name, slug=generate_slug(parent_name), is_parent=True)
            db.add(parent)
            await db.flush()
            logger.info("Parent company created: %s (%s)", parent.slug, parent.id)
        else:
            logger.info("Parent company exists: %s", parent.slug)

        user = (await db.execute(select(UserProfile).where(UserProfile.email == admin_email))).scalar_one_or_none()
        if not user:
            user = build_super_admin(parent.id, settings)
            db.add(user)
            await db.flush()
            logger.info("Super admin created: %s", user.email)
        else:
            logger.info("Super admin exists: %s", user.email)

        added = await seed_countries(db)
        logger.info("Countries added: %d", added)


if __name__ == "__main__":
    asyncio.run(seed())
