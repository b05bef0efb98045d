import re
import unicodedata
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.companies.models import Company
from brandkeeper.core.companies.schemas import CompanyCreate, CompanyUpdate
from brandkeeper.core.errors import Conflict, ValidationFailed
from brandkeeper.core.users.models import UserProfile

SLUG_TAKEN_MESSAGE = "El slug generado ya está en uso. Por favor, modifica el nombre de la empresa."

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def generate_slug(name: str) -> str:
    decomposed = unicodedata.normalize("NFD", name.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM.sub("-", stripped).strip("-")


async def list_companies(db: AsyncSession) -> list[Company]:
    result = await db.execute(select(Company).order_by(Company.is_parent.desc(), Company.name))
    return list(result.scalars().all())


async def get_company(db: AsyncSession, company_id: uuid.UUID) -> Company | None:
    return await db.get(Company, company_id)


async def get_parent_company(db: AsyncSession) -> Company | None:
    result = await db.execute(select(Company).where(Company.is_parent == True))
    return result.scalar_one_or_none()


async def is_slug_available(db: AsyncSession, slug: str, exclude_id: uuid.UUID | None = None) -> bool:
    query = select(Company.id).where(Company.slug == slug)
    if exclude_id:
        query = query.where(Company.id != exclude_id)
    result = await db.execute(query.limit(1))
    return result.first() is None


async def _unique_slug(db: AsyncSession, name: str, exclude_id: uuid.UUID | None = None) -> str:
    slug = generate_slug(name)
    if not slug:
        raise ValidationFailed(details=[{"path": ["name"], "message": "El nombre debe contener letras o números", "code": "slug_empty"}])
    if not await is_slug_available(db, slug, exclude_id):
        raise Conflict(SLUG_TAKEN_MESSAGE)
    return slug


async def create_company(db: AsyncSession, data: CompanyCreate) -> Company:
    parent = await get_parent_company(db)
    if not parent:
        raise ValidationFailed("No se encontró la empresa matriz")

    company = Company(
        slug=await _unique_slug(db, data.name),
        is_parent=False,
        parent_company_id=parent.id,
        **data.model_dump(),
    )
    db.add(company)
    await db.flush()
    await db.refresh(company)
    return company


async def update_company(db: AsyncSession, company: Company, data: CompanyUpdate) -> Company:
    if company.is_parent:
        raise ValidationFailed("No se puede editar la empresa matriz")

    changes = data.model_dump(exclude_unset=True)
    if changes.get("name") is None:
        changes.pop("name", None)
    elif changes["name"] != company.name:
        slug = generate_slug(changes["name"])
        if slug != company.slug:
            changes["slug"] = await _unique_slug(db, changes["name"], exclude_id=company.id)

    for field, value in changes.items():
        setattr(company, field, value)
    await db.flush()
    await db.refresh(company)
    return company


async def has_users(db: AsyncSession, company_id: uuid.UUID) -> bool:
    result = await db.execute(select(UserProfile.id).where(UserProfile.company_id == company_id).limit(1))
    return result.first() is not None


async def delete_company(db: AsyncSession, company: Company) -> None:
    if company.is_parent or await has_users(db, company.id):
        raise ValidationFailed(
            "No se puede eliminar la empresa. Verifica que no sea la empresa matriz y que no tenga usuarios asociados."
        )
    await db.delete(company)
    await db.flush()
