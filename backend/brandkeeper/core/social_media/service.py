import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.companies import service as companies_service
from brandkeeper.core.errors import NotFound
from brandkeeper.core.policy import Action, Resource, ResourceKind, Subject, authorize
from brandkeeper.core.social_media.models import CompanySocialMedia
from brandkeeper.core.social_media.platforms import SocialMediaType
from brandkeeper.core.social_media.schemas import SocialMediaItem


def _resource(company_id: uuid.UUID) -> Resource:
    return Resource(kind=ResourceKind.SOCIAL_MEDIA, company_id=company_id)


async def _rows(db: AsyncSession, company_id: uuid.UUID) -> list[CompanySocialMedia]:
    result = await db.execute(select(CompanySocialMedia).where(CompanySocialMedia.company_id == company_id))
    return list(result.scalars().all())


async def list_social_media(db: AsyncSession, subject: Subject, company_id: uuid.UUID) -> list[CompanySocialMedia]:
    authorize(subject, Action.READ, _resource(company_id))
    result = await db.execute(
        select(CompanySocialMedia)
        .where(CompanySocialMedia.company_id == company_id, CompanySocialMedia.is_active == True)
        .order_by(CompanySocialMedia.type)
    )
    return list(result.scalars().all())


async def replace_social_media(
    db: AsyncSession, subject: Subject, company_id: uuid.UUID, items: list[SocialMediaItem],
) -> list[CompanySocialMedia]:
    """
    Bulk update for one company.

    Items with a blank url are dropped; active rows whose type is missing from
    the request are deactivated; the rest are created or reactivated in place.
    """
    authorize(subject, Action.UPDATE, _resource(company_id))
    if not await companies_service.get_company(db, company_id):
        raise NotFound("Empresa no encontrada")

    wanted: dict[SocialMediaType, str] = {item.type: item.url for item in items if item.url}
    existing = {SocialMediaType(row.type): row for row in await _rows(db, company_id)}

    for type_, row in existing.items():
        if type_ not in wanted and row.is_active:
            row.is_active = False

    saved: list[CompanySocialMedia] = []
    for type_, url in wanted.items():
        row = existing.get(type_)
        if row is None:
            row = CompanySocialMedia(company_id=company_id, type=type_.value, url=url, is_active=True)
            db.add(row)
        else:
            row.url = url
            row.is_active = True
        saved.append(row)

    await db.flush()
    return sorted(saved, key=lambda row: row.type)
