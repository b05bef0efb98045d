import uuid

from fastapi import UploadFile
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.brand.models import LOGO_VARIANT_KEYS, BrandSettings
from brandkeeper.core.brand.schemas import BrandSettingsCreate, BrandSettingsUpdate, LogoVariants
from brandkeeper.core.companies import service as companies_service
from brandkeeper.core.errors import Conflict, NotFound, ValidationFailed
from brandkeeper.core.files import service as files_service
from brandkeeper.core.files.models import StoredFile
from brandkeeper.core.files.storage import LocalStorage
from brandkeeper.core.policy import Action, Resource, ResourceKind, Subject, UserRole, authorize

NOT_FOUND_MESSAGE = "No se encontró la configuración de marca"
REQUIRED_ON_UPDATE = ("primary_color", "font_family")


def as_resource(settings: BrandSettings) -> Resource:
    return Resource(kind=ResourceKind.BRAND_SETTINGS, company_id=settings.company_id, is_global=settings.is_global)


def _variants(variants: LogoVariants | None) -> dict:
    if variants is None:
        return {}
    dumped = variants.model_dump()
    return {key: dumped[key] for key in LOGO_VARIANT_KEYS}


async def list_brand_settings(db: AsyncSession, subject: Subject) -> list[BrandSettings]:
    query = select(BrandSettings)
    if subject.role is UserRole.ADMIN:
        query = query.where(BrandSettings.company_id == subject.company_id, BrandSettings.is_global == False)
    elif subject.role is UserRole.COLLABORATOR:
        query = query.where(or_(BrandSettings.company_id == subject.company_id, BrandSettings.is_global == True))
    result = await db.execute(query.order_by(BrandSettings.created_at.desc()))
    return list(result.scalars().all())


async def get_brand_settings(db: AsyncSession, settings_id: uuid.UUID) -> BrandSettings | None:
    return await db.get(BrandSettings, settings_id)


async def get_visible(db: AsyncSession, subject: Subject, settings_id: uuid.UUID) -> BrandSettings:
    settings = await get_brand_settings(db, settings_id)
    if not settings:
        raise NotFound(NOT_FOUND_MESSAGE)
    authorize(subject, Action.READ, as_resource(settings))
    return settings


async def get_for_company(db: AsyncSession, subject: Subject, company_id: uuid.UUID) -> BrandSettings | None:
    """The company's own row, else the parent company's global row."""
    authorize(subject, Action.READ, Resource(kind=ResourceKind.BRAND_SETTINGS, company_id=company_id))

    result = await db.execute(
        select(BrandSettings).where(BrandSettings.company_id == company_id, BrandSettings.is_global == False)
    )
    own = result.scalars().first()
    if own:
        return own

    parent = await companies_service.get_parent_company(db)
    if not parent:
        return None
    result = await db.execute(
        select(BrandSettings).where(BrandSettings.company_id == parent.id, BrandSettings.is_global == True)
    )
    return result.scalars().first()


async def _ensure_slot_free(db: AsyncSession, company_id: uuid.UUID, is_global: bool) -> None:
    query = select(BrandSettings.id).where(BrandSettings.is_global == is_global)
    if not is_global:
        query = query.where(BrandSettings.company_id == company_id)
    result = await db.execute(query.limit(1))
    if result.first() is not None:
        if is_global:
            raise Conflict("Ya existe una configuración de marca global")
        raise Conflict("La empresa ya tiene una configuración de marca")


async def create_brand_settings(db: AsyncSession, subject: Subject, data: BrandSettingsCreate) -> BrandSettings:
    authorize(
        subject, Action.CREATE,
        Resource(kind=ResourceKind.BRAND_SETTINGS, company_id=data.company_id, is_global=data.is_global),
    )

    company = await companies_service.get_company(db, data.company_id)
    if not company:
        raise ValidationFailed(details=[{"path": ["company_id"], "message": "La empresa seleccionada no es válida", "code": "invalid_company"}])
    if data.is_global and not company.is_parent:
        raise ValidationFailed("Solo la empresa matriz puede crear configuraciones globales")
    await _ensure_slot_free(db, data.company_id, data.is_global)

    settings = BrandSettings(**data.model_dump(exclude={"logo_variants"}), logo_variants=_variants(data.logo_variants))
    db.add(settings)
    await db.flush()
    await db.refresh(settings)
    return settings


async def update_brand_settings(
    db: AsyncSession, subject: Subject, settings: BrandSettings, data: BrandSettingsUpdate,
) -> BrandSettings:
    authorize(subject, Action.UPDATE, as_resource(settings))

    changes = data.model_dump(exclude_unset=True, exclude={"logo_variants"})
    for field in REQUIRED_ON_UPDATE:
        if field in changes and changes[field] is None:
            changes.pop(field)
    if "logo_variants" in data.model_fields_set:
        changes["logo_variants"] = _variants(data.logo_variants)

    for field, value in changes.items():
        setattr(settings, field, value)
    await db.flush()
    await db.refresh(settings)
    return settings


async def delete_brand_settings(db: AsyncSession, subject: Subject, settings: BrandSettings) -> None:
    authorize(subject, Action.DELETE, as_resource(settings))
    await db.delete(settings)
    await db.flush()


async def replace_logo(
    db: AsyncSession,
    storage: LocalStorage,
    subject: Subject,
    settings: BrandSettings,
    upload: UploadFile | None,
    max_bytes: int,
) -> tuple[BrandSettings, StoredFile]:
    authorize(subject, Action.UPDATE, as_resource(settings))

    data = await files_service.read_upload(
        upload,
        max_bytes=max_bytes,
        allowed_types=files_service.LOGO_CONTENT_TYPES,
        type_message="El archivo debe ser una imagen (PNG, JPG o SVG)",
    )
    stored = await files_service.store_upload(
        db, storage, subject, upload, data,
        company_id=settings.company_id, folder="brand-logos", prefix="logo", purpose="brand_logo",
    )
    if settings.logo_url and settings.logo_url != stored.public_url:
        await files_service.discard(db, storage, settings.logo_url)

    settings.logo_url = stored.public_url
    await db.flush()
    await db.refresh(settings)
    return settings, stored
