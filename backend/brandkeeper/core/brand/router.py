import uuid
from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.audit.service import audit
from brandkeeper.core.brand import service
from brandkeeper.core.brand.schemas import BrandSettingsCreate, BrandSettingsRead, BrandSettingsUpdate, LogoUploadRead
from brandkeeper.core.errors import NotFound
from brandkeeper.core.files.storage import LocalStorage
from brandkeeper.core.responses import Envelope, MessageOnly, ok
from brandkeeper.dependencies import CurrentUser, get_current_user, get_db, require_admin
from brandkeeper.settings import Settings, get_settings

router = APIRouter(prefix="/brand-settings", tags=["brand settings"])


async def _get_or_404(db: AsyncSession, settings_id: uuid.UUID):
    settings = await service.get_brand_settings(db, settings_id)
    if not settings:
        raise NotFound(service.NOT_FOUND_MESSAGE)
    return settings


@router.get("", response_model=Envelope[list[BrandSettingsRead]])
async def list_brand_settings(db: AsyncSession = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    return ok(await service.list_brand_settings(db, current.subject))


@router.post("", response_model=Envelope[BrandSettingsRead], status_code=201)
async def create_brand_settings(
    data: BrandSettingsCreate,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(require_admin),
):
    settings = await service.create_brand_settings(db, current.subject, data)
    await audit(db, current.subject, action="brand_settings.create", resource_type="brand_settings", resource_id=str(settings.id))
    return ok(settings, "Configuración de marca creada correctamente")


@router.get("/company/{company_id}", response_model=Envelope[BrandSettingsRead])
async def get_company_brand_settings(
    company_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    settings = await service.get_for_company(db, current.subject, company_id)
    if not settings:
        return ok(None, "No se encontró configuración de marca para esta empresa")
    return ok(settings)


@router.get("/{settings_id}", response_model=Envelope[BrandSettingsRead])
async def get_brand_settings(
    settings_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    return ok(await service.get_visible(db, current.subject, settings_id))


@router.put("/{settings_id}", response_model=Envelope[BrandSettingsRead])
async def update_brand_settings(
    settings_id: uuid.UUID,
    data: BrandSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(require_admin),
):
    settings = await _get_or_404(db, settings_id)
    settings = await service.update_brand_settings(db, current.subject, settings, data)
    await audit(db, current.subject, action="brand_settings.update", resource_type="brand_settings", resource_id=str(settings.id))
    return ok(settings, "Configuración de marca actualizada correctamente")


@router.delete("/{settings_id}", response_model=MessageOnly)
async def delete_brand_settings(
    settings_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(require_admin),
):
    settings = await _get_or_404(db, settings_id)
    await service.delete_brand_settings(db, current.subject, settings)
    await audit(db, current.subject, action="brand_settings.delete", resource_type="brand_settings", resource_id=str(settings_id))
    return {"success": True, "message": "Configuración de marca eliminada correctamente"}


@router.post("/{settings_id}/logo", response_model=Envelope[LogoUploadRead])
async def upload_logo(
    settings_id: uuid.UUID,
    file: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    app_settings: Settings = Depends(get_settings),
    current: CurrentUser = Depends(require_admin),
):
    settings = await _get_or_404(db, settings_id)
    settings, stored = await service.replace_logo(
        db, LocalStorage.from_settings(app_settings), current.subject, settings, file, app_settings.MAX_UPLOAD_BYTES,
    )
    await audit(db, current.subject, action="brand_settings.logo", resource_type="brand_settings", resource_id=str(settings.id))
    return ok(
        {"logo_url": stored.public_url, "path": stored.storage_path, "brand_settings": settings},
        "Logo actualizado correctamente",
    )
