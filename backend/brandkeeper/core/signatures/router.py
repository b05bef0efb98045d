import uuid
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.audit.service import audit
from brandkeeper.core.errors import NotFound
from brandkeeper.core.policy import is_admin_or_above
from brandkeeper.core.responses import Envelope, MessageOnly, ok
from brandkeeper.core.signatures import service
from brandkeeper.core.signatures.schemas import RenderRead, RenderRequest, TemplateCreate, TemplateRead, TemplateUpdate
from brandkeeper.dependencies import CurrentUser, get_current_user, get_db, require_admin

router = APIRouter(prefix="/email-signatures", tags=["email signatures"])


async def _get_or_404(db: AsyncSession, template_id: uuid.UUID):
    template = await service.get_template(db, template_id)
    if not template:
        raise NotFound(service.NOT_FOUND_MESSAGE)
    return template


@router.get("", response_model=Envelope[list[TemplateRead]])
async def list_templates(
    include_inactive: bool = Query(False, alias="includeInactive"),
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    include_inactive = include_inactive and is_admin_or_above(current.role)
    return ok(await service.list_templates(db, current.subject, include_inactive))


@router.post("", response_model=Envelope[TemplateRead], status_code=201)
async def create_template(
    data: TemplateCreate,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(require_admin),
):
    template = await service.create_template(db, current.subject, data)
    await audit(db, current.subject, action="email_template.create", resource_type="email_template", resource_id=str(template.id))
    return ok(template, "Plantilla creada correctamente")


@router.get("/{template_id}", response_model=Envelope[TemplateRead])
async def get_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    return ok(await service.get_visible(db, current.subject, template_id))


@router.put("/{template_id}", response_model=Envelope[TemplateRead])
async def update_template(
    template_id: uuid.UUID,
    data: TemplateUpdate,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(require_admin),
):
    template = await _get_or_404(db, template_id)
    template = await service.update_template(db, current.subject, template, data)
    await audit(db, current.subject, action="email_template.update", resource_type="email_template", resource_id=str(template.id))
    return ok(template, "Plantilla actualizada correctamente")


@router.delete("/{template_id}", response_model=MessageOnly)
async def delete_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(require_admin),
):
    template = await _get_or_404(db, template_id)
    await service.delete_template(db, current.subject, template)
    await audit(db, current.subject, action="email_template.delete", resource_type="email_template", resource_id=str(template_id))
    return {"success": True, "message": "Plantilla eliminada correctamente"}


@router.post("/{template_id}/render", response_model=Envelope[RenderRead])
async def render_template(
    template_id: uuid.UUID,
    data: RenderRequest,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    template = await service.get_visible(db, current.subject, template_id)
    html = await service.render_for(db, current.subject, template, data)
    return ok({"template_id": template.id, "html": html})
