import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.audit.service import audit
from brandkeeper.core.errors import ValidationFailed
from brandkeeper.core.responses import Envelope, ok
from brandkeeper.core.social_media import service
from brandkeeper.core.social_media.schemas import SocialMediaRead, SocialMediaUpdate
from brandkeeper.core.validation import validate_input
from brandkeeper.dependencies import CurrentUser, get_current_user, get_db, require_admin

router = APIRouter(prefix="/companies/{company_id}/social-media", tags=["social media"])


@router.get("", response_model=Envelope[list[SocialMediaRead]])
async def list_social_media(
    company_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    rows = await service.list_social_media(db, current.subject, company_id)
    return ok(rows)


@router.put("", response_model=Envelope[list[SocialMediaRead]])
async def replace_social_media(
    company_id: uuid.UUID,
    body: Any = Body(None),
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(require_admin),
):
    result = validate_input(SocialMediaUpdate, body)
    if not result.ok:
        raise ValidationFailed(details=result.issues)

    rows = await service.replace_social_media(db, current.subject, company_id, result.value.social_media)
    await audit(
        db, current.subject, action="social_media.update", resource_type="company", resource_id=str(company_id),
        detail={"types": [row.type for row in rows]},
    )
    return ok(rows, "Redes sociales actualizadas correctamente")
