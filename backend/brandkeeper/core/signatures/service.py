import uuid

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.brand import service as brand_service
from brandkeeper.core.companies import service as companies_service
from brandkeeper.core.errors import NotFound, ValidationFailed
from brandkeeper.core.policy import Action, Resource, ResourceKind, Subject, UserRole, authorize
from brandkeeper.core.signatures.models import EmailSignatureTemplate
from brandkeeper.core.signatures.render import CompanyBrand, SignatureValues, render_signature
from brandkeeper.core.signatures.schemas import RenderRequest, TemplateCreate, TemplateUpdate

NOT_FOUND_MESSAGE = "Plantilla no encontrada"
GLOBAL_REQUIRES_PARENT = "Solo la empresa matriz puede crear plantillas globales"


def as_resource(template: EmailSignatureTemplate) -> Resource:
    return Resource(
        kind=ResourceKind.EMAIL_TEMPLATE,
        company_id=template.company_id,
        is_global=template.is_global,
        is_active=template.is_active,
    )


async def list_templates(db: AsyncSession, subject: Subject, include_inactive: bool = False) -> list[EmailSignatureTemplate]:
    query = select(EmailSignatureTemplate)
    if subject.role is UserRole.COLLABORATOR or not include_inactive:
        query = query.where(EmailSignatureTemplate.is_active == True)
    if subject.role is not UserRole.SUPER_ADMIN:
        query = query.where(or_(
            EmailSignatureTemplate.company_id == subject.company_id,
            EmailSignatureTemplate.is_global == True,
        ))
    result = await db.execute(query.order_by(EmailSignatureTemplate.is_global.desc(), EmailSignatureTemplate.name))
    return list(result.scalars().all())


async def get_template(db: AsyncSession, template_id: uuid.UUID) -> EmailSignatureTemplate | None:
    return await db.get(EmailSignatureTemplate, template_id)


async def get_visible(db: AsyncSession, subject: Subject, template_id: uuid.UUID) -> EmailSignatureTemplate:
    template = await get_template(db, template_id)
    if not template:
        raise NotFound(NOT_FOUND_MESSAGE)
    authorize(subject, Action.READ, as_resource(template))
    return template


async def _ensure_parent(db: AsyncSession, company_id: uuid.UUID) -> None:
    company = await companies_service.get_company(db, company_id)
    if not company or not company.is_parent:
        raise ValidationFailed(GLOBAL_REQUIRES_PARENT)


async def create_template(db: AsyncSession, subject: Subject, data: TemplateCreate) -> EmailSignatureTemplate:
    authorize(
        subject, Action.CREATE,
        Resource(kind=ResourceKind.EMAIL_TEMPLATE, company_id=data.company_id, is_global=data.is_global),
        "Solo puedes crear plantillas para tu empresa",
    )
    if data.is_global:
        await _ensure_parent(db, data.company_id)
    elif not await companies_service.get_company(db, data.company_id):
        raise ValidationFailed(details=[{"path": ["company_id"], "message": "La empresa seleccionada no es válida", "code": "invalid_company"}])

    template = EmailSignatureTemplate(**data.model_dump(exclude={"template_type"}), template_type=data.template_type.value)
    db.add(template)
    await db.flush()
    await db.refresh(template)
    return template


async def update_template(
    db: AsyncSession, subject: Subject, template: EmailSignatureTemplate, data: TemplateUpdate,
) -> EmailSignatureTemplate:
    authorize(subject, Action.UPDATE, as_resource(template), "No tienes permisos para actualizar esta plantilla")

    changes = data.model_dump(exclude_unset=True)
    for field in ("name", "template_type", "html_content", "is_global", "is_active"):
        if field in changes and changes[field] is None:
            changes.pop(field)
    if "is_global" in changes and changes["is_global"] != template.is_global:
        authorize(
            subject, Action.UPDATE,
            Resource(kind=ResourceKind.EMAIL_TEMPLATE, company_id=template.company_id, is_global=changes["is_global"]),
            "No tienes permisos para actualizar esta plantilla",
        )
    if changes.get("is_global"):
        await _ensure_parent(db, template.company_id)
    if "template_type" in changes:
        changes["template_type"] = changes["template_type"].value

    for field, value in changes.items():
        setattr(template, field, value)
    await db.flush()
    await db.refresh(template)
    return template


async def delete_template(db: AsyncSession, subject: Subject, template: EmailSignatureTemplate) -> None:
    authorize(subject, Action.DELETE, as_resource(template), "No tienes permisos para eliminar esta plantilla")
    await db.delete(template)
    await db.flush()


async def company_brand(db: AsyncSession, subject: Subject) -> CompanyBrand:
    company = await companies_service.get_company(db, subject.company_id)
    if not company:
        return CompanyBrand()
    logo_url = company.logo_url
    if not logo_url:
        settings = await brand_service.get_for_company(db, subject, company.id)
        logo_url = settings.logo_url if settings else None
    return CompanyBrand(name=company.name, logo_url=logo_url, website=company.website)


async def render_for(db: AsyncSession, subject: Subject, template: EmailSignatureTemplate, data: RenderRequest) -> str:
    values = SignatureValues(
        full_name=data.full_name,
        position=data.position,
        phone=data.phone,
        phone_extension=data.phone_extension,
        email=data.email,
        website=data.website or "",
        photo_url=data.photo_url or "",
    )
    return render_signature(template.html_content, values, await company_brand(db, subject))
