import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.audit.service import audit
from brandkeeper.core.companies import service
from brandkeeper.core.companies.schemas import CompanyCreate, CompanyRead, CompanyUpdate
from brandkeeper.core.errors import NotFound
from brandkeeper.core.policy import UserRole
from brandkeeper.core.responses import Envelope, MessageOnly, ok
from brandkeeper.dependencies import CurrentUser, get_db, require_roles

router = APIRouter(prefix="/companies", tags=["companies"])

COMPANY_NOT_FOUND = "Empresa no encontrada"


async def _get_or_404(db: AsyncSession, company_id: uuid.UUID):
    company = await service.get_company(db, company_id)
    if not company:
        raise NotFound(COMPANY_NOT_FOUND)
    return company


@router.get("", response_model=Envelope[list[CompanyRead]])
async def list_companies(
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_roles(UserRole.SUPER_ADMIN, message="No tienes permisos para ver empresas.")),
):
    return ok(await service.list_companies(db))


@router.post("", response_model=Envelope[CompanyRead], status_code=201)
async def create_company(
    data: CompanyCreate,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(require_roles(UserRole.SUPER_ADMIN, message="No tienes permisos para crear empresas.")),
):
    company = await service.create_company(db, data)
    await audit(db, current.subject, action="company.create", resource_type="company", resource_id=str(company.id))
    return ok(company, "Empresa creada correctamente")


@router.get("/{company_id}", response_model=Envelope[CompanyRead])
async def get_company(
    company_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_roles(UserRole.SUPER_ADMIN, message="No tienes permisos para ver empresas.")),
):
    return ok(await _get_or_404(db, company_id))


@router.put("/{company_id}", response_model=Envelope[CompanyRead])
async def update_company(
    company_id: uuid.UUID,
    data: CompanyUpdate,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(require_roles(UserRole.SUPER_ADMIN, message="No tienes permisos para actualizar empresas.")),
):
    company = await _get_or_404(db, company_id)
    company = await service.update_company(db, company, data)
    await audit(db, current.subject, action="company.update", resource_type="company", resource_id=str(company.id))
    return ok(company, "Empresa actualizada correctamente")


@router.delete("/{company_id}", response_model=MessageOnly)
async def delete_company(
    company_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(require_roles(UserRole.SUPER_ADMIN, message="No tienes permisos para eliminar empresas.")),
):
    company = await _get_or_404(db, company_id)
    await service.delete_company(db, company)
    await audit(db, current.subject, action="company.delete", resource_type="company", resource_id=str(company_id))
    return {"success": True, "message": "Empresa eliminada correctamente"}
