import uuid
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.audit.service import audit
from brandkeeper.core.auth.security import generate_random_password
from brandkeeper.core.errors import NotFound, ValidationFailed
from brandkeeper.core.policy import UserRole
from brandkeeper.core.responses import Envelope, MessageOnly, ok
from brandkeeper.core.users import service
from brandkeeper.core.users.models import UserProfile
from brandkeeper.core.users.schemas import CredentialsResponse, UserCreate, UserRead, UserUpdate
from brandkeeper.dependencies import CurrentUser, get_db, require_roles
from brandkeeper.settings import Settings, get_settings

router = APIRouter(prefix="/users", tags=["users"])

USER_NOT_FOUND = "Usuario no encontrado"


async def _get_or_404(db: AsyncSession, user_id: uuid.UUID) -> UserProfile:
    user = await service.get_user(db, user_id)
    if not user:
        raise NotFound(USER_NOT_FOUND)
    return user


def _credentials_response(
    message: str,
    delivery: service.CredentialDelivery,
    password: str,
    settings: Settings,
    user: UserProfile | None = None,
) -> dict:
    if delivery.email_sent:
        message += " Se ha enviado un correo con las credenciales de acceso."
    else:
        message += f" No se pudo enviar el correo: {delivery.email_error or 'Error desconocido'}."
    body = {"success": True, "message": message, "data": user, "email_sent": delivery.email_sent}
    if not delivery.email_sent:
        body["email_error"] = delivery.email_error
        if settings.EXPOSE_PASSWORD_ON_EMAIL_FAILURE:
            body["password"] = password
    return body


@router.get("", response_model=Envelope[list[UserRead]])
async def list_users(
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_roles(UserRole.SUPER_ADMIN, message="No tienes permisos para ver usuarios.")),
):
    return ok(await service.list_users(db))


@router.post("", response_model=CredentialsResponse, status_code=201)
async def create_user(
    data: UserCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current: CurrentUser = Depends(require_roles(UserRole.SUPER_ADMIN, message="No tienes permisos para crear usuarios.")),
):
    password = generate_random_password(service.GENERATED_PASSWORD_LENGTH)
    user = await service.create_user(db, data, password)
    await audit(db, current.subject, action="user.create", resource_type="user", resource_id=str(user.id))
    delivery = await service.deliver_credentials(user, password)
    return _credentials_response("Usuario creado correctamente.", delivery, password, settings, user)


@router.get("/{user_id}", response_model=Envelope[UserRead])
async def get_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(require_roles(UserRole.SUPER_ADMIN, message="No tienes permisos para ver usuarios.")),
):
    return ok(await _get_or_404(db, user_id))


@router.put("/{user_id}", response_model=Envelope[UserRead])
async def update_user(
    user_id: uuid.UUID,
    data: UserUpdate,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(require_roles(UserRole.SUPER_ADMIN, message="No tienes permisos para actualizar usuarios.")),
):
    user = await _get_or_404(db, user_id)
    if user.id == current.user_id and data.is_active is False:
        raise ValidationFailed("No puedes desactivar tu propia cuenta")
    user = await service.update_user(db, user, data)
    await audit(db, current.subject, action="user.update", resource_type="user", resource_id=str(user.id))
    return ok(user, "Usuario actualizado correctamente")


@router.delete("/{user_id}", response_model=MessageOnly)
async def deactivate_user(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(require_roles(UserRole.SUPER_ADMIN, message="No tienes permisos para eliminar usuarios.")),
):
    if user_id == current.user_id:
        raise ValidationFailed("No puedes desactivar tu propia cuenta")
    user = await _get_or_404(db, user_id)
    await service.deactivate_user(db, user)
    await audit(db, current.subject, action="user.deactivate", resource_type="user", resource_id=str(user.id))
    return {"success": True, "message": "Usuario desactivado correctamente"}


@router.post("/{user_id}/resend-email", response_model=CredentialsResponse)
async def resend_welcome_email(
    user_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current: CurrentUser = Depends(require_roles(UserRole.SUPER_ADMIN, message="No tienes permisos para reenviar correos.")),
):
    user = await _get_or_404(db, user_id)
    password = await service.rotate_password(db, user)
    await audit(db, current.subject, action="user.rotate_password", resource_type="user", resource_id=str(user.id))
    delivery = await service.deliver_credentials(user, password)
    return _credentials_response("Contraseña restablecida correctamente.", delivery, password, settings)
