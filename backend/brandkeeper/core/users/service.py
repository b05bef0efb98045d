import logging
import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.auth import service as auth_service
from brandkeeper.core.auth.security import generate_random_password, hash_password
from brandkeeper.core.companies.models import Company
from brandkeeper.core.errors import Conflict, ValidationFailed
from brandkeeper.core.notifications import email as mailer
from brandkeeper.core.users.models import UserProfile
from brandkeeper.core.users.schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

EMAIL_TAKEN_MESSAGE = "El correo electrónico ya está en uso"
INVALID_COMPANY_MESSAGE = "La empresa seleccionada no es válida"
GENERATED_PASSWORD_LENGTH = 12


@dataclass
class CredentialDelivery:
    email_sent: bool
    email_error: str | None = None


async def get_user(db: AsyncSession, user_id: uuid.UUID) -> UserProfile | None:
    return await db.get(UserProfile, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> UserProfile | None:
    result = await db.execute(select(UserProfile).where(UserProfile.email == email.lower()))
    return result.scalar_one_or_none()


async def list_users(db: AsyncSession) -> list[UserProfile]:
    result = await db.execute(select(UserProfile).order_by(UserProfile.created_at.desc()))
    return list(result.scalars().all())


async def _ensure_company(db: AsyncSession, company_id: uuid.UUID) -> None:
    if not await db.get(Company, company_id):
        raise ValidationFailed(details=[{"path": ["company_id"], "message": INVALID_COMPANY_MESSAGE, "code": "invalid_company"}])


async def create_user(db: AsyncSession, data: UserCreate, password: str) -> UserProfile:
    if await get_user_by_email(db, data.email):
        raise Conflict(EMAIL_TAKEN_MESSAGE)
    await _ensure_company(db, data.company_id)

    user = UserProfile(
        email=data.email,
        hashed_password=hash_password(password),
        full_name=data.full_name,
        phone=data.phone,
        role=data.role.value,
        company_id=data.company_id,
        avatar_url=data.avatar_url,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


async def update_user(db: AsyncSession, user: UserProfile, data: UserUpdate) -> UserProfile:
    changes = data.model_dump(exclude_unset=True)
    for required in ("email", "full_name", "role", "company_id", "is_active"):
        if changes.get(required, ...) is None:
            changes.pop(required)

    if "email" in changes and changes["email"] != user.email:
        existing = await get_user_by_email(db, changes["email"])
        if existing and existing.id != user.id:
            raise Conflict(EMAIL_TAKEN_MESSAGE)
    if "company_id" in changes and changes["company_id"] != user.company_id:
        await _ensure_company(db, changes["company_id"])
    if "role" in changes:
        changes["role"] = changes["role"].value

    for field, value in changes.items():
        setattr(user, field, value)
    if changes.get("is_active") is False:
        await auth_service.revoke_all(db, user.id)
    await db.flush()
    await db.refresh(user)
    return user


async def deactivate_user(db: AsyncSession, user: UserProfile) -> None:
    user.is_active = False
    await auth_service.revoke_all(db, user.id)
    await db.flush()


async def rotate_password(db: AsyncSession, user: UserProfile) -> str:
    password = generate_random_password(GENERATED_PASSWORD_LENGTH)
    await auth_service.set_password(db, user, password)
    return password


async def deliver_credentials(user: UserProfile, password: str) -> CredentialDelivery:
    """Best-effort welcome email; a failure is reported, never raised."""
    try:
        await mailer.send_welcome_email(user.email, password, user.full_name)
    except mailer.EmailDeliveryError as exc:
        logger.warning("Welcome email to %s failed: %s", user.email, exc.message)
        return CredentialDelivery(email_sent=False, email_error=exc.message)
    return CredentialDelivery(email_sent=True)
