import logging
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.auth.models import RefreshToken
from brandkeeper.core.auth.security import (
    create_access_token,
    generate_refresh_token,
    hash_password,
    hash_refresh_token,
    verify_password,
)
from brandkeeper.core.errors import Unauthorized, ValidationFailed
from brandkeeper.core.users.models import UserProfile
from brandkeeper.settings import get_settings

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Credenciales inválidas"
INVALID_REFRESH_MESSAGE = "La sesión ha expirado. Inicia sesión nuevamente."


class AuthResult:
    def __init__(self, access_token: str, refresh_token: str):
        self.access_token = access_token
        self.refresh_token = refresh_token


async def _issue_tokens(db: AsyncSession, user: UserProfile) -> AuthResult:
    settings = get_settings()
    access_token = create_access_token(user.id, user.role, user.company_id)
    raw_refresh, refresh_hash = generate_refresh_token()
    db.add(RefreshToken(
        user_id=user.id,
        token_hash=refresh_hash,
        expires_at=datetime.now(timezone.utc) + timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS),
    ))
    await db.flush()
    return AuthResult(access_token=access_token, refresh_token=raw_refresh)


class LocalAuthProvider:
    async def login(self, db: AsyncSession, email: str, password: str) -> AuthResult:
        result = await db.execute(select(UserProfile).where(UserProfile.email == email.lower()))
        user: UserProfile | None = result.scalar_one_or_none()

        if not user or not user.hashed_password or not verify_password(password, user.hashed_password):
            logger.info("Rejected login for %s", email.lower())
            raise Unauthorized(INVALID_CREDENTIALS_MESSAGE)
        if not user.is_active:
            logger.info("Rejected login for inactive profile %s", user.id)
            raise Unauthorized(INVALID_CREDENTIALS_MESSAGE)

        return await _issue_tokens(db, user)


_provider = LocalAuthProvider()


def get_auth_provider() -> LocalAuthProvider:
    return _provider


async def refresh_tokens(db: AsyncSession, raw_token: str) -> AuthResult:
    token_hash = hash_refresh_token(raw_token)
    result = await db.execute(select(RefreshToken).where(RefreshToken.token_hash == token_hash))
    db_token: RefreshToken | None = result.scalar_one_or_none()

    now = datetime.now(timezone.utc)
    if not db_token or not db_token.is_usable(now):
        raise Unauthorized(INVALID_REFRESH_MESSAGE)

    user = await db.get(UserProfile, db_token.user_id)
    if not user or not user.is_active:
        raise Unauthorized(INVALID_REFRESH_MESSAGE)

    db_token.revoked_at = now
    return await _issue_tokens(db, user)


async def logout(db: AsyncSession, raw_token: str) -> None:
    token_hash = hash_refresh_token(raw_token)
    result = await db.execute(select(RefreshToken).where(RefreshToken.token_hash == token_hash))
    db_token: RefreshToken | None = result.scalar_one_or_none()
    if db_token and db_token.revoked_at is None:
        db_token.revoked_at = datetime.now(timezone.utc)
        await db.flush()


async def revoke_all(db: AsyncSession, user_id: uuid.UUID) -> None:
    await db.execute(
        update(RefreshToken)
        .where(RefreshToken.user_id == user_id, RefreshToken.revoked_at.is_(None))
        .values(revoked_at=datetime.now(timezone.utc))
    )


async def set_password(db: AsyncSession, user: UserProfile, new_password: str) -> None:
    """Replace the stored hash and end every open session of the user."""
    user.hashed_password = hash_password(new_password)
    await revoke_all(db, user.id)
    await db.flush()


async def change_password(db: AsyncSession, user: UserProfile, current_password: str, new_password: str) -> None:
    if not user.hashed_password or not verify_password(current_password, user.hashed_password):
        raise ValidationFailed(
            details=[{"path": ["current_password"], "message": "La contraseña actual es incorrecta", "code": "invalid_password"}],
        )
    await set_password(db, user, new_password)
