import uuid
from dataclasses import dataclass
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.auth.security import decode_access_token
from brandkeeper.core.errors import Forbidden, Unauthorized
from brandkeeper.core.policy import Subject, UserRole
from brandkeeper.core.users import service as users_service
from brandkeeper.core.users.models import UserProfile
from brandkeeper.db.session import AsyncSessionLocal, run_transaction_hooks

bearer = HTTPBearer(auto_error=False)


@dataclass
class CurrentUser:
    user: UserProfile
    user_id: uuid.UUID
    role: UserRole
    company_id: uuid.UUID

    @property
    def subject(self) -> Subject:
        return Subject(user_id=self.user_id, role=self.role, company_id=self.company_id)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            async with session.begin():
                yield session
        except Exception:
            await run_transaction_hooks(session, committed=False)
            raise
        await run_transaction_hooks(session, committed=True)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer)],
    db: AsyncSession = Depends(get_db),
) -> CurrentUser:
    if not credentials:
        raise Unauthorized()
    try:
        payload = decode_access_token(credentials.credentials)
        user_id = uuid.UUID(payload["sub"])
    except (JWTError, KeyError, ValueError):
        raise Unauthorized()

    user = await users_service.get_user(db, user_id)
    if not user or not user.is_active:
        raise Unauthorized()

    return CurrentUser(user=user, user_id=user.id, role=user.user_role, company_id=user.company_id)


def require_roles(*roles: UserRole, message: str | None = None):
    async def _check(current: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current.role not in roles:
            raise Forbidden(message)
        return current

    return _check


require_super_admin = require_roles(UserRole.SUPER_ADMIN)
require_admin = require_roles(UserRole.SUPER_ADMIN, UserRole.ADMIN)
