import logging
from contextvars import ContextVar
from typing import Any

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.middleware.base import BaseHTTPMiddleware

from brandkeeper.core.audit.models import AuditLog
from brandkeeper.core.policy import Subject
from brandkeeper.db.base import utcnow

logger = logging.getLogger(__name__)

_client_ip: ContextVar[str | None] = ContextVar("audit_client_ip", default=None)


def current_client_ip() -> str | None:
    return _client_ip.get()


def client_ip(request: Request) -> str | None:
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


class AuditMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        token = _client_ip.set(client_ip(request))
        try:
            return await call_next(request)
        finally:
            _client_ip.reset(token)


async def audit(
    db: AsyncSession,
    actor: Subject | None,
    *,
    action: str,
    resource_type: str,
    resource_id: str | None = None,
    detail: dict[str, Any] | None = None,
) -> AuditLog:
    entry = AuditLog(
        company_id=actor.company_id if actor else None,
        user_id=actor.user_id if actor else None,
        action=action,
        resource_type=resource_type,
        resource_id=resource_id,
        detail=detail,
        ip_address=current_client_ip(),
        created_at=utcnow(),
    )
    db.add(entry)
    await db.flush()
    logger.info("%s %s %s by %s", action, resource_type, resource_id or "-", actor.user_id if actor else "system")
    return entry
