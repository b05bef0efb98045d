from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.auth import service as auth_service
from brandkeeper.core.auth.schemas import (
    ChangePasswordRequest,
    LoginRequest,
    LogoutRequest,
    RefreshRequest,
    SessionUser,
    TokenResponse,
)
from brandkeeper.core.responses import Envelope, MessageOnly, ok
from brandkeeper.dependencies import CurrentUser, get_current_user, get_db

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, db: AsyncSession = Depends(get_db)):
    provider = auth_service.get_auth_provider()
    result = await provider.login(db, body.email, body.password)
    return TokenResponse(access_token=result.access_token, refresh_token=result.refresh_token)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(body: RefreshRequest, db: AsyncSession = Depends(get_db)):
    result = await auth_service.refresh_tokens(db, body.refresh_token)
    return TokenResponse(access_token=result.access_token, refresh_token=result.refresh_token)


@router.post("/logout", status_code=204)
async def logout(body: LogoutRequest, db: AsyncSession = Depends(get_db)):
    await auth_service.logout(db, body.refresh_token)


@router.get("/me", response_model=Envelope[SessionUser])
async def me(current: CurrentUser = Depends(get_current_user)):
    return ok(current.user)


@router.post("/change-password", response_model=MessageOnly)
async def change_password(
    body: ChangePasswordRequest,
    current: CurrentUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    await auth_service.change_password(db, current.user, body.current_password, body.new_password)
    return {"success": True, "message": "Contraseña actualizada correctamente"}
