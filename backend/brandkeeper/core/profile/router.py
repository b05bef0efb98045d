from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.files.storage import LocalStorage
from brandkeeper.core.profile import service
from brandkeeper.core.profile.schemas import AvatarUploadRead, ProfileRead, ProfileUpdate
from brandkeeper.core.responses import Envelope, ok
from brandkeeper.core.users.schemas import UserRead
from brandkeeper.dependencies import CurrentUser, get_current_user, get_db
from brandkeeper.settings import Settings, get_settings

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=Envelope[ProfileRead])
async def get_profile(db: AsyncSession = Depends(get_db), current: CurrentUser = Depends(get_current_user)):
    return ok(await service.get_profile(db, current.subject, current.user))


@router.put("", response_model=Envelope[UserRead])
async def update_profile(
    data: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current: CurrentUser = Depends(get_current_user),
):
    user = await service.update_profile(db, current.subject, current.user, data)
    return ok(user, "Perfil actualizado correctamente")


@router.post("/avatar", response_model=Envelope[AvatarUploadRead])
async def upload_avatar(
    file: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
    current: CurrentUser = Depends(get_current_user),
):
    stored = await service.replace_avatar(
        db, LocalStorage.from_settings(settings), current.subject, current.user, file, settings.MAX_UPLOAD_BYTES,
    )
    return ok({"avatar_url": stored.public_url, "path": stored.storage_path}, "Avatar actualizado correctamente")
