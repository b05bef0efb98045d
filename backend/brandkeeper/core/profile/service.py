from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.companies import service as companies_service
from brandkeeper.core.companies.schemas import CompanyRead
from brandkeeper.core.files import service as files_service
from brandkeeper.core.files.models import StoredFile
from brandkeeper.core.files.storage import LocalStorage
from brandkeeper.core.policy import Action, Resource, ResourceKind, Subject, authorize
from brandkeeper.core.profile.schemas import ProfileRead, ProfileUpdate
from brandkeeper.core.users.models import UserProfile


def _own(user: UserProfile) -> Resource:
    return Resource(kind=ResourceKind.USER, company_id=user.company_id, owner_id=user.id)


async def get_profile(db: AsyncSession, subject: Subject, user: UserProfile) -> ProfileRead:
    authorize(subject, Action.READ, _own(user))
    profile = ProfileRead.model_validate(user)
    company = await companies_service.get_company(db, user.company_id)
    if company:
        profile.company = CompanyRead.model_validate(company)
    return profile


async def update_profile(db: AsyncSession, subject: Subject, user: UserProfile, data: ProfileUpdate) -> UserProfile:
    authorize(subject, Action.UPDATE, _own(user))
    changes = data.model_dump(exclude_unset=True)
    if changes.get("full_name", ...) is None:
        changes.pop("full_name", None)
    for field, value in changes.items():
        setattr(user, field, value)
    await db.flush()
    await db.refresh(user)
    return user


async def replace_avatar(
    db: AsyncSession,
    storage: LocalStorage,
    subject: Subject,
    user: UserProfile,
    upload: UploadFile | None,
    max_bytes: int,
) -> StoredFile:
    authorize(subject, Action.UPDATE, _own(user))

    data = await files_service.read_upload(upload, max_bytes=max_bytes)
    stored = await files_service.store_upload(
        db, storage, subject, upload, data,
        company_id=user.company_id, folder="user-avatars", prefix=f"avatar-{user.id}", purpose="avatar",
    )
    if user.avatar_url and user.avatar_url != stored.public_url:
        await files_service.discard(db, storage, user.avatar_url)

    user.avatar_url = stored.public_url
    await db.flush()
    return stored
