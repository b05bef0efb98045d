import logging
import time
import uuid
from functools import partial
from pathlib import PurePosixPath

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from brandkeeper.core.errors import ValidationFailed
from brandkeeper.core.files.models import StoredFile
from brandkeeper.core.files.storage import LocalStorage
from brandkeeper.core.policy import Subject
from brandkeeper.db.session import after_commit, after_rollback

logger = logging.getLogger(__name__)

LOGO_CONTENT_TYPES = frozenset({"image/png", "image/jpeg", "image/jpg", "image/svg+xml"})

_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/svg+xml": "svg",
    "image/gif": "gif",
    "image/webp": "webp",
}


def check_upload(
    content_type: str | None,
    size: int,
    *,
    max_bytes: int,
    allowed_types: frozenset[str] | None = None,
    type_message: str = "El archivo debe ser una imagen",
) -> None:
    """``allowed_types=None`` accepts any ``image/*`` type."""
    content_type = content_type or ""
    if allowed_types is None:
        type_ok = content_type.startswith("image/")
    else:
        type_ok = content_type in allowed_types
    if not type_ok:
        logger.warning("Rejected upload with content type %r", content_type)
        raise ValidationFailed(type_message)
    if size > max_bytes:
        logger.warning("Rejected upload of %d bytes", size)
        raise ValidationFailed(f"La imagen no puede ser mayor a {max_bytes // (1024 * 1024)}MB")


def _extension(filename: str | None, content_type: str | None) -> str:
    suffix = PurePosixPath(filename or "").suffix.lstrip(".").lower()
    return suffix or _EXTENSIONS.get(content_type or "", "bin")


async def read_upload(upload: UploadFile | None, *, max_bytes: int, **checks) -> bytes:
    """Reads at most ``max_bytes + 1`` bytes, so an oversized body is never fully buffered."""
    if upload is None or not upload.filename:
        raise ValidationFailed("No se proporcionó ningún archivo")
    if upload.size is not None:
        check_upload(upload.content_type, upload.size, max_bytes=max_bytes, **checks)
    data = await upload.read(max_bytes + 1)
    check_upload(upload.content_type, len(data), max_bytes=max_bytes, **checks)
    return data


async def store_upload(
    db: AsyncSession,
    storage: LocalStorage,
    uploader: Subject,
    upload: UploadFile,
    data: bytes,
    *,
    company_id: uuid.UUID,
    folder: str,
    prefix: str,
    purpose: str,
) -> StoredFile:
    relative_path = f"{folder}/{company_id}/{prefix}-{int(time.time() * 1000)}.{_extension(upload.filename, upload.content_type)}"
    public_url = await storage.save(relative_path, data)
    after_rollback(db, partial(remove_file, storage, relative_path))

    stored = StoredFile(
        company_id=company_id,
        purpose=purpose,
        filename=upload.filename or relative_path,
        content_type=upload.content_type,
        size_bytes=len(data),
        storage_path=relative_path,
        public_url=public_url,
        uploaded_by=uploader.user_id,
    )
    db.add(stored)
    await db.flush()
    return stored


async def remove_file(storage: LocalStorage, relative_path: str) -> None:
    try:
        await storage.delete(relative_path)
    except (OSError, ValueError) as exc:
        logger.warning("Could not remove file %s: %s", relative_path, exc)


async def discard(db: AsyncSession, storage: LocalStorage, url: str | None) -> None:
    """Forget a previously stored file; it leaves the disk only once the transaction commits.

    URLs not served by ``storage`` are left alone.
    """
    relative_path = storage.path_from_url(url)
    if not relative_path:
        return

    result = await db.execute(select(StoredFile).where(StoredFile.storage_path == relative_path))
    stored = result.scalar_one_or_none()
    if stored:
        await db.delete(stored)
        await db.flush()
    after_commit(db, partial(remove_file, storage, relative_path))
