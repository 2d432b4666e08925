import logging
import os
import re
import time
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from foodtruck.core.config import settings
from foodtruck.db.database import get_async_session, StoredFile as StoredFileModel
from foodtruck.routers.crud import build_crud_router, get_or_404
from foodtruck.schemas.files import StoredFileCreate, StoredFileUpdate, UploadOut

logger = logging.getLogger(__name__)

upload_router = APIRouter()
files_router = APIRouter()

EXT_TO_CONTENT_TYPE = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
    "heic": "image/heic",
    "pdf": "application/pdf",
    "txt": "text/plain",
    "csv": "text/csv",
    "doc": "application/msword",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "xls": "application/vnd.ms-excel",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")

UPLOAD_URL_PREFIX = "/uploads/"


def safe_filename(name: str) -> str:
    """Base name with anything outside [A-Za-z0-9._-] replaced by '_'."""
    base = os.path.basename((name or "").replace("\\", "/"))
    cleaned = _UNSAFE_CHARS.sub("_", base).strip("._")
    return cleaned or "file"


def _stored_path(public_path: str) -> Path:
    """Location on disk of a `/uploads/<name>` path."""
    return Path(settings.upload_dir) / os.path.basename(public_path)


async def _read_limited(file: UploadFile, limit: int) -> bytes:
    data = await file.read(limit + 1)
    if len(data) > limit:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File is larger than {limit // (1024 * 1024)} MB",
        )
    return data


@upload_router.post("", response_model=UploadOut)
async def upload_file(
    file: UploadFile = File(...),
    category: str = Form("General"),
    notes: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_async_session),
):
    """Store an uploaded document under the upload directory and register it."""
    original = file.filename or "file"
    ext = os.path.splitext(original)[1].lower().lstrip(".")
    content_type = (file.content_type or "").strip().lower()
    if ext not in EXT_TO_CONTENT_TYPE:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"File type .{ext} is not allowed")
    if content_type and content_type != "application/octet-stream" and content_type not in EXT_TO_CONTENT_TYPE.values():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Content type {content_type} is not allowed")
    if not content_type or content_type == "application/octet-stream":
        content_type = EXT_TO_CONTENT_TYPE[ext]

    data = await _read_limited(file, settings.max_upload_bytes)

    stored_name = f"{int(time.time() * 1000)}_{safe_filename(original)}"
    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    (upload_dir / stored_name).write_bytes(data)

    row = StoredFileModel(
        name=original,
        filename=stored_name,
        path=UPLOAD_URL_PREFIX + stored_name,
        category=category or "General",
        mime_type=content_type,
        size=len(data),
        notes=notes,
    )
    db.add(row)
    await db.commit()
    await db.refresh(row)
    logger.info("Stored upload %s (%s bytes)", stored_name, len(data))
    return UploadOut(id=row.id, filename=stored_name, path=row.path)


@files_router.get("/{file_id}/download")
async def download_file(file_id: int, db: AsyncSession = Depends(get_async_session)):
    row = await get_or_404(db, StoredFileModel, file_id, "File")
    path = _stored_path(row.path)
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Stored file is missing")
    return FileResponse(path, media_type=row.mime_type, filename=row.name)


async def remove_stored_file(db: AsyncSession, row: StoredFileModel):
    if not row.path.startswith(UPLOAD_URL_PREFIX):
        return
    path = _stored_path(row.path)
    if path.is_file():
        path.unlink()
        logger.info("Removed stored file %s", path.name)


build_crud_router(
    StoredFileModel,
    StoredFileCreate,
    StoredFileUpdate,
    label="File",
    search_fields=("name", "category"),
    order_by=(StoredFileModel.uploaded_at.desc(), StoredFileModel.id.desc()),
    on_delete=remove_stored_file,
    router=files_router,
)
