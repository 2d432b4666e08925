import datetime as dt
import logging
import os
import shutil
import tempfile
from pathlib import Path

from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy import text

from foodtruck.core.auth import current_active_superuser
from foodtruck.core.config import settings
from foodtruck.db.database import create_db_and_tables, engine
from foodtruck.db.users import User

logger = logging.getLogger(__name__)

router = APIRouter()

SQLITE_HEADER = b"SQLite format 3\x00"


def _remove(path: str):
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


@router.get("/download")
async def download_backup(
    background_tasks: BackgroundTasks,
    user: User = Depends(current_active_superuser),
):
    """Consistent snapshot of the database file (`VACUUM INTO`)."""
    fd, snapshot = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    os.remove(snapshot)
    async with engine.connect() as conn:
        await conn.exec_driver_sql("VACUUM INTO ?", (snapshot,))
    background_tasks.add_task(_remove, snapshot)
    stamp = dt.datetime.now().strftime("%Y%m%d-%H%M%S")
    logger.info("Backup downloaded by %s", user.email)
    return FileResponse(
        snapshot,
        media_type="application/vnd.sqlite3",
        filename=f"foodtruck-backup-{stamp}.db",
    )


@router.post("/restore")
async def restore_backup(
    file: UploadFile = File(...),
    user: User = Depends(current_active_superuser),
):
    """Replace the database with an uploaded SQLite file, then bring its schema up to date."""
    data = await file.read()
    if not data.startswith(SQLITE_HEADER):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Not a SQLite database file")

    db_file = settings.database_file
    staged = Path(f"{db_file}.restore")
    staged.write_bytes(data)

    await engine.dispose()
    previous = Path(f"{db_file}.before-restore")
    if db_file.exists():
        shutil.copyfile(db_file, previous)
    for suffix in ("-wal", "-shm", "-journal"):
        _remove(f"{db_file}{suffix}")
    os.replace(staged, db_file)

    await create_db_and_tables()
    async with engine.connect() as conn:
        check = (await conn.execute(text("PRAGMA integrity_check"))).scalar()
    logger.info("Database restored from %s by %s (integrity: %s)", file.filename, user.email, check)
    return {"success": True, "integrity": check, "previous_copy": str(previous) if previous.exists() else None}
