import pytest
from fastapi import status
from httpx import AsyncClient

from foodtruck.routers.backup import SQLITE_HEADER


@pytest.mark.asyncio
async def test_download_is_a_sqlite_snapshot(client: AsyncClient):
    await client.post("/api/suppliers", json={"name": "Sysco"})
    response = await client.get("/api/backup/download")
    assert response.status_code == status.HTTP_200_OK
    assert response.content.startswith(SQLITE_HEADER)
    assert "foodtruck-backup-" in response.headers["content-disposition"]


@pytest.mark.asyncio
async def test_restore_rejects_non_sqlite_upload(client: AsyncClient):
    response = await client.post("/api/backup/restore", files={"file": ("backup.db", b"not a database", "application/octet-stream")})
    assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
async def test_restore_round_trip(client: AsyncClient):
    await client.post("/api/suppliers", json={"name": "Sysco"})
    snapshot = (await client.get("/api/backup/download")).content

    await client.post("/api/suppliers", json={"name": "Restaurant Depot"})
    assert len((await client.get("/api/suppliers")).json()) == 2

    response = await client.post(
        "/api/backup/restore", files={"file": ("backup.db", snapshot, "application/vnd.sqlite3")}
    )
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["integrity"] == "ok"
    assert [row["name"] for row in (await client.get("/api/suppliers")).json()] == ["Sysco"]
