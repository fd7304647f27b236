"""
Shared fixtures: in-memory SQLite database, a stubbed S3 client and an
httpx client bound to the ASGI app.

Settings are read at import time, so the environment is prepared before
anything from dealhub is imported.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from typing import Any, Dict, Optional

import boto3
import pytest
import pytest_asyncio
from botocore.stub import Stubber
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from dealhub.core.security import create_access_token
from dealhub.db.session import enable_sqlite_foreign_keys, get_db
from dealhub.models import Base
from dealhub.services.object_storage import ObjectStorageService, get_object_storage
from main import app

TEST_BUCKET = "test-bucket"


@pytest_asyncio.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Open short-lived sessions for seeding and assertions; always commit."""
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def s3_stub():
    client = boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )
    stubber = Stubber(client)
    stubber.activate()
    yield stubber
    stubber.deactivate()


@pytest.fixture
def object_storage(s3_stub):
    return ObjectStorageService(client=s3_stub.client, bucket=TEST_BUCKET, prefix="private")


@pytest_asyncio.fixture
async def client(session_factory, object_storage):
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_object_storage] = lambda: object_storage
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(
    user_id: str = "seller-1",
    email: Optional[str] = "seller@example.com",
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
) -> Dict[str, str]:
    token = create_access_token(
        subject=user_id, email=email, first_name=first_name, last_name=last_name
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seller() -> Dict[str, str]:
    return auth_headers("seller-1", "ada@example.com", "Ada", "Lovelace")


@pytest.fixture
def other_seller() -> Dict[str, str]:
    return auth_headers("seller-2", "grace@example.com", "Grace", "Hopper")


@pytest.fixture
def make_headers():
    return auth_headers


@pytest.fixture
def create_file(client):
    async def _create(headers: Dict[str, str], name: str = "deck.pdf") -> Dict[str, Any]:
        resp = await client.post(
            "/api/files",
            json={
                "fileName": name,
                "fileUrl": f"/objects/uploads/{name}",
                "fileType": name.rsplit(".", 1)[-1],
                "fileSize": 2048,
            },
            headers=headers,
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def create_room(client):
    async def _create(headers: Dict[str, str], **fields: Any) -> Dict[str, Any]:
        body = {"name": "Acme renewal", **fields}
        resp = await client.post("/api/deal-rooms", json=body, headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create


@pytest.fixture
def published_room(client, create_room, create_file):
    """A published room holding one asset; returns (room, asset_id)."""

    async def _create(headers: Dict[str, str], **fields: Any):
        file = await create_file(headers)
        room = await create_room(
            headers,
            assets=[{"fileId": file["id"], "title": "Pricing deck"}],
            **fields,
        )
        resp = await client.put(f"/api/deal-rooms/{room['id']}/publish", headers=headers)
        assert resp.status_code == 200, resp.text
        detail = await client.get(f"/api/deal-rooms/{room['id']}", headers=headers)
        return resp.json(), detail.json()["assets"][0]["id"]

    return _create
