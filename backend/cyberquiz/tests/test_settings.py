"""Tests for viewing and updating application settings."""

import asyncio
import pathlib
import sys

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlmodel import SQLModel

# Allow importing the cyberquiz package
sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from cyberquiz.main import app
from cyberquiz.database import get_session
from cyberquiz.models import User
from cyberquiz.auth import get_password_hash


async def _setup_test_db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    TestSession = async_sessionmaker(engine, expire_on_commit=False)

    async def override_get_session():
        async with TestSession() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session

    async with TestSession() as session:
        admin = User(
            username="Admin",
            email="admin@example.com",
            password_hash=get_password_hash("adminpass"),
            role="admin",
        )
        player = User(
            username="Player",
            email="player@example.com",
            password_hash=get_password_hash("playerpass"),
            role="player",
        )
        session.add(admin)
        session.add(player)
        await session.commit()

    return TestSession


def test_settings_endpoints():
    async def run():
        await _setup_test_db()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            # Initial settings read
            resp = await client.get("/settings/")
            assert resp.status_code == 200
            data = resp.json()
            assert data["site_name"] == "Cyber Awareness Quiz"
            assert data["certificate_policy"] == "per_attempt"

            # Non-admin attempt to update settings
            resp = await client.post(
                "/login", json={"email": "player@example.com", "password": "playerpass"}
            )
            assert resp.status_code == 200
            player_headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}
            resp = await client.put(
                "/settings/",
                headers=player_headers,
                json={"site_name": "Hacked"},
            )
            assert resp.status_code == 403
            assert resp.json()["detail"]["code"] == "forbidden"

            # Admin updates settings
            resp = await client.post(
                "/login", json={"email": "admin@example.com", "password": "adminpass"}
            )
            assert resp.status_code == 200
            admin_headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}
            resp = await client.put(
                "/settings/",
                headers=admin_headers,
                json={"site_name": "Security Week Quiz", "certificate_policy": "per_user"},
            )
            assert resp.status_code == 200
            data = resp.json()
            assert data["site_name"] == "Security Week Quiz"
            assert data["certificate_policy"] == "per_user"

            # Unknown policies are rejected
            resp = await client.put(
                "/settings/",
                headers=admin_headers,
                json={"certificate_policy": "per_day"},
            )
            assert resp.status_code == 422

            # Updated values persist on subsequent read
            resp = await client.get("/settings/")
            assert resp.status_code == 200
            data = resp.json()
            assert data["site_name"] == "Security Week Quiz"
            assert data["certificate_policy"] == "per_user"

    asyncio.run(run())


def test_registration_can_be_disabled():
    async def run():
        await _setup_test_db()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post(
                "/login", json={"email": "admin@example.com", "password": "adminpass"}
            )
            admin_headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}
            resp = await client.put(
                "/settings/",
                headers=admin_headers,
                json={"public_registration_disabled": True},
            )
            assert resp.status_code == 200

            resp = await client.post(
                "/register",
                json={"username": "new", "email": "new@example.com", "password": "pw"},
            )
            assert resp.status_code == 404
            assert resp.json()["detail"]["code"] == "registration_disabled"

    asyncio.run(run())
