"""Shared fixtures: an in-memory SQLite store per test and an ASGI client on top of it."""
from decimal import Decimal

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from storefront.database import Database
from storefront.main import create_app
from storefront.services import CatalogService

SQLITE_URL = "sqlite+aiosqlite://"


def make_database() -> Database:
    # one shared connection so every session sees the same in-memory database
    return Database(SQLITE_URL, poolclass=StaticPool, connect_args={"check_same_thread": False})


@pytest.fixture
async def database():
    db = make_database()
    await db.connect()
    yield db
    await db.dispose()


@pytest.fixture
async def session(database):
    async with database.session_maker() as session:
        yield session


@pytest.fixture
async def client(database):
    app = create_app(database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
async def pen_id(session):
    return await CatalogService(session).add_product(
        item_name="Pen",
        item_price=Decimal("1.50"),
        item_description="Blue pen",
        item_rating=4,
        item_image="pen.png",
    )


@pytest.fixture
async def lamp_id(session):
    return await CatalogService(session).add_product(
        item_name="Desk lamp",
        item_price=Decimal("24.99"),
        item_description="LED desk lamp",
        item_rating=5,
        item_image="lamp.png",
    )
