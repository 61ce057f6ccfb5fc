"""Test fixtures — in-memory SQLite database, seeded asset tree, test client."""

from datetime import datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from assetadmin.config import settings
from assetadmin.database import get_db
from assetadmin.main import create_app
from assetadmin.models.asset import DRAFT, KIND_FILE, KIND_FOLDER, LIVE, AssetRecord
from assetadmin.models.asset_usage import AssetUsage
from assetadmin.models.base import Base
from assetadmin.models.user import Group, User
from assetadmin.services.permissions import Principal

DEFAULT_STAMP = datetime(2024, 1, 15, 12, 0, 0)

EDITOR = Principal(id="u-alice", username="alice", group_codes=frozenset({"editors"}))
MEMBER = Principal(id="u-bob", username="bob")
ADMIN = Principal(id="u-root", username="root", is_admin=True)


def make_asset(record_id, name, parent_id=0, kind=KIND_FILE, stage=DRAFT, **kwargs):
    kwargs.setdefault("created", DEFAULT_STAMP)
    kwargs.setdefault("last_edited", DEFAULT_STAMP)
    kwargs.setdefault("can_view_type", "Inherit")
    return AssetRecord(
        id=record_id,
        stage=stage,
        kind=kind,
        name=name,
        parent_id=parent_id,
        **kwargs,
    )


def make_token(username: str, secret: str = settings.secret_key) -> str:
    return jwt.encode({"sub": username}, secret, algorithm=settings.token_algorithm)


@pytest_asyncio.fixture
async def db_session():
    """Provide an async in-memory SQLite session for tests."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest_asyncio.fixture
async def asset_tree(db_session: AsyncSession):
    """Draft tree used across the suite.

    /Uploads (1)
        photo.jpg (3)            used twice
        report.pdf (4)
        /Archive (2)
            old.JPG (5)          used once
            /Deep (6)
                notes.txt (7)    used once
    /Private (8)                 editors only
        secret.jpg (9)           used once
    readme.txt (10)              logged-in users
    logo.png (11)                title "Company Logo"

    Record 12 exists only in the live stage.
    """
    db_session.add_all([
        make_asset(1, "Uploads", kind=KIND_FOLDER, created=datetime(2024, 1, 1, 9, 0)),
        make_asset(2, "Archive", 1, kind=KIND_FOLDER),
        make_asset(
            3, "photo.jpg", 1,
            created=datetime(2024, 3, 10, 8, 0),
            last_edited=datetime(2024, 5, 1, 23, 59, 59),
        ),
        make_asset(
            4, "report.pdf", 1,
            created=datetime(2024, 3, 11, 10, 0),
            last_edited=datetime(2024, 5, 2, 0, 0, 0),
        ),
        make_asset(5, "old.JPG", 2),
        make_asset(6, "Deep", 2, kind=KIND_FOLDER),
        make_asset(7, "notes.txt", 6),
        make_asset(
            8, "Private", kind=KIND_FOLDER,
            can_view_type="OnlyTheseUsers", viewer_groups="editors",
        ),
        make_asset(9, "secret.jpg", 8),
        make_asset(10, "readme.txt", can_view_type="LoggedInUsers"),
        make_asset(11, "logo.png", title="Company Logo"),
        make_asset(12, "published-only.jpg", stage=LIVE),
        AssetUsage(asset_id=3, owner_class="Page", owner_id=1),
        AssetUsage(asset_id=3, owner_class="Page", owner_id=2),
        AssetUsage(asset_id=5, owner_class="Page", owner_id=1),
        AssetUsage(asset_id=7, owner_class="BlogPost", owner_id=4),
        AssetUsage(asset_id=9, owner_class="Page", owner_id=3),
    ])
    await db_session.commit()
    return db_session


@pytest_asyncio.fixture
async def users(db_session: AsyncSession):
    """alice (editors), bob (no groups), root (admin)."""
    editors = Group(code="editors", title="Content Editors")
    alice = User(id="u-alice", username="alice", groups=[editors])
    bob = User(id="u-bob", username="bob")
    root = User(id="u-root", username="root", is_admin=1)
    db_session.add_all([editors, alice, bob, root])
    await db_session.commit()
    return {"alice": alice, "bob": bob, "root": root}


@pytest_asyncio.fixture
async def client(db_session: AsyncSession):
    """Provide an async test client with overridden DB dependency."""
    app = create_app()

    async def _override_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def alice_headers():
    return {"Authorization": f"Bearer {make_token('alice')}"}
