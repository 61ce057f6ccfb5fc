"""Tests for stage-scoped record access."""

import pytest
from sqlalchemy import select

from assetadmin.exceptions import RecordNotFoundError
from assetadmin.models.asset import DRAFT, LIVE, AssetRecord
from assetadmin.services.versioning import (
    draft_query,
    get_draft,
    publish,
    stage_query,
    write_draft,
)

from conftest import make_asset


@pytest.mark.asyncio
async def test_draft_query_excludes_live_only_records(asset_tree):
    result = await asset_tree.execute(draft_query())
    ids = {r.id for r in result.scalars().all()}
    assert 12 not in ids
    assert ids == set(range(1, 12))


@pytest.mark.asyncio
async def test_get_draft(asset_tree):
    assert (await get_draft(asset_tree, 3)).name == "photo.jpg"
    assert await get_draft(asset_tree, 12) is None


def test_stage_query_rejects_unknown_stage():
    with pytest.raises(ValueError):
        stage_query("Preview")


@pytest.mark.asyncio
async def test_publish_copies_draft_to_live(asset_tree):
    live = await publish(asset_tree, 3)
    assert live.stage == LIVE
    assert live.name == "photo.jpg"
    assert live.parent_id == 1

    draft = await get_draft(asset_tree, 3)
    draft.name = "photo-renamed.jpg"
    await asset_tree.commit()

    await publish(asset_tree, 3)
    result = await asset_tree.execute(stage_query(LIVE).where(AssetRecord.id == 3))
    assert result.scalar_one().name == "photo-renamed.jpg"


@pytest.mark.asyncio
async def test_publish_without_draft_fails(asset_tree):
    with pytest.raises(RecordNotFoundError):
        await publish(asset_tree, 12)


@pytest.mark.asyncio
async def test_write_draft_leaves_live_untouched(db_session):
    db_session.add(make_asset(30, "live.txt", stage=LIVE))
    await db_session.commit()

    await write_draft(db_session, make_asset(30, "draft.txt", stage=LIVE))

    rows = (await db_session.execute(
        select(AssetRecord).where(AssetRecord.id == 30).order_by(AssetRecord.stage)
    )).scalars().all()
    assert [(r.stage, r.name) for r in rows] == [(LIVE, "live.txt"), (DRAFT, "draft.txt")]
