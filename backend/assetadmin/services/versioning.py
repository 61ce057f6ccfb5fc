"""Stage-scoped access to versioned asset records.

Drafts and live copies share an id and live side by side in the
``assets`` table, keyed by ``(id, stage)``.
"""

from __future__ import annotations

import logging

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from assetadmin.exceptions import RecordNotFoundError
from assetadmin.models.asset import DRAFT, LIVE, AssetRecord

logger = logging.getLogger(__name__)

STAGES = (DRAFT, LIVE)


def stage_query(stage: str) -> Select:
    """``SELECT`` over asset records in one stage."""
    if stage not in STAGES:
        raise ValueError(f"Unknown stage: {stage!r}")
    return select(AssetRecord).where(AssetRecord.stage == stage)


def draft_query() -> Select:
    return stage_query(DRAFT)


async def get_draft(db: AsyncSession, record_id: int) -> AssetRecord | None:
    """Fetch the draft copy of one record, or None."""
    return await db.get(AssetRecord, (record_id, DRAFT))


async def write_draft(db: AsyncSession, record: AssetRecord) -> AssetRecord:
    """Store ``record`` in the draft stage (insert or update)."""
    record.stage = DRAFT
    record = await db.merge(record)
    await db.commit()
    return record


async def publish(db: AsyncSession, record_id: int) -> AssetRecord:
    """Copy the draft of ``record_id`` over its live version."""
    draft = await get_draft(db, record_id)
    if draft is None:
        raise RecordNotFoundError(f"File#{record_id} has no draft to publish")

    live = await db.get(AssetRecord, (record_id, LIVE))
    if live is None:
        live = AssetRecord(id=record_id, stage=LIVE)
        db.add(live)
    for column in AssetRecord.__table__.columns:
        if column.key not in ("id", "stage"):
            setattr(live, column.key, getattr(draft, column.key))

    await db.commit()
    logger.info("Published File#%d to %s", record_id, LIVE)
    return live
