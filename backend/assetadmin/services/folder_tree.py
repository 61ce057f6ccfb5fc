"""Folder-tree traversal and usage counting over draft records."""

from __future__ import annotations

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from assetadmin.models.asset import DRAFT, KIND_FILE, KIND_FOLDER, AssetRecord
from assetadmin.models.asset_usage import AssetUsage


async def nested_folder_ids(db: AsyncSession, folder_id: int) -> list[int]:
    """``folder_id`` followed by every folder nested under it, level by level."""
    ids = [folder_id]
    seen = {folder_id}
    frontier = [folder_id]
    while frontier:
        result = await db.execute(
            select(AssetRecord.id).where(
                AssetRecord.stage == DRAFT,
                AssetRecord.kind == KIND_FOLDER,
                AssetRecord.parent_id.in_(frontier),
            )
        )
        children = [i for i in result.scalars().all() if i not in seen]
        seen.update(children)
        ids.extend(children)
        frontier = children
    return ids


async def backlink_count(db: AsyncSession, record_id: int) -> int:
    """Number of places that reference ``record_id``."""
    count = await db.scalar(
        select(func.count()).select_from(AssetUsage).where(AssetUsage.asset_id == record_id)
    )
    return count or 0


async def files_in_use_count(db: AsyncSession, folder: AssetRecord) -> int:
    """Files anywhere below ``folder`` that are referenced at least once."""
    nested = await nested_folder_ids(db, folder.id)
    count = await db.scalar(
        select(func.count(distinct(AssetRecord.id)))
        .select_from(AssetRecord)
        .join(AssetUsage, AssetUsage.asset_id == AssetRecord.id)
        .where(
            AssetRecord.stage == DRAFT,
            AssetRecord.kind == KIND_FILE,
            AssetRecord.parent_id.in_(nested),
        )
    )
    return count or 0


async def descendant_file_count(db: AsyncSession, record: AssetRecord) -> int:
    """Files nested (transitively) under a folder; 0 for plain files."""
    if not record.is_folder:
        return 0
    nested = await nested_folder_ids(db, record.id)
    count = await db.scalar(
        select(func.count())
        .select_from(AssetRecord)
        .where(
            AssetRecord.stage == DRAFT,
            AssetRecord.kind == KIND_FILE,
            AssetRecord.parent_id.in_(nested),
        )
    )
    return count or 0
