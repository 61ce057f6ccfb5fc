"""Usage statistics, descendant counts and filtered listings of assets."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from assetadmin.exceptions import (
    IdentifierNotFoundError,
    InvalidArgumentError,
    PermissionDeniedError,
    RecordNotFoundError,
)
from assetadmin.models.asset import AssetRecord, root_folder
from assetadmin.services.asset_filter import AssetFilter, storable_id
from assetadmin.services.filter_chain import build_plan, execute_plan
from assetadmin.services.folder_tree import (
    backlink_count,
    descendant_file_count,
    files_in_use_count,
)
from assetadmin.services.permissions import PermissionChecker, Principal
from assetadmin.services.versioning import draft_query, get_draft

logger = logging.getLogger(__name__)


class AssetQueryService:
    """Read-only queries behind the asset admin JSON endpoints."""

    record_class = "File"

    def __init__(self, root_can_view_type: str = "Anyone") -> None:
        self.root_can_view_type = root_can_view_type

    def permission_checker(self, db: AsyncSession, principal: Principal) -> PermissionChecker:
        return PermissionChecker(db, principal, self.root_can_view_type)

    async def resolve_ids(self, db: AsyncSession, ids: list[str]) -> list[AssetRecord]:
        """Fetch draft records for ``ids``; every id must resolve."""
        resolved = {i: storable_id(i) for i in ids}
        numeric = sorted({n for n in resolved.values() if n is not None})
        records: list[AssetRecord] = []
        if numeric:
            result = await db.execute(
                draft_query().where(AssetRecord.id.in_(numeric)).order_by(AssetRecord.id)
            )
            records = list(result.scalars().all())

        if len(records) < len(ids):
            found = {r.id for r in records}
            missing = [i for i in ids if resolved[i] not in found]
            logger.info("Unresolved %s ids: %s", self.record_class, missing)
            raise IdentifierNotFoundError(self.record_class, missing)
        return records

    async def file_usage(
        self, db: AsyncSession, ids: list[str], principal: Principal
    ) -> list[dict[str, Any]]:
        """``[{id, inUseCount}]`` for each viewable record in ``ids``."""
        records = await self.resolve_ids(db, ids)
        checker = self.permission_checker(db, principal)

        usage = []
        for record in records:
            if not await checker.can_view(record):
                continue
            if record.is_folder:
                count = await files_in_use_count(db, record)
            else:
                count = await backlink_count(db, record.id)
            usage.append({"id": record.id, "inUseCount": count})
        return usage

    async def descendant_file_counts(
        self, db: AsyncSession, ids: list[str], principal: Principal
    ) -> list[dict[str, Any]]:
        """``[{id, count}]`` for each viewable record in ``ids``."""
        records = await self.resolve_ids(db, ids)
        checker = self.permission_checker(db, principal)

        data = []
        for record in records:
            if not await checker.can_view(record):
                continue
            data.append({"id": record.id, "count": await descendant_file_count(db, record)})
        return data

    async def list_files(
        self, db: AsyncSession, filt: AssetFilter, principal: Principal
    ) -> list[AssetRecord]:
        """Listing for the ``files`` action.

        The parent folder is an anchor: a missing or hidden parent is an
        error, whereas hidden records in the result are silently dropped.
        """
        parent = root_folder()
        if filt.parent_id:
            parent = await get_draft(db, filt.parent_id)
            if parent is None or not parent.is_folder:
                raise RecordNotFoundError(f"Folder#{filt.parent_id} not found")

        checker = self.permission_checker(db, principal)
        if not await checker.can_view(parent):
            logger.warning(
                "Folder#%d view denied for %s", parent.id, principal.username or "anonymous"
            )
            raise PermissionDeniedError(f"Folder#{parent.id} view access not permitted")

        if filt.recursive:
            raise InvalidArgumentError(
                'The "recursive" flag can only be used for the "children" field'
            )

        return await self.filter_list(db, filt, principal)

    async def filter_list(
        self, db: AsyncSession, filt: AssetFilter, principal: Principal
    ) -> list[AssetRecord]:
        """Run the filter chain, then drop what ``principal`` may not view."""
        plan = await build_plan(db, filt)
        records = await execute_plan(db, plan)
        return await self.permission_checker(db, principal).filter_viewable(records)
