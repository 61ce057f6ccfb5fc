"""Turn an AssetFilter into a single draft-stage query.

Each step returns a new ``ListingPlan``; nothing is executed until
``execute_plan``. Order matters: the sibling fallback (``anyChildId``)
only applies when none of the search steps before it fired.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, time
from typing import Any

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from assetadmin.exceptions import RecordNotFoundError
from assetadmin.models.asset import AssetRecord, root_folder
from assetadmin.services.asset_filter import AssetFilter, storable_id
from assetadmin.services.folder_tree import nested_folder_ids
from assetadmin.services.versioning import draft_query, get_draft

logger = logging.getLogger(__name__)

DAY_START = time(0, 0, 0)
DAY_END = time(23, 59, 59)


@dataclass(frozen=True)
class ListingPlan:
    conditions: tuple[Any, ...] = ()
    order_by: tuple[Any, ...] = (AssetRecord.name, AssetRecord.id)
    root_only: bool = False
    search: bool = False

    def narrow(self, *conditions: Any, search: bool | None = None) -> "ListingPlan":
        return replace(
            self,
            conditions=self.conditions + conditions,
            search=self.search if search is None else search,
        )


ROOT_ONLY = ListingPlan(root_only=True)


async def build_plan(db: AsyncSession, filt: AssetFilter) -> ListingPlan:
    plan = ListingPlan()

    if filt.id is not None and filt.id > 0:
        if await get_draft(db, filt.id) is None:
            raise RecordNotFoundError("File or Folder could not be found")
        plan = plan.narrow(AssetRecord.id == filt.id)
    elif filt.id == 0:
        return ROOT_ONLY

    if filt.ids is not None:
        wanted = [storable_id(i) for i in filt.ids]
        plan = plan.narrow(AssetRecord.id.in_([n for n in wanted if n is not None]))

    if filt.parent_id is not None:
        if not filt.recursive:
            plan = plan.narrow(AssetRecord.parent_id == filt.parent_id, search=True)
        elif filt.parent_id:
            parents = await nested_folder_ids(db, filt.parent_id)
            plan = plan.narrow(AssetRecord.parent_id.in_(parents), search=True)
        else:
            # Recursive from the root: everything
            plan = replace(plan, search=True)

    if filt.name:
        plan = plan.narrow(
            or_(
                AssetRecord.name.icontains(filt.name, autoescape=True),
                AssetRecord.title.icontains(filt.name, autoescape=True),
            ),
            search=True,
        )

    if filt.last_edited_from:
        plan = plan.narrow(
            AssetRecord.last_edited >= datetime.combine(filt.last_edited_from, DAY_START),
            search=True,
        )
    if filt.last_edited_to:
        plan = plan.narrow(
            AssetRecord.last_edited <= datetime.combine(filt.last_edited_to, DAY_END),
            search=True,
        )

    if filt.created_from:
        plan = plan.narrow(
            AssetRecord.created >= datetime.combine(filt.created_from, DAY_START),
            search=True,
        )
    if filt.created_to:
        plan = plan.narrow(
            AssetRecord.created <= datetime.combine(filt.created_to, DAY_END),
            search=True,
        )

    if filt.app_category:
        # Case-insensitive on purpose: ".jpg" also matches "PHOTO.JPG"
        plan = plan.narrow(
            AssetRecord.name.iendswith(filt.app_category, autoescape=True),
            search=True,
        )

    if not plan.search and filt.any_child_id is not None:
        child = await get_draft(db, filt.any_child_id)
        parent_id = (child.parent_id or 0) if child else 0
        if parent_id:
            plan = plan.narrow(AssetRecord.id == parent_id)
        else:
            plan = ROOT_ONLY

    logger.debug(
        "Listing plan: %d condition(s), root_only=%s, search=%s",
        len(plan.conditions), plan.root_only, plan.search,
    )
    return plan


async def execute_plan(db: AsyncSession, plan: ListingPlan) -> list[AssetRecord]:
    if plan.root_only:
        return [root_folder()]
    stmt = draft_query()
    if plan.conditions:
        stmt = stmt.where(*plan.conditions)
    result = await db.execute(stmt.order_by(*plan.order_by))
    return list(result.scalars().all())
