"""View permissions for asset records.

The requesting principal is always passed in explicitly; nothing here
reads "the current user" from ambient state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from sqlalchemy.ext.asyncio import AsyncSession

from assetadmin.models.asset import AssetRecord
from assetadmin.services.versioning import get_draft

if TYPE_CHECKING:
    from assetadmin.models.user import User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """Who is asking. ``id`` is None for anonymous requests."""
    id: str | None = None
    username: str | None = None
    group_codes: frozenset[str] = field(default_factory=frozenset)
    is_admin: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.id is not None

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            id=user.id,
            username=user.username,
            group_codes=frozenset(g.code for g in user.groups),
            is_admin=bool(user.is_admin),
        )


ANONYMOUS = Principal()


class PermissionChecker:
    """Request-scoped view checks for one principal.

    Decisions for ancestor folders are memoised, so checking a page of
    siblings walks the folder chain once.
    """

    def __init__(
        self,
        db: AsyncSession,
        principal: Principal,
        root_can_view_type: str = "Anyone",
    ) -> None:
        self._db = db
        self.principal = principal
        self.root_can_view_type = root_can_view_type
        self._folder_memo: dict[int, bool] = {}

    def _allows(self, rule: str, groups: frozenset[str]) -> bool:
        if rule == "Anyone":
            return True
        if rule == "LoggedInUsers":
            return self.principal.is_authenticated
        if rule == "OnlyTheseUsers":
            return self.principal.is_authenticated and bool(groups & self.principal.group_codes)
        return False

    async def can_view(self, record: AssetRecord) -> bool:
        if self.principal.is_admin:
            return True
        if record.can_view_type != "Inherit":
            return self._allows(record.can_view_type, record.viewer_group_codes)
        if record.id == 0 or not record.parent_id:
            return self._allows(self.root_can_view_type, frozenset())
        return await self._can_view_folder(record.parent_id)

    async def _can_view_folder(self, folder_id: int) -> bool:
        if folder_id in self._folder_memo:
            return self._folder_memo[folder_id]

        # Walk up until a folder with an explicit rule (or the root) decides
        chain: list[int] = []
        decision: bool | None = None
        current = folder_id
        while decision is None:
            if current in self._folder_memo:
                decision = self._folder_memo[current]
                break
            if not current or current in chain:
                decision = self._allows(self.root_can_view_type, frozenset())
                break
            chain.append(current)
            folder = await get_draft(self._db, current)
            if folder is None:
                decision = self._allows(self.root_can_view_type, frozenset())
            elif folder.can_view_type != "Inherit":
                decision = self._allows(folder.can_view_type, folder.viewer_group_codes)
            else:
                current = folder.parent_id

        for fid in chain:
            self._folder_memo[fid] = decision
        return decision

    async def filter_viewable(self, records: Iterable[AssetRecord]) -> list[AssetRecord]:
        """Keep only the records the principal may view (order preserved)."""
        visible = []
        for record in records:
            if await self.can_view(record):
                visible.append(record)
        return visible
