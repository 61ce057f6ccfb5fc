"""Versioned file/folder records — one row per (id, stage)."""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, Integer, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from assetadmin.models.base import Base

DRAFT = "Stage"
LIVE = "Live"

# SQLite INTEGER range
MAX_RECORD_ID = 2**63 - 1
MIN_RECORD_ID = -(2**63)

KIND_FILE = "file"
KIND_FOLDER = "folder"


class AssetRecord(Base):
    """A file or folder in one version stage.

    ``kind`` is the tagged variant; callers branch on ``is_folder``.
    ``parent_id`` 0 means the record sits directly under the root folder.
    """
    __tablename__ = "assets"
    __table_args__ = (
        Index("ix_assets_stage_parent", "stage", "parent_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    stage: Mapped[str] = mapped_column(String(10), primary_key=True, default=DRAFT)
    kind: Mapped[str] = mapped_column(String(10), nullable=False, default=KIND_FILE)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    parent_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    can_view_type: Mapped[str] = mapped_column(String(20), nullable=False, default="Inherit")
    viewer_groups: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    created: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
    last_edited: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )

    @property
    def is_folder(self) -> bool:
        return self.kind == KIND_FOLDER

    @property
    def viewer_group_codes(self) -> frozenset[str]:
        if not self.viewer_groups:
            return frozenset()
        return frozenset(c.strip() for c in self.viewer_groups.split(",") if c.strip())

    def __repr__(self) -> str:
        return f"<AssetRecord(id={self.id}, stage='{self.stage}', name='{self.name}')>"


def root_folder() -> AssetRecord:
    """Synthetic, non-persisted root folder (id 0)."""
    return AssetRecord(
        id=0,
        stage=DRAFT,
        kind=KIND_FOLDER,
        name="",
        title="",
        parent_id=0,
        can_view_type="Inherit",
        created=None,
        last_edited=None,
    )
