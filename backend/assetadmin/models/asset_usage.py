"""Backlink tracking — one row per place that references an asset."""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from assetadmin.models.base import Base


class AssetUsage(Base):
    __tablename__ = "asset_usages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    asset_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    owner_class: Mapped[str] = mapped_column(String(200), nullable=False)
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<AssetUsage(asset_id={self.asset_id}, owner='{self.owner_class}#{self.owner_id}')>"
