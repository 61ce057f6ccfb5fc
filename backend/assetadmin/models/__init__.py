"""SQLAlchemy ORM models for AssetAdmin."""

from assetadmin.models.base import Base
from assetadmin.models.user import Group, User
from assetadmin.models.asset import AssetRecord
from assetadmin.models.asset_usage import AssetUsage

__all__ = [
    "Base",
    "Group",
    "User",
    "AssetRecord",
    "AssetUsage",
]
