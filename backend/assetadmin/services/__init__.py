"""Business logic services."""

from assetadmin.services.asset_service import AssetQueryService
from assetadmin.services.permissions import ANONYMOUS, PermissionChecker, Principal

__all__ = [
    "AssetQueryService",
    "ANONYMOUS",
    "PermissionChecker",
    "Principal",
]
