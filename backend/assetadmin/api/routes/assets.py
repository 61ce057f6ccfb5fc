"""Asset admin JSON endpoints — usage, descendant counts, listings."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from assetadmin.api.deps import get_asset_filter, get_asset_service, get_current_principal
from assetadmin.database import get_db
from assetadmin.schemas.assets import (
    AssetItem,
    DescendantFileCountsResponse,
    FilesResponse,
    FileUsageResponse,
)
from assetadmin.services.asset_filter import AssetFilter
from assetadmin.services.asset_service import AssetQueryService
from assetadmin.services.permissions import Principal

router = APIRouter()


@router.api_route("/fileusage", methods=["GET", "POST"], response_model=FileUsageResponse)
async def file_usage(
    filt: AssetFilter = Depends(get_asset_filter),
    principal: Principal = Depends(get_current_principal),
    service: AssetQueryService = Depends(get_asset_service),
    db: AsyncSession = Depends(get_db),
):
    """In-use counts for the comma-separated ``ids``."""
    usage = await service.file_usage(db, filt.id_list, principal)
    return FileUsageResponse.model_validate({"usage": usage})


@router.api_route(
    "/descendantfilecounts",
    methods=["GET", "POST"],
    response_model=DescendantFileCountsResponse,
)
async def descendant_file_counts(
    filt: AssetFilter = Depends(get_asset_filter),
    principal: Principal = Depends(get_current_principal),
    service: AssetQueryService = Depends(get_asset_service),
    db: AsyncSession = Depends(get_db),
):
    """Nested file counts for the comma-separated ``ids``."""
    counts = await service.descendant_file_counts(db, filt.id_list, principal)
    return DescendantFileCountsResponse.model_validate({"counts": counts})


@router.api_route("/files", methods=["GET", "POST"], response_model=FilesResponse)
async def files(
    filt: AssetFilter = Depends(get_asset_filter),
    principal: Principal = Depends(get_current_principal),
    service: AssetQueryService = Depends(get_asset_service),
    db: AsyncSession = Depends(get_db),
):
    """Filtered listing of files and folders the caller may view."""
    records = await service.list_files(db, filt, principal)
    return FilesResponse(files=[AssetItem.from_record(r) for r in records])
