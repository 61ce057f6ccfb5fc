"""Tests for usage and descendant-count lookups."""

import pytest
import pytest_asyncio

from assetadmin.exceptions import IdentifierNotFoundError
from assetadmin.models.asset_usage import AssetUsage
from assetadmin.services.asset_service import AssetQueryService
from assetadmin.services.folder_tree import nested_folder_ids
from assetadmin.services.permissions import ANONYMOUS

from conftest import EDITOR


@pytest_asyncio.fixture
async def service():
    return AssetQueryService()


def _by_id(entries, key):
    return {e["id"]: e[key] for e in entries}


@pytest.mark.asyncio
async def test_nested_folder_ids(asset_tree):
    assert sorted(await nested_folder_ids(asset_tree, 1)) == [1, 2, 6]
    assert await nested_folder_ids(asset_tree, 6) == [6]


@pytest.mark.asyncio
async def test_file_usage_counts(asset_tree, service):
    usage = await service.file_usage(asset_tree, ["3", "4", "7", "1", "2"], ANONYMOUS)
    assert _by_id(usage, "inUseCount") == {1: 3, 2: 2, 3: 2, 4: 0, 7: 1}


@pytest.mark.asyncio
async def test_folder_usage_ignores_own_backlinks(asset_tree, service):
    asset_tree.add(AssetUsage(asset_id=6, owner_class="Page", owner_id=9))
    asset_tree.add(AssetUsage(asset_id=6, owner_class="Page", owner_id=10))
    await asset_tree.commit()

    usage = await service.file_usage(asset_tree, ["6"], ANONYMOUS)
    assert usage == [{"id": 6, "inUseCount": 1}]


@pytest.mark.asyncio
async def test_file_usage_missing_ids(asset_tree, service):
    with pytest.raises(IdentifierNotFoundError) as exc_info:
        await service.file_usage(asset_tree, ["3", "7", "99"], ANONYMOUS)
    assert exc_info.value.missing_ids == ["99"]
    assert str(exc_info.value) == "File items 99 are not found"


@pytest.mark.asyncio
async def test_missing_ids_include_empty_and_live_only(asset_tree, service):
    with pytest.raises(IdentifierNotFoundError) as exc_info:
        await service.file_usage(asset_tree, ["", "3", "12", "42"], ANONYMOUS)
    assert set(exc_info.value.missing_ids) == {"", "12", "42"}


@pytest.mark.asyncio
async def test_file_usage_omits_hidden_records(asset_tree, service):
    usage = await service.file_usage(asset_tree, ["8", "9", "3"], ANONYMOUS)
    assert usage == [{"id": 3, "inUseCount": 2}]

    usage = await service.file_usage(asset_tree, ["8", "9", "3"], EDITOR)
    assert _by_id(usage, "inUseCount") == {3: 2, 8: 1, 9: 1}


@pytest.mark.asyncio
async def test_no_ids_returns_nothing(asset_tree, service):
    assert await service.file_usage(asset_tree, [], ANONYMOUS) == []
    assert await service.descendant_file_counts(asset_tree, [], ANONYMOUS) == []


@pytest.mark.asyncio
async def test_descendant_file_counts(asset_tree, service):
    counts = await service.descendant_file_counts(asset_tree, ["1", "2", "3", "8"], EDITOR)
    assert _by_id(counts, "count") == {1: 4, 2: 2, 3: 0, 8: 1}


@pytest.mark.asyncio
async def test_descendant_file_counts_omit_hidden(asset_tree, service):
    counts = await service.descendant_file_counts(asset_tree, ["8", "1"], ANONYMOUS)
    assert counts == [{"id": 1, "count": 4}]


@pytest.mark.asyncio
async def test_descendant_file_counts_missing_ids(asset_tree, service):
    with pytest.raises(IdentifierNotFoundError) as exc_info:
        await service.descendant_file_counts(asset_tree, ["1", "500", "501"], ANONYMOUS)
    assert set(exc_info.value.missing_ids) == {"500", "501"}
