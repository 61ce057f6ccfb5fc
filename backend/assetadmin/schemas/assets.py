"""Asset admin response schemas — camelCase on the wire."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from assetadmin.models.asset import AssetRecord
from assetadmin.utils.categories import category_for, get_extension


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FileUsageEntry(CamelModel):
    id: int
    in_use_count: int


class FileUsageResponse(CamelModel):
    usage: list[FileUsageEntry]


class DescendantFileCount(CamelModel):
    id: int
    count: int


class DescendantFileCountsResponse(CamelModel):
    counts: list[DescendantFileCount]


class AssetItem(CamelModel):
    """File or folder as listed by the ``files`` action."""
    id: int
    type: str
    is_folder: bool
    name: str
    title: str
    parent_id: int
    created: datetime | None = None
    last_edited: datetime | None = None
    extension: str = ""
    category: str | None = None

    @classmethod
    def from_record(cls, record: AssetRecord) -> "AssetItem":
        return cls(
            id=record.id,
            type=record.kind,
            is_folder=record.is_folder,
            name=record.name,
            title=record.title or record.name,
            parent_id=record.parent_id or 0,
            created=record.created,
            last_edited=record.last_edited,
            extension="" if record.is_folder else get_extension(record.name),
            category=category_for(record.name, record.is_folder),
        )


class FilesResponse(CamelModel):
    files: list[AssetItem]
