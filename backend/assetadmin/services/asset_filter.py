"""Request parameters -> immutable AssetFilter.

Only allow-listed keys survive; anything else in the query string is
dropped without complaint.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Annotated, Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from assetadmin.exceptions import InvalidArgumentError
from assetadmin.models.asset import MAX_RECORD_ID, MIN_RECORD_ID

ALLOWED_KEYS = frozenset({
    "ids",
    "id",
    "parentId",
    "recursive",
    "name",
    "lastEditedFrom",
    "lastEditedTo",
    "createdFrom",
    "createdTo",
    "appCategory",
    "anyChildId",
})

_NON_ID_CHARS = re.compile(r"[^0-9,]")

RecordId = Annotated[int, Field(ge=MIN_RECORD_ID, le=MAX_RECORD_ID)]


def parse_ids(raw: str) -> tuple[str, ...]:
    """'3, 7,x99' -> ('3', '7', '99'). Empty fragments are kept as ''."""
    return tuple(_NON_ID_CHARS.sub("", raw).split(","))


def storable_id(raw: str) -> int | None:
    """Integer value of a digit-only id, or None if no record could have it."""
    if not raw.isdigit():
        return None
    value = int(raw)
    return value if value <= MAX_RECORD_ID else None


class AssetFilter(BaseModel):
    """Validated, frozen filter for one request."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    ids: tuple[str, ...] | None = None
    id: RecordId | None = None
    parent_id: RecordId | None = None
    recursive: bool | None = None
    name: str | None = None
    last_edited_from: date | None = None
    last_edited_to: date | None = None
    created_from: date | None = None
    created_to: date | None = None
    app_category: str | None = None
    any_child_id: RecordId | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and value == "":
            return None
        return value

    @property
    def id_list(self) -> list[str]:
        return list(self.ids or ())


def parse_filter(params: Mapping[str, str]) -> AssetFilter:
    """Build an AssetFilter from raw query parameters."""
    raw: dict[str, Any] = {}
    for key, value in params.items():
        if key not in ALLOWED_KEYS:
            continue
        if key == "ids":
            raw["ids"] = parse_ids(value or "")
        else:
            raw[key] = value

    try:
        return AssetFilter.model_validate(raw)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise InvalidArgumentError(f"Invalid filter: {problems}") from exc
