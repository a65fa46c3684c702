"""Pydantic model for one line of `w3 space ls`."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class SpaceEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    did: str
    name: Optional[str] = None
    is_current: bool = Field(default=False, alias="isCurrent")

    def to_payload(self) -> dict[str, Any]:
        # Unnamed spaces carry no "name" key at all.
        return self.model_dump(by_alias=True, exclude_none=True)
