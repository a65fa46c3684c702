"""Pydantic model for a tool description note."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ToolNote(BaseModel):
    tools: list[str] = Field(min_length=1)
    mode: Literal["append", "replace"] = "append"
    text: str = ""
    source: str = ""

    def applies_to(self, tool_name: str) -> bool:
        return tool_name in self.tools

    def apply(self, description: str) -> str:
        if self.mode == "replace":
            return self.text
        if not description:
            return self.text
        return f"{description} {self.text}"
