"""Tool description notes stored as markdown files with frontmatter."""

from __future__ import annotations

import logging
from pathlib import Path

import frontmatter

from mcp_ipfs.models.tool_note import ToolNote

logger = logging.getLogger(__name__)

PACKAGE_NOTES_DIR = Path(__file__).resolve().parent / "notes"


def load_tool_note(path: Path) -> ToolNote:
    post = frontmatter.load(str(path))
    return ToolNote.model_validate({**post.metadata, "text": post.content.strip(), "source": str(path)})


class ToolNoteRegistry:
    """
    Indexes ``*.md`` notes across roots. Earlier roots win when two roots hold
    a note with the same file stem, so a user directory can shadow packaged notes.
    """

    def __init__(self, note_roots: list[Path]) -> None:
        self.note_roots = note_roots
        self._notes: list[ToolNote] | None = None

    def _build_index(self) -> dict[str, Path]:
        index: dict[str, Path] = {}
        for root in self.note_roots:
            if not root.exists():
                continue
            for path in sorted(root.rglob("*.md")):
                note_id = path.stem
                if note_id in index:
                    continue
                index[note_id] = path
        return index

    def notes(self) -> list[ToolNote]:
        if self._notes is None:
            index = self._build_index()
            self._notes = [load_tool_note(index[note_id]) for note_id in sorted(index)]
            logger.debug("Loaded %d tool notes from %s", len(self._notes), self.note_roots)
        return self._notes

    def describe(self, tool_name: str, description: str) -> str:
        """Applies replace notes first, then append notes, each in file-name order."""
        matching = [note for note in self.notes() if note.applies_to(tool_name)]
        for note in [n for n in matching if n.mode == "replace"] + [n for n in matching if n.mode == "append"]:
            description = note.apply(description)
        return description.strip()


def default_note_roots(user_notes_dir: Path | None = None) -> list[Path]:
    roots: list[Path] = []
    if user_notes_dir is not None:
        roots.append(user_notes_dir)
    roots.append(PACKAGE_NOTES_DIR)
    return roots
