"""Parsers for the plain-text output of w3 commands."""

from __future__ import annotations

import re

from mcp_ipfs.models.space_entry import SpaceEntry

DID_KEY_PREFIX = "did:key:"
CURRENT_MARKER = "*"

BLOB_STORED_RE = re.compile(r"Stored\s+(\S+)\s+\((\S+)\)")


def parse_space_line(line: str) -> SpaceEntry | None:
    trimmed = line.strip()
    if not trimmed:
        return None
    is_current = False
    if trimmed.startswith(CURRENT_MARKER):
        is_current = True
        trimmed = trimmed[len(CURRENT_MARKER) :].strip()
    parts = trimmed.split()
    if not parts or not parts[0].startswith(DID_KEY_PREFIX):
        return None
    name = " ".join(parts[1:]) or None
    return SpaceEntry(did=parts[0], name=name, is_current=is_current)


def parse_space_listing(text: str) -> list[SpaceEntry]:
    """
    Parses `w3 space ls` output: "<did> <name>" per line, current space prefixed with "*".
    Lines that do not start with a did:key are skipped.
    """
    spaces: list[SpaceEntry] = []
    for line in text.strip().split("\n"):
        entry = parse_space_line(line)
        if entry is not None:
            spaces.append(entry)
    return spaces


def parse_blob_stored(text: str) -> tuple[str, str] | None:
    """Returns (multihash, cid) from `w3 can blob add` output."""
    match = BLOB_STORED_RE.search(text)
    if match is None:
        return None
    return match.group(1), match.group(2)
