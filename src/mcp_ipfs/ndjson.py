"""Newline-delimited JSON helpers for w3 output."""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp_ipfs.errors import NdjsonParseError, OutputParseError

logger = logging.getLogger(__name__)

PREVIEW_CHARS = 100


def _preview(text: str, limit: int = PREVIEW_CHARS) -> str:
    if len(text) > limit:
        return text[:limit] + "..."
    return text


def parse_ndjson(text: str) -> list[Any]:
    """
    Parses NDJSON into one record per non-blank line, in input order.
    A single malformed line rejects the whole batch.
    """
    lines = [line for line in text.strip().split("\n") if line.strip()]
    records: list[Any] = []
    for index, line in enumerate(lines, start=1):
        try:
            records.append(json.loads(line))
        except json.JSONDecodeError as exc:
            logger.error(
                'Failed to parse NDJSON line #%d. Error: %s. Line content: "%s"',
                index,
                exc,
                _preview(line),
            )
            raise NdjsonParseError(
                f"Failed to parse NDJSON output. Error: {exc} (line {index}: {_preview(line)!r}). "
                "Please check w3cli output format.",
                line_number=index,
                line=line,
                raw_output=text,
            ) from exc
    return records


def first_record(records: list[Any]) -> Any:
    if records:
        return records[0]
    return {}


def parse_json_document(text: str) -> Any:
    """Parses stdout holding exactly one JSON document."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise OutputParseError(f"Output is not a JSON document: {exc}", raw_output=text) from exc


def parse_first_record(text: str) -> Any:
    """
    First NDJSON record of the output, or ``{}`` when there is none.
    Falls back to a single (possibly pretty-printed) JSON document.
    """
    try:
        return first_record(parse_ndjson(text))
    except NdjsonParseError:
        logger.debug("Output is not NDJSON, retrying as a single JSON document")
    return parse_json_document(text)
