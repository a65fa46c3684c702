"""CLI entrypoint."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml

from mcp_ipfs.config import ServerSettings
from mcp_ipfs.server import build_registry, serve
from mcp_ipfs.tool_registry import ToolRegistry

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    # stdout carries the MCP stream; logs go to stderr only.
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stderr, force=True)


def dump_catalog(registry: ToolRegistry) -> str:
    entries = [descriptor.to_catalog_entry() for descriptor in registry.descriptors()]
    return yaml.safe_dump(entries, allow_unicode=True, default_flow_style=False, sort_keys=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-ipfs",
        description="MCP server exposing storacha.network storage through the w3 CLI.",
    )
    parser.add_argument("--notes-dir", type=str, default=None, help="Extra directory of tool description notes")
    parser.add_argument("--log-level", type=str, default="INFO", help="Logging level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--list-tools", action="store_true", help="Print the tool catalog as YAML and exit")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    settings = ServerSettings()
    notes_dir = Path(args.notes_dir) if args.notes_dir else None

    if args.list_tools:
        print(dump_catalog(build_registry(settings, notes_dir)), end="")
        return

    logger.info("Starting mcp-ipfs server (storacha.network via w3cli)...")
    if not settings.login_email:
        logger.error("Missing environment variable W3_LOGIN_EMAIL. Exiting.")
        raise SystemExit(1)

    # Async entrypoint
    import anyio

    anyio.run(serve, settings, notes_dir)
