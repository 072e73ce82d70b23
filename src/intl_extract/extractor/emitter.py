"""Writes per-file message catalogs under the messages directory."""

from __future__ import annotations

import os
from pathlib import Path

import structlog

from intl_extract.schema.models import MessageDescriptor, dump_catalog

logger = structlog.get_logger(__name__)


def relative_source_path(filename: str | Path, cwd: Path) -> Path:
    """Path of a source file relative to the working directory."""
    path = Path(filename)
    if not path.is_absolute():
        path = cwd / path
    return Path(os.path.relpath(path, cwd))


def catalog_path(messages_dir: Path, filename: str | Path, cwd: Path) -> Path:
    """Output path mirroring the source file's directory under ``messages_dir``.

    ``src/widgets/Greeting.jsx`` maps to ``<messages_dir>/src/widgets/Greeting.json``.
    Files outside the working directory lose their leading ``..`` segments so
    the catalog always lands inside ``messages_dir``.
    """
    rel = relative_source_path(filename, cwd)
    parts = [part for part in rel.parent.parts if part not in ("..", ".")]
    return Path(messages_dir).joinpath(*parts, rel.stem + ".json")


def write_catalog(descriptors: list[MessageDescriptor], path: Path) -> Path:
    """Write descriptors as an indented UTF-8 JSON array, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dump_catalog(descriptors), encoding="utf-8")
    logger.debug("catalog written", path=str(path), messages=len(descriptors))
    return path
