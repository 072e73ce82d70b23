"""Per-file extraction lifecycle.

A FileExtraction owns everything scoped to one source file: the catalog, the
extraction marks, pending source edits and warnings. Nothing is shared across
files, so each file gets an independent catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import tree_sitter

from intl_extract.config import ExtractionOptions
from intl_extract.extractor.catalog import Catalog
from intl_extract.extractor.emitter import catalog_path, write_catalog
from intl_extract.extractor.evaluator import DescriptorEvaluator
from intl_extract.extractor.recognizers import get_recognizers
from intl_extract.schema.models import MessageDescriptor
from intl_extract.tools.evaluate import StaticEvaluator
from intl_extract.tools.helpers import iter_nodes
from intl_extract.tools.scope import ScopeResolver
from intl_extract.tools.source import SourceFile

# Importing the recognizer modules registers them.
from intl_extract.extractor.recognizers import function_call, tagged_element  # noqa: F401

logger = structlog.get_logger(__name__)

METADATA_KEY = "react-intl"


@dataclass
class FileResult:
    """Outcome of extracting one file."""

    filename: str
    messages: list[MessageDescriptor]
    metadata: dict[str, Any]
    code: str
    warnings: list[str] = field(default_factory=list)
    output_path: Path | None = None


class ExtractionMarks:
    """Identity-keyed record of nodes that were already extracted."""

    def __init__(self) -> None:
        self._ids: set[int] = set()

    def __len__(self) -> int:
        return len(self._ids)

    def mark(self, node: tree_sitter.Node) -> None:
        self._ids.add(node.id)

    def is_marked(self, node: tree_sitter.Node) -> bool:
        return node.id in self._ids


class FileExtraction:
    """Runs the recognizers over one parsed file and collects its catalog."""

    def __init__(
        self,
        source: SourceFile,
        options: ExtractionOptions | None = None,
        *,
        cwd: Path | None = None,
    ):
        self.source = source
        self.options = options or ExtractionOptions()
        self.cwd = cwd or Path.cwd()
        self.scope = ScopeResolver(source.root)
        self.evaluator = DescriptorEvaluator(source, StaticEvaluator(self.scope))
        self.marks = ExtractionMarks()
        self.catalog: Catalog | None = None
        self.warnings: list[str] = []
        self._removals: list[tuple[int, int]] = []

    def on_file_start(self) -> None:
        """Create the file's empty catalog."""
        if self.catalog is None:
            self.catalog = Catalog(self.source, self.options)

    def traverse(self) -> None:
        """Visit every node in document order, dispatching to the recognizers.

        Safe to call repeatedly: extraction marks keep declarations from being
        recorded twice.
        """
        if self.catalog is None:
            self.on_file_start()
        for node in iter_nodes(self.source.root):
            for recognizer in get_recognizers(node.type):
                recognizer(node, self)

    def on_file_end(self) -> FileResult:
        """Snapshot the catalog, apply source edits and emit the catalog file."""
        if self.catalog is None:
            self.on_file_start()
        descriptors = self.catalog.values()

        output_path = None
        if self.options.messages_dir is not None and descriptors:
            output_path = write_catalog(
                descriptors,
                catalog_path(self.options.messages_dir, self.source.filename, self.cwd),
            )

        logger.debug(
            "file extracted",
            file=self.source.rel_path,
            messages=len(descriptors),
        )
        return FileResult(
            filename=self.source.filename,
            messages=descriptors,
            metadata={METADATA_KEY: {"messages": descriptors}},
            code=self.transformed_code(),
            warnings=list(self.warnings),
            output_path=output_path,
        )

    def run(self) -> FileResult:
        self.on_file_start()
        self.traverse()
        return self.on_file_end()

    def warn(self, message: str, node: tree_sitter.Node) -> None:
        """Report a non-fatal problem through the log channel."""
        start, _ = self.source.span(node)
        self.warnings.append(message)
        logger.warning(message, file=self.source.rel_path, line=start.line)

    def remove_node(self, node: tree_sitter.Node) -> None:
        """Schedule ``node`` and the whitespace before it for removal from the output code."""
        prev = node.prev_sibling
        start = prev.end_byte if prev is not None else node.start_byte
        span = (start, node.end_byte)
        if span not in self._removals:
            self._removals.append(span)

    def transformed_code(self) -> str:
        """The source with all scheduled removals applied."""
        code = self.source.source
        for start, end in sorted(self._removals, reverse=True):
            code = code[:start] + code[end:]
        return code.decode("utf-8", errors="replace")
