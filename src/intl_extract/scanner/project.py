"""Extraction pipeline: walks files, parses them, extracts and emits catalogs.

This is the main entry point tying together the file walker, the tree-sitter
parser and the per-file extraction coordinator. A failure in one file is
recorded and never stops the rest of the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from intl_extract.config import ExtractionOptions, IntlExtractConfig
from intl_extract.errors import ExtractionError
from intl_extract.extractor.coordinator import FileExtraction, FileResult
from intl_extract.extractor.emitter import relative_source_path
from intl_extract.ignore import IgnoreManager
from intl_extract.scanner.file_walker import walk_project
from intl_extract.tools.parser import ParserFactory
from intl_extract.tools.source import SourceFile

logger = structlog.get_logger(__name__)


@dataclass
class RunResult:
    """Results from an extraction run."""

    files_processed: int = 0
    files_skipped: int = 0
    files_failed: int = 0
    messages_extracted: int = 0
    catalogs_written: int = 0
    warnings: int = 0
    errors: list[str] = field(default_factory=list)


def parse_source(
    code: str | bytes,
    filename: str | Path,
    language: str,
    parser_factory: ParserFactory,
    cwd: Path,
) -> SourceFile:
    """Parse source text into a SourceFile with paths relative to ``cwd``."""
    source = code.encode("utf-8") if isinstance(code, str) else code
    tree = parser_factory.parse_bytes(source, language)
    rel_path = relative_source_path(filename, cwd).as_posix()
    if tree.root_node.has_error:
        logger.warning(
            "source has syntax errors, extracting from the recovered tree",
            file=rel_path,
        )
    return SourceFile(
        filename=str(filename),
        rel_path=rel_path,
        source=source,
        tree=tree,
        language=language,
    )


def extract_code(
    code: str | bytes,
    filename: str | Path = "file.jsx",
    options: ExtractionOptions | None = None,
    *,
    cwd: Path | None = None,
    language: str | None = None,
    parser_factory: ParserFactory | None = None,
) -> FileResult:
    """Extract messages from in-memory source.

    The language is detected from ``filename`` unless given explicitly.

    Raises:
        ExtractionError: on the first invalid declaration in the file.
        ValueError: if the language is unsupported.
    """
    cwd = cwd or Path.cwd()
    if parser_factory is None:
        parser_factory = ParserFactory()
    if language is None:
        language = parser_factory.detect_language(Path(filename))
        if language is None:
            raise ValueError(f"Cannot detect a supported language for {filename}")

    source = parse_source(code, filename, language, parser_factory, cwd)
    return FileExtraction(source, options, cwd=cwd).run()


def extract_file(
    path: Path,
    options: ExtractionOptions | None,
    *,
    cwd: Path,
    parser_factory: ParserFactory,
) -> FileResult | None:
    """Extract messages from a file on disk; None if its language is not enabled."""
    language = parser_factory.detect_language(path)
    if language is None:
        return None
    return extract_code(
        path.read_bytes(),
        path,
        options,
        cwd=cwd,
        language=language,
        parser_factory=parser_factory,
    )


def extract_project(
    config: IntlExtractConfig,
    *,
    parser_factory: ParserFactory | None = None,
) -> tuple[RunResult, list[FileResult]]:
    """Run extraction over every eligible file under the project root.

    Returns:
        Tuple of (run stats, results of the files that extracted cleanly).
    """
    project_root = Path(config.project.root).resolve()
    ignore_manager = IgnoreManager(project_root, config.ignore)
    if parser_factory is None:
        parser_factory = ParserFactory(config.parsing.languages)

    result = RunResult()
    file_results: list[FileResult] = []

    for file_entry in walk_project(
        project_root,
        ignore_manager,
        max_file_size_kb=config.parsing.max_file_size_kb,
        languages=config.parsing.languages,
    ):
        _run_one(file_entry.path, config.extraction, project_root, parser_factory, result, file_results)

    return result, file_results


def extract_files(
    file_paths: list[Path],
    config: IntlExtractConfig,
    project_root: Path,
) -> tuple[RunResult, list[FileResult]]:
    """Extract a specific set of files, e.g. those passed on the command line."""
    parser_factory = ParserFactory(config.parsing.languages)
    result = RunResult()
    file_results: list[FileResult] = []

    for path in file_paths:
        if not path.exists():
            result.errors.append(f"{path}: file not found")
            result.files_failed += 1
            continue
        _run_one(path.resolve(), config.extraction, project_root, parser_factory, result, file_results)

    return result, file_results


def _run_one(
    path: Path,
    options: ExtractionOptions,
    project_root: Path,
    parser_factory: ParserFactory,
    result: RunResult,
    file_results: list[FileResult],
) -> None:
    rel_path = relative_source_path(path, project_root).as_posix()
    try:
        file_result = extract_file(path, options, cwd=project_root, parser_factory=parser_factory)
    except ExtractionError as e:
        # Already carries the file and position
        result.errors.append(str(e))
        result.files_failed += 1
        return
    except OSError as e:
        result.errors.append(f"{rel_path}: {e}")
        result.files_failed += 1
        return

    if file_result is None:
        result.files_skipped += 1
        return

    file_results.append(file_result)
    result.files_processed += 1
    result.messages_extracted += len(file_result.messages)
    result.warnings += len(file_result.warnings)
    if file_result.output_path is not None:
        result.catalogs_written += 1
