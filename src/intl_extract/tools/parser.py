"""Tree-sitter parser factory for intl-extract.

Creates and caches parsers for the JavaScript family of languages. Adding a
language requires installing the grammar package and adding an entry to
LANGUAGE_REGISTRY.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import tree_sitter
import tree_sitter_javascript as ts_js
import tree_sitter_typescript as ts_ts

# Registry: language name -> (grammar function, file extensions)
LANGUAGE_REGISTRY: dict[str, tuple[Callable[[], object], list[str]]] = {
    "javascript": (ts_js.language, [".js", ".jsx", ".mjs", ".cjs"]),
    "typescript": (ts_ts.language_typescript, [".ts", ".mts", ".cts"]),
    "tsx": (ts_ts.language_tsx, [".tsx"]),
}

# Build reverse mapping: extension -> language name
EXTENSION_MAP: dict[str, str] = {}
for lang_name, (_, extensions) in LANGUAGE_REGISTRY.items():
    for ext in extensions:
        EXTENSION_MAP[ext] = lang_name


class ParserFactory:
    """Creates and caches tree-sitter parsers per language."""

    def __init__(self, enabled_languages: list[str] | None = None):
        if enabled_languages is None:
            enabled_languages = list(LANGUAGE_REGISTRY.keys())

        self._parsers: dict[str, tree_sitter.Parser] = {}

        for lang in enabled_languages:
            if lang not in LANGUAGE_REGISTRY:
                raise ValueError(
                    f"Unsupported language: {lang}. "
                    f"Available: {list(LANGUAGE_REGISTRY.keys())}"
                )
            grammar_fn, _ = LANGUAGE_REGISTRY[lang]
            language = tree_sitter.Language(grammar_fn())
            self._parsers[lang] = tree_sitter.Parser(language)

    @property
    def enabled_languages(self) -> list[str]:
        return list(self._parsers.keys())

    def detect_language(self, filepath: Path) -> str | None:
        """Detect language from file extension, only if that language is enabled."""
        lang = EXTENSION_MAP.get(filepath.suffix.lower())
        if lang and lang in self._parsers:
            return lang
        return None

    def parse_bytes(self, source: bytes, language: str) -> tree_sitter.Tree:
        """Parse raw bytes with a specified language."""
        if language not in self._parsers:
            raise ValueError(f"Language not enabled: {language}")
        return self._parsers[language].parse(source)
