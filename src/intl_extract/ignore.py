"""Centralized ignore-pattern manager for intl-extract.

Decides which paths the project scanner skips. Composes patterns from
hardcoded defaults, .gitignore, .intlextractignore and config-level extra
patterns.
"""

from pathlib import Path

from pathspec import PathSpec

from intl_extract.config import IgnoreConfig

IGNORE_FILENAME = ".intlextractignore"

# Always ignored, regardless of config
DEFAULT_IGNORE_PATTERNS = [
    ".git/",
    ".hg/",
    "node_modules/",
    "bower_components/",
    "jspm_packages/",
    "dist/",
    "build/",
    "coverage/",
    ".cache/",
    ".next/",
    ".venv/",
    "venv/",
    "*.min.js",
    "*.map",
    "*.d.ts",
    ".DS_Store",
]


class IgnoreManager:
    """Manages file ignore patterns from multiple sources.

    Usage:
        manager = IgnoreManager(project_root, config.ignore)
        if manager.is_ignored(some_path):
            skip...
    """

    def __init__(self, project_root: Path, config: IgnoreConfig | None = None):
        if config is None:
            config = IgnoreConfig()

        self.project_root = project_root.resolve()
        patterns: list[str] = list(DEFAULT_IGNORE_PATTERNS)

        if config.use_gitignore:
            gitignore = self.project_root / ".gitignore"
            if gitignore.exists():
                patterns.extend(self._read_ignore_file(gitignore))

        if config.use_intlextractignore:
            own = self.project_root / IGNORE_FILENAME
            if own.exists():
                patterns.extend(self._read_ignore_file(own))

        patterns.extend(config.extra_patterns)

        self._spec = PathSpec.from_lines("gitignore", patterns)

    def is_ignored(self, path: Path, *, is_dir: bool = False) -> bool:
        """Check if a path should be ignored.

        Args:
            path: Absolute or relative path to check.
            is_dir: If True, treat this path as a directory (appends / for matching).
                    If False and the path is absolute, will check the filesystem.
        """
        path = Path(path)
        if path.is_absolute():
            try:
                rel = path.relative_to(self.project_root)
            except ValueError:
                return False
            if not is_dir:
                is_dir = path.is_dir()
        else:
            rel = path

        rel_str = rel.as_posix()
        if self._spec.match_file(rel_str):
            return True

        # gitignore directory patterns only match with a trailing slash
        if is_dir:
            return self._spec.match_file(rel_str + "/")

        return False

    @staticmethod
    def _read_ignore_file(path: Path) -> list[str]:
        """Read a gitignore-style file, skipping comments and blank lines."""
        lines = []
        for line in path.read_text().splitlines():
            line = line.strip()
            if line and not line.startswith("#"):
                lines.append(line)
        return lines
