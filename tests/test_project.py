"""Tests for project-wide extraction runs."""

import json
from pathlib import Path

import pytest

from intl_extract.config import IntlExtractConfig
from intl_extract.scanner.project import extract_code, extract_files, extract_project

GREETING = """\
import { FormattedMessage } from 'react-intl';

export const Greeting = ({ name }) => (
  <FormattedMessage
    id="greeting"
    description="Greets the user"
    defaultMessage="Hello, {name}!"
    values={{ name }}
  />
);
"""

TITLE = """\
export function title(intl) {
  return intl.formatIntlMessage('checkout.title');
}
"""

BROKEN = """\
import { FormattedMessage } from 'react-intl';

export const Broken = () => <FormattedMessage id="x" defaultMessage={compute()} />;
"""


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    widgets = tmp_path / "src" / "widgets"
    widgets.mkdir(parents=True)
    (widgets / "Greeting.jsx").write_text(GREETING)
    (tmp_path / "src" / "title.ts").write_text(TITLE)
    (tmp_path / "src" / "empty.js").write_text("export default 1;\n")
    (tmp_path / "node_modules").mkdir()
    (tmp_path / "node_modules" / "dep.js").write_text(GREETING)
    return tmp_path


def load(root: Path, messages_dir: str = "messages") -> IntlExtractConfig:
    config_dir = root / "config"
    config_dir.mkdir(exist_ok=True)
    (config_dir / "intl-extract.yaml").write_text(
        f"extraction:\n  messagesDir: {messages_dir}\n"
    )
    return IntlExtractConfig.load(root)


class TestExtractProject:
    def test_writes_one_catalog_per_file(self, project_dir: Path):
        result, files = extract_project(load(project_dir))
        assert result.errors == []
        assert result.files_processed == 3
        assert result.messages_extracted == 2
        assert result.catalogs_written == 2

        greeting = json.loads((project_dir / "messages" / "src" / "widgets" / "Greeting.json").read_text())
        assert greeting == [
            {"id": "greeting", "description": "Greets the user", "defaultMessage": "Hello, {name}!"}
        ]
        title = json.loads((project_dir / "messages" / "src" / "title.json").read_text())
        assert title == [{"id": "checkout.title"}]
        assert not (project_dir / "messages" / "src" / "empty.json").exists()

    def test_ignored_directories_skipped(self, project_dir: Path):
        extract_project(load(project_dir))
        assert not (project_dir / "messages" / "node_modules").exists()

    def test_failing_file_does_not_stop_run(self, project_dir: Path):
        (project_dir / "src" / "Broken.jsx").write_text(BROKEN)
        result, files = extract_project(load(project_dir))
        assert result.files_failed == 1
        assert result.files_processed == 3
        assert len(result.errors) == 1
        assert result.errors[0].startswith("src/Broken.jsx:3:")
        assert "statically evaluate-able" in result.errors[0]
        assert not (project_dir / "messages" / "src" / "Broken.json").exists()

    def test_undefined_in_description_does_not_stop_run(self, project_dir: Path):
        (project_dir / "src" / "Notes.jsx").write_text(
            "import { FormattedMessage } from 'react-intl';\n"
            '<FormattedMessage id="notes" description={[undefined]} defaultMessage="Notes" />;\n'
        )
        result, _ = extract_project(load(project_dir))
        assert result.errors == []
        assert result.files_processed == 4
        notes = json.loads((project_dir / "messages" / "src" / "Notes.json").read_text())
        assert notes == [{"id": "notes", "description": [None], "defaultMessage": "Notes"}]

    def test_language_filter(self, project_dir: Path):
        config = load(project_dir)
        config.parsing.languages = ["javascript"]
        result, files = extract_project(config)
        assert result.files_processed == 2
        assert {Path(f.filename).name for f in files} == {"Greeting.jsx", "empty.js"}

    def test_code_has_descriptions_removed(self, project_dir: Path):
        _, files = extract_project(load(project_dir))
        (greeting,) = [f for f in files if f.filename.endswith("Greeting.jsx")]
        assert "description=" not in greeting.code
        assert 'id="greeting"' in greeting.code


class TestExtractFiles:
    def test_selected_files(self, project_dir: Path):
        config = load(project_dir)
        result, files = extract_files(
            [project_dir / "src" / "title.ts"], config, Path(config.project.root)
        )
        assert result.files_processed == 1
        assert files[0].messages[0].id == "checkout.title"

    def test_missing_file(self, project_dir: Path):
        config = load(project_dir)
        result, _ = extract_files([project_dir / "nope.js"], config, Path(config.project.root))
        assert result.files_failed == 1
        assert "file not found" in result.errors[0]

    def test_unsupported_extension_skipped(self, project_dir: Path):
        (project_dir / "notes.md").write_text("# notes")
        config = load(project_dir)
        result, _ = extract_files([project_dir / "notes.md"], config, Path(config.project.root))
        assert result.files_skipped == 1


class TestExtractCode:
    def test_unknown_extension(self):
        with pytest.raises(ValueError, match="Cannot detect"):
            extract_code("x", "notes.md")

    def test_explicit_language(self):
        result = extract_code("formatIntlMessage('a');", "snippet", language="javascript")
        assert [m.id for m in result.messages] == ["a"]

    def test_bytes_input(self):
        result = extract_code("formatIntlMessage('café');".encode("utf-8"), "a.js")
        assert result.messages[0].id == "café"

    def test_recovers_from_syntax_errors(self):
        result = extract_code("formatIntlMessage('ok');\nconst = ;\n", "a.js")
        assert [m.id for m in result.messages] == ["ok"]
