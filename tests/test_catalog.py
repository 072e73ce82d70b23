"""Tests for the per-file catalog."""

import pytest

from intl_extract.config import ExtractionOptions
from intl_extract.errors import DuplicateIdConflict, InvalidMessageId, MissingDescription
from intl_extract.extractor.catalog import Catalog
from intl_extract.scanner.project import parse_source
from intl_extract.tools.parser import ParserFactory

FACTORY = ParserFactory(["javascript"])


@pytest.fixture
def source(tmp_path):
    code = "first;\nsecond;\n"
    return parse_source(code, "src/a.js", "javascript", FACTORY, tmp_path)


def statements(source):
    return source.root.named_children


class TestPut:
    def test_insert_and_lookup(self, source):
        catalog = Catalog(source, ExtractionOptions())
        node = statements(source)[0]
        stored = catalog.put({"id": "a", "defaultMessage": "Hi"}, node)
        assert "a" in catalog
        assert len(catalog) == 1
        assert catalog.get("a") is stored
        assert stored.file is None

    def test_preserves_insertion_order(self, source):
        catalog = Catalog(source, ExtractionOptions())
        first, second = statements(source)
        catalog.put({"id": "z"}, first)
        catalog.put({"id": "a"}, second)
        assert [m.id for m in catalog.values()] == ["z", "a"]

    def test_duplicate_keeps_first_location(self, source):
        catalog = Catalog(source, ExtractionOptions(extract_source_location=True))
        first, second = statements(source)
        catalog.put({"id": "a", "defaultMessage": "Hi"}, first)
        again = catalog.put({"id": "a", "defaultMessage": "Hi"}, second)
        assert again.start.line == 1
        assert len(catalog) == 1

    def test_conflict_reports_both_locations(self, source):
        catalog = Catalog(source, ExtractionOptions())
        first, second = statements(source)
        catalog.put({"id": "a", "defaultMessage": "Hi"}, first)
        with pytest.raises(DuplicateIdConflict) as exc_info:
            catalog.put({"id": "a", "defaultMessage": "Hello"}, second)
        assert exc_info.value.line == 2
        assert "First declared at src/a.js:1:0" in exc_info.value.message

    def test_source_location(self, source):
        catalog = Catalog(source, ExtractionOptions(extract_source_location=True))
        stored = catalog.put({"id": "a"}, statements(source)[1])
        assert stored.file == "src/a.js"
        assert (stored.start.line, stored.start.column) == (2, 0)
        assert (stored.end.line, stored.end.column) == (2, 7)

    @pytest.mark.parametrize("msg_id", [None, "", True, ["a"]])
    def test_invalid_id(self, source, msg_id):
        catalog = Catalog(source, ExtractionOptions())
        with pytest.raises(InvalidMessageId):
            catalog.put({"id": msg_id}, statements(source)[0])

    @pytest.mark.parametrize("description", [None, "", {}])
    def test_enforced_description(self, source, description):
        catalog = Catalog(source, ExtractionOptions(enforce_descriptions=True))
        with pytest.raises(MissingDescription):
            catalog.put({"id": "a", "description": description}, statements(source)[0])

    def test_conflict_checked_before_missing_description(self, source):
        catalog = Catalog(source, ExtractionOptions(enforce_descriptions=True))
        first, second = statements(source)
        catalog.put({"id": "a", "description": "d", "defaultMessage": "Hi"}, first)
        with pytest.raises(DuplicateIdConflict):
            catalog.put({"id": "a", "defaultMessage": "Hi"}, second)
