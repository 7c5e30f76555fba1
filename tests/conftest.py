"""Pytest configuration and fixtures."""

import pytest
import tempfile
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def person_xml():
    """Single-element XML document with an attribute."""
    return '<person age="30"><name>Ann</name></person>'


@pytest.fixture
def person_json():
    """JSON rendering of person_xml."""
    return (
        '"person": {\n'
        '\t"@age": "30",\n'
        '\t"#person": {\n'
        '\t\t"name": "Ann"\n'
        '\t}\n'
        '}'
    )


@pytest.fixture
def catalog_json():
    """Nested JSON document mixing objects, arrays, nulls and attributes."""
    return (
        '{"catalog": {'
        '"title": "Books", '
        '"open": true, '
        '"count": 2, '
        '"tags": ["a", "b", "c"], '
        '"owner": null, '
        '"book": {"@id": "b1", "#book": "Dune"}, '
        '"shelf": {"row": 1, "column": 4}'
        '}}'
    )


@pytest.fixture
def catalog_xml():
    """Multi-line XML document as a file on disk would hold it."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<catalog>\n'
        '    <title>Books</title>\n'
        "    <book id='b1' lang=\"en\">Dune</book>\n"
        '    <owner/>\n'
        '    <shelf>\n'
        '        <row>1</row>\n'
        '        <column>4</column>\n'
        '    </shelf>\n'
        '</catalog>\n'
    )
