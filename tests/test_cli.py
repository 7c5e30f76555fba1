"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner
from xml_json_converter.cli import main


@pytest.fixture
def runner():
    return CliRunner()


def write(path, content):
    path.write_text(content, encoding="utf-8")
    return str(path)


class TestCli:
    """Tests for the click command group."""

    def test_convert_xml_file(self, runner, temp_dir, person_json):
        source = write(temp_dir / "person.xml", '<person age="30">\n    <name>Ann</name>\n</person>\n')

        result = runner.invoke(main, ["convert", source])

        assert result.exit_code == 0
        assert person_json in result.output

    def test_convert_json_file_to_output(self, runner, temp_dir, catalog_json):
        source = write(temp_dir / "catalog.json", catalog_json)
        target = temp_dir / "out" / "catalog.xml"

        result = runner.invoke(main, ["convert", source, "-o", str(target)])

        assert result.exit_code == 0
        assert "Wrote XML" in result.output
        content = target.read_text(encoding="utf-8")
        assert content.startswith("<catalog>\n\t<title>Books</title>")
        assert content.endswith("</catalog>\n")

    def test_convert_empty_file(self, runner, temp_dir):
        source = write(temp_dir / "empty.txt", "\n   \n")

        result = runner.invoke(main, ["convert", source])

        assert result.exit_code == 0
        assert "Input is empty" in result.output

    def test_convert_invalid_file(self, runner, temp_dir):
        source = write(temp_dir / "bad.txt", "just words")

        result = runner.invoke(main, ["convert", source])

        assert result.exit_code == 1
        assert "Conversion failed" in result.output

    def test_convert_with_check(self, runner, temp_dir):
        source = write(temp_dir / "person.xml", '<person age="30"><name>Ann</name></person>')

        result = runner.invoke(main, ["convert", source, "--check"])

        assert result.exit_code == 0
        assert "Round trip preserved the document tree" in result.output

    def test_convert_with_profile(self, runner, temp_dir):
        source = write(temp_dir / "a.json", '{"a": "1", "b": "2"}')

        result = runner.invoke(main, ["convert", source, "--profile"])

        assert result.exit_code == 0
        assert "Performance Summary:" in result.output

    def test_convert_with_forced_format(self, runner, temp_dir):
        source = write(temp_dir / "a.txt", '<a>1</a>')

        result = runner.invoke(main, ["convert", source, "--from", "json"])

        assert result.exit_code == 1

    def test_inspect(self, runner, temp_dir):
        source = write(temp_dir / "person.xml", '<person age="30"><name>Ann</name></person>')

        result = runner.invoke(main, ["inspect", source])

        assert result.exit_code == 0
        assert result.output == (
            'Element:\n'
            'path = person\n'
            'attributes:\n'
            'age = "30"\n'
            '\n'
            'Element:\n'
            'path = person, name\n'
            'value = "Ann"\n'
            '\n'
        )

    def test_inspect_malformed(self, runner, temp_dir):
        source = write(temp_dir / "bad.xml", "<a><b></a></b>")

        result = runner.invoke(main, ["inspect", source])

        assert result.exit_code == 1
        assert "Mismatched closing tag" in result.output

    def test_missing_file(self, runner, temp_dir):
        result = runner.invoke(main, ["convert", str(temp_dir / "nope.xml")])

        assert result.exit_code == 2
