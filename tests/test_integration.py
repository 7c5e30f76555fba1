"""Integration tests for the XML/JSON converter."""

from concurrent.futures import ThreadPoolExecutor
from xml_json_converter import DocumentConverter, InputFormat


class TestDocumentConverterIntegration:
    """Integration tests for the complete conversion pipeline."""

    def setup_method(self):
        """Set up test fixtures."""
        self.converter = DocumentConverter()

    def test_xml_to_json(self, person_xml, person_json):
        result = self.converter.convert(person_xml)

        assert result.success
        assert result.input_format == InputFormat.XML
        assert result.output_format == InputFormat.JSON
        assert result.output == person_json
        assert result.errors is None

    def test_json_to_xml(self, person_json):
        result = self.converter.convert(person_json)

        assert result.success
        assert result.input_format == InputFormat.JSON
        assert result.output == '<person age="30">\n\t<name>Ann</name>\n</person>'

    def test_round_trip_reproduces_xml(self, person_xml):
        result = self.converter.round_trip(person_xml)

        assert result.success
        assert result.output_format == InputFormat.XML
        assert result.output == '<person age="30">\n\t<name>Ann</name>\n</person>'

    def test_cross_format_round_trip_preserves_tree(self):
        """Test JSON -> XML -> JSON yields the same tree when no arrays are involved."""
        text = (
            '{"catalog": {"title": "Books", "owner": null, '
            '"book": {"@id": "b1", "#book": "Dune"}, '
            '"shelf": {"row": 1, "column": 4}}}'
        )
        original = self.converter.parse(text, InputFormat.JSON)

        xml = self.converter.convert(text)
        back = self.converter.convert(xml.output)

        assert back.success
        assert self.converter.parse(back.output, InputFormat.JSON) == original

    def test_arrays_lose_member_names_across_formats(self):
        """Test XML array members come back from JSON as element."""
        result = self.converter.round_trip("<list><item>1</item><item>2</item></list>")

        assert result.output == "<list>\n\t<element>1</element>\n\t<element>2</element>\n</list>"

    def test_catalog_conversion(self, catalog_json):
        result = self.converter.convert(catalog_json)

        assert result.success
        assert result.output == (
            "<catalog>\n"
            "\t<title>Books</title>\n"
            "\t<open>true</open>\n"
            "\t<count>2</count>\n"
            "\t<tags>\n"
            "\t\t<element>a</element>\n"
            "\t\t<element>b</element>\n"
            "\t\t<element>c</element>\n"
            "\t</tags>\n"
            "\t<owner/>\n"
            '\t<book id="b1">Dune</book>\n'
            "\t<shelf>\n"
            "\t\t<row>1</row>\n"
            "\t\t<column>4</column>\n"
            "\t</shelf>\n"
            "</catalog>"
        )

    def test_explicit_format(self):
        result = self.converter.convert('  {"a": "1", "b": "2"}', InputFormat.JSON)

        assert result.success
        assert result.output == "<root>\n\t<a>1</a>\n\t<b>2</b>\n</root>"

    def test_empty_input_is_a_no_op(self):
        result = self.converter.convert("   ")

        assert result.success
        assert result.output == ""
        assert result.warnings == ["Input is empty"]

    def test_unknown_format_fails(self):
        result = self.converter.convert("hello world")

        assert not result.success
        assert result.output == ""
        assert "Unable to detect document format" in result.errors[0]

    def test_grammar_error_is_reported(self):
        result = self.converter.convert('{"a": }')

        assert not result.success
        assert "Unsupported value at offset 6" in result.errors[0]
        assert "offset 6" in result.errors[1]

    def test_unbalanced_input_is_rejected_before_parsing(self):
        result = self.converter.convert('<a><b>1</b>')

        assert not result.success
        assert any("never closed" in error for error in result.errors)

    def test_failure_does_not_leak_into_next_conversion(self, person_xml, person_json):
        assert not self.converter.convert("<a><b></a></b>").success

        result = self.converter.convert(person_xml)
        assert result.success
        assert result.output == person_json

    def test_depth_limit(self):
        converter = DocumentConverter(max_depth=2)
        result = converter.convert("<a><b><c>1</c></b></a>")

        assert not result.success
        assert any("maximum depth" in error for error in result.errors)
        assert any("Deep nesting" in warning for warning in result.warnings)

    def test_profiling_records_each_conversion(self, person_xml):
        self.converter.convert(person_xml)
        self.converter.convert('{"a": "1", "b": "2"}')

        history = self.converter.profiler.metrics_history
        assert [m.operation_name for m in history] == ["xml_to_json", "json_to_xml"]
        assert history[0].node_count == 3
        assert history[0].output_size > 0

    def test_failed_conversion_is_not_profiled(self, person_xml):
        assert not self.converter.convert('{"a": }').success
        assert self.converter.convert(person_xml).success

        history = self.converter.profiler.metrics_history
        assert [m.operation_name for m in history] == ["xml_to_json"]

    def test_concurrent_conversions_share_one_converter(self, person_xml, person_json):
        documents = [person_xml, '{"a": }', '{"a": "1", "b": "2"}'] * 10

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(self.converter.convert, documents))

        assert [r.success for r in results] == [True, False, True] * 10
        assert all(r.output == person_json for r in results[::3])
        assert len(self.converter.profiler.metrics_history) == 20

    def test_profiling_disabled(self, person_xml):
        converter = DocumentConverter(enable_profiling=False)

        assert converter.profiler is None
        assert converter.convert(person_xml).success
