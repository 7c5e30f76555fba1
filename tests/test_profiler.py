"""Tests for the conversion profiler."""

import pytest
from xml_json_converter.profiler import ConversionProfiler


class TestConversionProfiler:
    """Tests for ConversionProfiler class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.profiler = ConversionProfiler()

    def test_profile_operation(self):
        with self.profiler.profile_operation("xml_to_json", input_size=120) as profile:
            profile.output_size = 80
            profile.node_count = 5

        assert len(self.profiler.metrics_history) == 1
        metrics = self.profiler.metrics_history[0]
        assert metrics.operation_name == "xml_to_json"
        assert metrics.input_size == 120
        assert metrics.output_size == 80
        assert metrics.node_count == 5
        assert metrics.duration >= 0
        assert metrics.memory_end_mb > 0

    def test_failed_block_is_not_recorded(self):
        with pytest.raises(RuntimeError):
            with self.profiler.profile_operation("json_to_xml"):
                raise RuntimeError("boom")

        assert self.profiler.metrics_history == []

    def test_interleaved_operations_keep_their_own_records(self):
        first = self.profiler.start_profiling("xml_to_json", input_size=10)
        second = self.profiler.start_profiling("json_to_xml", input_size=20)
        second.node_count = 3

        self.profiler.stop_profiling(first)
        self.profiler.stop_profiling(second)

        history = self.profiler.metrics_history
        assert [m.operation_name for m in history] == ["xml_to_json", "json_to_xml"]
        assert [m.input_size for m in history] == [10, 20]
        assert [m.node_count for m in history] == [0, 3]

    def test_nested_profile_blocks(self):
        with self.profiler.profile_operation("xml_to_json") as outer:
            with self.profiler.profile_operation("json_to_xml") as inner:
                inner.output_size = 5
            outer.output_size = 7

        assert [m.output_size for m in self.profiler.metrics_history] == [5, 7]

    def test_summary(self):
        assert self.profiler.get_performance_summary() == {"total_operations": 0}
        assert self.profiler.export_summary() == "No conversions profiled"

        for size in (10, 20):
            with self.profiler.profile_operation("xml_to_json", input_size=size) as profile:
                profile.node_count = 2

        summary = self.profiler.get_performance_summary()
        assert summary["total_operations"] == 2
        assert summary["total_input_bytes"] == 30
        assert summary["total_nodes"] == 4
        assert "Conversions: 2" in self.profiler.export_summary()
