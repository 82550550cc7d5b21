"""
Unit Tests for Utilities (errors, logging, metrics)
"""
import json
import logging
import pytest
import sys
import os

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from model_resolver.utils import (
    ConfigurationError,
    ErrorCategory,
    ErrorSeverity,
    MetricsCollector,
    ResolverError,
    ResolverMetrics,
    SchemaModelError,
    get_logger,
    get_metrics_collector,
    log_context,
    log_operation,
)
from model_resolver.utils.logging import ConsoleFormatter, StructuredFormatter


@pytest.fixture
def metrics():
    collector = get_metrics_collector()
    collector.reset()
    collector.enable()
    yield collector
    collector.reset()
    collector.enable()


def _record(message="hello"):
    return logging.LogRecord("model_resolver.test", logging.INFO, __file__, 1, message, None, None)


class TestErrors:
    """Tests for error classes"""

    def test_schema_error(self):
        error = SchemaModelError("Column definition without a name", table_name="tbl_user")

        assert isinstance(error, ResolverError)
        assert error.category == ErrorCategory.SCHEMA
        assert error.context.table_name == "tbl_user"
        assert str(error) == "[schema] Column definition without a name"

    def test_configuration_error(self):
        error = ConfigurationError("Unknown language", config_key="target_language")

        assert error.severity == ErrorSeverity.HIGH
        assert any("target_language" in s for s in error.suggestions)

    def test_to_dict(self):
        cause = ValueError("bad yaml")
        error = SchemaModelError("Could not parse", source_path="a.yaml", original_error=cause)

        data = error.to_dict()

        assert data["error_type"] == "SchemaModelError"
        assert data["category"] == "schema"
        assert data["context"]["source_path"] == "a.yaml"
        assert data["original_error"] == "bad yaml"
        json.dumps(data)


class TestLogging:
    """Tests for context-aware logging"""

    def test_structured_formatter_includes_context(self):
        with log_context(schema_name="crm", table_name="tbl_user"):
            entry = json.loads(StructuredFormatter().format(_record()))

        assert entry["message"] == "hello"
        assert entry["schema_name"] == "crm"
        assert entry["table_name"] == "tbl_user"

    def test_console_formatter_prefix(self):
        with log_context(schema_name="crm"):
            with log_context(table_name="tbl_user"):
                line = ConsoleFormatter().format(_record())

        assert "[crm] [table:tbl_user] hello" in line

    def test_context_restored(self):
        with log_context(schema_name="crm"):
            with log_context(schema_name="hr"):
                pass
            entry = json.loads(StructuredFormatter().format(_record()))
            assert entry["schema_name"] == "crm"

        entry = json.loads(StructuredFormatter().format(_record()))
        assert "schema_name" not in entry

    def test_log_operation_success(self):
        logger = get_logger("model_resolver.test")
        with log_operation(logger, "resolve_schema", tables=2) as ctx:
            ctx["relations_created"] = 1

        assert ctx["status"] == "success"
        assert ctx["tables"] == 2
        assert "duration_ms" in ctx

    def test_log_operation_failure(self):
        logger = get_logger("model_resolver.test")
        with pytest.raises(SchemaModelError):
            with log_operation(logger, "load") as ctx:
                raise SchemaModelError("broken")

        assert ctx["status"] == "error"
        assert ctx["error_type"] == "SchemaModelError"


class TestMetrics:
    """Tests for metrics collection"""

    def test_singleton(self):
        assert MetricsCollector() is get_metrics_collector()

    def test_counter_with_labels(self, metrics):
        ResolverMetrics.record_relation_inferred(mirrored=True)
        ResolverMetrics.record_relation_inferred(mirrored=True)
        ResolverMetrics.record_relation_inferred(mirrored=False)

        assert metrics.get_counter("relations_inferred_total", {"mirrored": "true"}) == 2
        assert metrics.get_counter("relations_inferred_total", {"mirrored": "false"}) == 1
        assert "relations_inferred_total{mirrored=true}" in metrics.get_metrics()["counters"]

    def test_disabled_records_nothing(self, metrics):
        metrics.disable()
        ResolverMetrics.record_alias_renamed()

        assert metrics.get_counter("aliases_renamed_total") == 0

    def test_schema_resolution(self, metrics):
        ResolverMetrics.record_schema_resolution(0.25, tables=3, tables_without_key=1)

        data = metrics.get_metrics()
        assert data["counters"]["schema_resolution_total"] == 1
        assert data["gauges"]["schema_tables"] == 3.0
        assert data["gauges"]["schema_tables_without_primary_key"] == 1.0
        assert data["timers"]["schema_resolution_duration"]["count"] == 1

    def test_time_operation(self, metrics):
        with metrics.time_operation("load_schema", {"format": "yaml"}):
            pass

        timers = metrics.get_metrics()["timers"]
        assert timers["load_schema{format=yaml}"]["count"] == 1

    def test_export_json(self, metrics):
        ResolverMetrics.record_primary_key_derived("identity")
        data = json.loads(metrics.export_json())
        assert data["counters"]["primary_keys_derived_total{tier=identity}"] == 1.0
