"""Tests for the metrics service."""
from unittest.mock import Mock

import pytest

from mlconfig.application.metrics_service import MetricsService
from mlconfig.documents import ProjectMetadata, load_document
from mlconfig.domain.errors import DocumentError, DocumentNotFoundError
from mlconfig.domain.events import MetricsRecorded


class TestMetricsService:

    def test_record_writes_and_saves(self, metadata_file):
        service = MetricsService(ProjectMetadata(metadata_file))

        written = service.record({"accuracy": 0.93, "f1_score": 0.9, "latency_ms": 12})

        on_disk = load_document(metadata_file)["performance_metrics"]
        assert written == {
            "performance_metrics.accuracy": 0.93,
            "performance_metrics.f1_score": 0.9,
            "performance_metrics.custom_metrics.latency_ms": 12,
        }
        assert on_disk["accuracy"] == 0.93
        assert on_disk["precision"] == 0.0
        assert on_disk["custom_metrics"] == {"latency_ms": 12}
        assert "last_updated" in on_disk

    def test_record_reloads_before_writing(self, metadata_file):
        metadata = ProjectMetadata(metadata_file).load()

        other = ProjectMetadata(metadata_file).load()
        other.set("version", "2.0.0")
        other.save()

        MetricsService(metadata).record({"accuracy": 0.8})
        assert load_document(metadata_file)["version"] == "2.0.0"

    def test_record_publishes_event(self, metadata_file, clean_publisher):
        handler = Mock()
        clean_publisher.subscribe(MetricsRecorded, handler)

        MetricsService(ProjectMetadata(metadata_file)).record({"accuracy": 0.42})

        event = handler.call_args[0][0]
        assert event.project_name == "sentiment-classifier"
        assert event.metrics == {"accuracy": 0.42}

    def test_record_nothing(self, metadata_file):
        with pytest.raises(DocumentError, match="No metrics"):
            MetricsService(ProjectMetadata(metadata_file)).record({})

    def test_record_missing_document(self, tmp_path):
        with pytest.raises(DocumentNotFoundError):
            MetricsService(ProjectMetadata(tmp_path / "none.json")).record({"accuracy": 1.0})
