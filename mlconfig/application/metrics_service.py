"""Service for recording performance metrics in the metadata document."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Mapping

from mlconfig.documents.project_metadata import ProjectMetadata
from mlconfig.domain.errors import DocumentError
from mlconfig.domain.events import event_publisher, MetricsRecorded


class MetricsService:
    """Load, write metrics, save."""

    def __init__(self, metadata: ProjectMetadata) -> None:
        self._metadata = metadata

    def record(self, metrics: Mapping[str, Any]) -> Dict[str, Any]:
        """Record metrics and save the document. Returns path -> value written."""
        if not metrics:
            raise DocumentError("No metrics given")

        self._metadata.load()
        written = self._metadata.record_metrics(metrics)
        self._metadata.set("performance_metrics.last_updated", datetime.now().isoformat())
        self._metadata.save()

        # Publish domain event
        event_publisher.publish(MetricsRecorded(
            event_id="",
            timestamp=None,
            aggregate_id=str(self._metadata.path),
            project_name=self._metadata.project_name,
            metrics=dict(metrics),
        ))

        return written
