from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from mlconfig.domain.events import DocumentCreated, DocumentUpdated, event_publisher
from . import store

logger = logging.getLogger(__name__)

EXAMPLE_PATH = Path(__file__).parent / "templates" / "project_metadata.example.json"

# Metrics with a dedicated slot; anything else is a custom metric
STANDARD_METRICS = ("accuracy", "precision", "recall", "f1_score")


class ProjectMetadata:
    """A project metadata document on disk."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.data: Dict[str, Any] = {}
        self._snapshot: Dict[str, Any] = {}

    @classmethod
    def create_from_example(
        cls,
        path: Union[str, Path],
        overwrite: bool = False,
        fields: Optional[Mapping[str, Any]] = None,
    ) -> "ProjectMetadata":
        """Copy the example document to ``path`` and apply field overrides."""
        store.copy_example(EXAMPLE_PATH, path, overwrite=overwrite)
        metadata = cls(path).load()
        if fields:
            store.apply_updates(metadata.data, fields)
            store.save_document(metadata.path, metadata.data)
            metadata._snapshot = copy.deepcopy(metadata.data)

        event_publisher.publish(DocumentCreated(
            event_id="",
            timestamp=None,
            aggregate_id=str(metadata.path),
            kind="project_metadata",
            source=str(EXAMPLE_PATH),
        ))
        return metadata

    def load(self) -> "ProjectMetadata":
        self.data = store.load_document(self.path)
        self._snapshot = copy.deepcopy(self.data)
        return self

    def save(self) -> Path:
        """Write the document back, publishing which fields changed."""
        changed = list(store.changed_paths(self._snapshot, self.data))
        store.save_document(self.path, self.data)
        self._snapshot = copy.deepcopy(self.data)
        if changed:
            event_publisher.publish(DocumentUpdated(
                event_id="",
                timestamp=None,
                aggregate_id=str(self.path),
                fields=changed,
            ))
        return self.path

    def get(self, path: store.FieldPath, default: Any = None) -> Any:
        return store.get_field(self.data, path, default)

    def set(self, path: store.FieldPath, value: Any) -> None:
        store.set_field(self.data, path, value)

    @property
    def project_name(self) -> str:
        return self.get("project_name", "")

    def record_metrics(self, metrics: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Write metric values into ``performance_metrics``.

        Standard metrics go to their own field, everything else under
        ``performance_metrics.custom_metrics``. Returns the touched paths
        mapped to their new values. Does not save.
        """
        written = {}
        for name, value in metrics.items():
            if name in STANDARD_METRICS:
                path = f"performance_metrics.{name}"
            else:
                path = f"performance_metrics.custom_metrics.{name}"
            self.set(path, value)
            written[path] = value
        return written

    def update_training_config(self, **values: Any) -> None:
        for name, value in values.items():
            self.set(("training_config", name), value)

    def summary(self) -> Dict[str, Any]:
        return {
            "project_name": self.project_name,
            "version": self.get("version"),
            "model_name": self.get("model_info.name"),
            "framework": self.get("model_info.framework"),
            "accuracy": self.get("performance_metrics.accuracy"),
        }
