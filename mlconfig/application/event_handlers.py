"""Event handlers for document events."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mlconfig.config import settings

if TYPE_CHECKING:
    from mlconfig.domain.events import (
        DocumentCreated,
        DocumentUpdated,
        MetricsRecorded,
    )

logger = logging.getLogger(__name__)


class AuditLogHandler:
    """Logs all document events for audit trail."""

    def handle_document_created(self, event: DocumentCreated) -> None:
        logger.info(f"[AUDIT] {event.kind} created: {event.aggregate_id} from {event.source}")

    def handle_document_updated(self, event: DocumentUpdated) -> None:
        logger.info(f"[AUDIT] {event.aggregate_id} updated: {', '.join(event.fields)}")

    def handle_metrics_recorded(self, event: MetricsRecorded) -> None:
        logger.info(f"[AUDIT] Metrics recorded for {event.project_name}: {sorted(event.metrics)}")


class NotificationHandler:
    """Flags recorded metrics worth a look."""

    def handle_metrics_recorded(self, event: MetricsRecorded) -> None:
        accuracy = event.metrics.get("accuracy")
        if isinstance(accuracy, (int, float)) and accuracy < settings.LOW_ACCURACY_THRESHOLD:
            logger.warning(f"[NOTIFICATION] Low accuracy ({accuracy}) for {event.project_name}")


def register_event_handlers():
    """Register all event handlers with the publisher."""
    from mlconfig.domain.events import (
        event_publisher,
        DocumentCreated,
        DocumentUpdated,
        MetricsRecorded,
    )

    audit = AuditLogHandler()
    notification = NotificationHandler()

    # Audit handlers (all events)
    event_publisher.subscribe(DocumentCreated, audit.handle_document_created)
    event_publisher.subscribe(DocumentUpdated, audit.handle_document_updated)
    event_publisher.subscribe(MetricsRecorded, audit.handle_metrics_recorded)

    # Notifications
    event_publisher.subscribe(MetricsRecorded, notification.handle_metrics_recorded)
