#!/usr/bin/env python3
"""
Write new performance metrics into the project metadata document.

Usage: python update_metrics.py accuracy=0.93 f1_score=0.91 [name=value ...]
"""
import argparse
import json
import logging
import sys

from mlconfig.application.event_handlers import register_event_handlers
from mlconfig.application.metrics_service import MetricsService
from mlconfig.config import settings, metadata_path
from mlconfig.documents import ProjectMetadata
from mlconfig.domain.errors import DocumentError

logger = logging.getLogger("update_metrics")


def parse_metrics(args):
    """``["accuracy=0.9", "notes=ok"]`` -> ``{"accuracy": 0.9, "notes": "ok"}``."""
    metrics = {}
    for arg in args:
        name, sep, raw = arg.partition("=")
        if not sep or not name:
            raise DocumentError(f"Expected name=value, got '{arg}'")
        try:
            metrics[name] = json.loads(raw)
        except json.JSONDecodeError:
            metrics[name] = raw
    return metrics


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Write performance metrics into the project metadata document")
    parser.add_argument(
        "metrics",
        nargs="+",
        metavar="name=value",
        help="Metric to record, e.g. accuracy=0.93; values are parsed as JSON when possible",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL)
    register_event_handlers()

    try:
        metrics = parse_metrics(args.metrics)
        written = MetricsService(ProjectMetadata(metadata_path())).record(metrics)
    except DocumentError as e:
        logger.error(str(e))
        return 1

    for path, value in written.items():
        print(f"{path} = {value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
