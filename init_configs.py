#!/usr/bin/env python3
"""
Create the project metadata and API configuration documents from the examples.

Usage: python init_configs.py [--force]
"""
import argparse
import logging
import sys

from mlconfig.application.event_handlers import register_event_handlers
from mlconfig.config import settings, metadata_path, api_config_path
from mlconfig.documents import ProjectMetadata, ApiConfig
from mlconfig.domain.errors import DocumentError

logger = logging.getLogger("init_configs")


def init_configs(force: bool = False, confirm=input) -> int:
    """Copy both examples into CONFIG_DIR. Returns the number of documents written."""
    written = 0
    for path, document in ((metadata_path(), ProjectMetadata), (api_config_path(), ApiConfig)):
        overwrite = force
        if path.exists() and not force:
            answer = confirm(f"{path} already exists. Overwrite? (y/n): ")
            if answer.lower() != 'y':
                print(f"Keeping {path}")
                continue
            overwrite = True
        document.create_from_example(path, overwrite=overwrite)
        print(f"Created {path}")
        written += 1
    return written


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Create the project metadata and API configuration documents")
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite existing documents without asking",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL)
    register_event_handlers()

    try:
        init_configs(force=args.force)
    except DocumentError as e:
        logger.error(str(e))
        return 1

    print(f"Set credentials in {settings.ENV_FILE} or the environment, not in {api_config_path().name}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
