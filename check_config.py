#!/usr/bin/env python3
"""
Check that both documents parse and show what the scripts will see.
"""
import argparse
import json
import logging
import sys

from mlconfig.config import settings, metadata_path, api_config_path
from mlconfig.documents import ProjectMetadata, ApiConfig, format_document, load_document
from mlconfig.domain.errors import DocumentError, DocumentNotFoundError, DocumentSyntaxError

logger = logging.getLogger("check_config")


def check_config(reformat: bool = False) -> bool:
    ok = True

    print("=== Checking documents ===")
    for path in (metadata_path(), api_config_path()):
        try:
            if reformat:
                changed = format_document(path)
                print(f"{path}: OK{' (reformatted)' if changed else ''}")
            else:
                load_document(path)
                print(f"{path}: OK")
        except DocumentNotFoundError as e:
            print(f"{path}: MISSING - {e}. Run 'python init_configs.py' first.")
            ok = False
        except DocumentSyntaxError as e:
            where = f" near line {e.line}, column {e.column}" if e.line is not None else ""
            print(f"{path}: INVALID{where} - {e}")
            ok = False
    if not ok:
        return False

    print("=== Project ===")
    metadata = ProjectMetadata(metadata_path()).load()
    print(json.dumps(metadata.summary(), indent=2))

    print("=== Integrations ===")
    config = ApiConfig(api_config_path()).load()
    print(f"Enabled: {config.enabled}  timeout={config.settings['timeout']}s  retries={config.settings['retry_count']}")
    for name in config.integration_names():
        print(f"{name}: {json.dumps(config.masked(name))}")
        try:
            config.credential(name, field="token" if "token" in config.integration(name) else "api_key")
        except DocumentError as e:
            print(f"  warning: {e}")
    return True


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Check the project metadata and API configuration documents")
    parser.add_argument(
        "--format",
        action="store_true",
        help="Rewrite both documents in canonical form",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=settings.LOG_LEVEL)
    return 0 if check_config(reformat=args.format) else 1


if __name__ == "__main__":
    sys.exit(main())
