"""
Read, write and edit JSON documents by fixed field path.

Every helper works on plain dicts as produced by ``json.load``; nothing is
typed or validated beyond what JSON itself allows.
"""
from __future__ import annotations

import json
import logging
import os
import shutil
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple, Union

from mlconfig.config import settings
from mlconfig.domain.errors import (
    DocumentError,
    DocumentExistsError,
    DocumentNotFoundError,
    DocumentSyntaxError,
    FieldNotFoundError,
)

logger = logging.getLogger(__name__)

FieldPath = Union[str, Sequence[str]]

_MISSING = object()


def split_path(path: FieldPath) -> Tuple[str, ...]:
    """Turn ``"a.b.c"`` or ``["a", "b", "c"]`` into a key tuple."""
    if isinstance(path, str):
        keys = tuple(path.split("."))
    else:
        keys = tuple(path)
    if not keys or any(key == "" for key in keys):
        raise DocumentError(f"Invalid field path: {path!r}")
    return keys


def load_document(path: Union[str, Path]) -> Dict[str, Any]:
    """Open a document and decode it as a JSON object."""
    path = Path(path)
    if not path.is_file():
        raise DocumentNotFoundError(
            f"Document not found: {path.absolute()} "
            f"(working directory is {os.getcwd()}; use a correct relative or absolute path)"
        )

    try:
        with path.open("r", encoding="utf-8") as handle:
            text = handle.read()
    except UnicodeDecodeError as e:
        raise DocumentSyntaxError(f"{path} is not UTF-8 encoded: {e.reason} at byte {e.start}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentSyntaxError(
            f"Malformed JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}",
            line=e.lineno,
            column=e.colno,
        ) from e

    if not isinstance(data, dict):
        raise DocumentSyntaxError(f"Top level of {path} must be a JSON object, got {type(data).__name__}")

    logger.debug(f"Loaded {path}")
    return data


def dump_document(data: Mapping[str, Any], indent: int = None) -> str:
    """Encode a document the way it is written to disk."""
    if indent is None:
        indent = settings.JSON_INDENT
    return json.dumps(data, indent=indent, ensure_ascii=False) + "\n"


def save_document(path: Union[str, Path], data: Mapping[str, Any], indent: int = None) -> Path:
    """Encode a document and overwrite the file with it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        handle.write(dump_document(data, indent))
    logger.debug(f"Saved {path}")
    return path


def get_field(data: Mapping[str, Any], path: FieldPath, default: Any = _MISSING) -> Any:
    """Look up a field by fixed path."""
    current: Any = data
    for key in split_path(path):
        if isinstance(current, Mapping) and key in current:
            current = current[key]
        elif default is not _MISSING:
            return default
        else:
            raise FieldNotFoundError(f"Field not found: {path if isinstance(path, str) else '.'.join(path)}")
    return current


def set_field(data: Dict[str, Any], path: FieldPath, value: Any) -> Dict[str, Any]:
    """
    Overwrite a single field, creating missing parent mappings.

    Args:
        data: Decoded document, modified in place
        path: Dotted string or sequence of keys
        value: New value for the field

    Returns:
        The same ``data`` mapping
    """
    keys = split_path(path)
    current = data
    for depth, key in enumerate(keys[:-1]):
        if key not in current:
            current[key] = {}
        elif not isinstance(current[key], dict):
            parent = ".".join(keys[:depth + 1])
            raise DocumentError(f"Cannot set {'.'.join(keys)}: {parent} is not an object")
        current = current[key]
    current[keys[-1]] = value
    return data


def apply_updates(data: Dict[str, Any], updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Set every ``{path: value}`` pair on ``data``."""
    for path, value in updates.items():
        set_field(data, path, value)
    return data


def update_document(path: Union[str, Path], updates: Mapping[str, Any]) -> Dict[str, Any]:
    """Load a document, overwrite the given fields and save it back."""
    data = load_document(path)
    apply_updates(data, updates)
    save_document(path, data)
    logger.info(f"Updated {len(updates)} field(s) in {path}")
    return data


def format_document(path: Union[str, Path]) -> bool:
    """
    Re-encode a document in canonical form.

    Raises DocumentSyntaxError if the file does not parse, so this doubles as
    the syntax check.

    Returns:
        True if the file text changed
    """
    path = Path(path)
    data = load_document(path)
    original = path.read_text(encoding="utf-8")
    formatted = dump_document(data)
    if formatted == original:
        return False
    path.write_text(formatted, encoding="utf-8")
    logger.info(f"Reformatted {path}")
    return True


def copy_example(example: Union[str, Path], destination: Union[str, Path], overwrite: bool = False) -> Path:
    """Create a document by copying an example file."""
    destination = Path(destination)
    if destination.exists() and not overwrite:
        raise DocumentExistsError(f"{destination} already exists")
    destination.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(example, destination)
    logger.info(f"Copied {example} to {destination}")
    return destination


def changed_paths(before: Mapping[str, Any], after: Mapping[str, Any], prefix: str = "") -> Iterable[str]:
    """Yield the dotted paths whose values differ between two documents."""
    for key in list(before) + [k for k in after if k not in before]:
        path = f"{prefix}{key}"
        old, new = before.get(key, _MISSING), after.get(key, _MISSING)
        if isinstance(old, Mapping) and isinstance(new, Mapping):
            yield from changed_paths(old, new, prefix=f"{path}.")
        elif old != new:
            yield path
