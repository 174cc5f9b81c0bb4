"""
API configuration document.

Credentials are kept out of the committed file: a value may be a ``${VAR}``
placeholder, and any field can be overridden by an environment variable
named ``<BLOCK>_<FIELD>`` (``WANDB_API_KEY`` overrides ``wandb.api_key``).
Resolved values only live in memory and are never written back.
"""
from __future__ import annotations

import copy
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from dotenv import dotenv_values

from mlconfig.config import settings
from mlconfig.domain.errors import CredentialError, NotFoundError
from mlconfig.domain.events import DocumentCreated, DocumentUpdated, event_publisher
from . import store

logger = logging.getLogger(__name__)

EXAMPLE_PATH = Path(__file__).parent / "templates" / "api_config.example.json"

SETTINGS_KEY = "settings"

DEFAULT_SETTINGS = {
    "enabled": True,
    "timeout": 30,
    "retry_count": 3,
    "log_level": "INFO",
}

SECRET_FIELDS = ("api_key", "token", "secret", "password")

_PLACEHOLDER = re.compile(r"^\$\{([A-Za-z_][A-Za-z0-9_]*)\}$")


def load_environment(env_file: Optional[Union[str, Path]] = None) -> Dict[str, str]:
    """Process environment merged over the values of the ``.env`` file."""
    env_file = Path(env_file if env_file is not None else settings.ENV_FILE)
    merged: Dict[str, str] = {}
    if env_file.is_file():
        merged.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
        logger.debug(f"Read {len(merged)} variable(s) from {env_file}")
    merged.update(os.environ)
    return merged


def env_var_name(block: str, field: str) -> str:
    return f"{block}_{field}".upper()


def placeholder_name(value: Any) -> Optional[str]:
    """Return ``VAR`` for a ``${VAR}`` value, otherwise None."""
    if isinstance(value, str):
        match = _PLACEHOLDER.match(value.strip())
        if match:
            return match.group(1)
    return None


def mask_secret(value: Any) -> Any:
    """Show at most two leading and two trailing characters, and only of long values."""
    if not isinstance(value, str) or not value:
        return value
    if len(value) < 16:
        return "****"
    return f"{value[:2]}...{value[-2:]}"


def is_secret_field(field: str) -> bool:
    """``api_key`` or ``*_api_key``, ``token`` or ``*_token`` and so on."""
    name = field.lower()
    return any(name == secret or name.endswith(f"_{secret}") for secret in SECRET_FIELDS)


class ApiConfig:
    """An API configuration document on disk."""

    def __init__(self, path: Union[str, Path], environ: Optional[Mapping[str, str]] = None) -> None:
        self.path = Path(path)
        self.data: Dict[str, Any] = {}
        self._snapshot: Dict[str, Any] = {}
        self._environ = environ

    @classmethod
    def create_from_example(cls, path: Union[str, Path], overwrite: bool = False,
                            environ: Optional[Mapping[str, str]] = None) -> "ApiConfig":
        store.copy_example(EXAMPLE_PATH, path, overwrite=overwrite)
        config = cls(path, environ=environ).load()
        event_publisher.publish(DocumentCreated(
            event_id="",
            timestamp=None,
            aggregate_id=str(config.path),
            kind="api_config",
            source=str(EXAMPLE_PATH),
        ))
        return config

    @property
    def environ(self) -> Mapping[str, str]:
        if self._environ is None:
            self._environ = load_environment()
        return self._environ

    def load(self) -> "ApiConfig":
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

    def integration_names(self) -> List[str]:
        return [
            name for name, block in self.data.items()
            if name != SETTINGS_KEY and isinstance(block, dict)
        ]

    def integration(self, name: str, resolve: bool = True) -> Dict[str, Any]:
        """
        Get a copy of one integration block.

        Args:
            name: Block name, e.g. ``"wandb"``
            resolve: Apply placeholders and environment overrides

        Returns:
            The block; unresolved placeholders become None
        """
        block = self.data.get(name)
        if name == SETTINGS_KEY or not isinstance(block, dict):
            raise NotFoundError(f"Integration '{name}' not found in {self.path}")

        block = copy.deepcopy(block)
        if not resolve:
            return block

        for field, value in block.items():
            override = self.environ.get(env_var_name(name, field))
            if override is not None:
                block[field] = override
                continue
            var = placeholder_name(value)
            if var is not None:
                block[field] = self.environ.get(var)
        return block

    def credential(self, name: str, field: str = "api_key") -> str:
        """Resolved credential, or CredentialError naming what to set."""
        block = self.integration(name)
        value = block.get(field)
        if field not in block:
            value = self.environ.get(env_var_name(name, field))
        if value:
            return value

        raw = self.data[name].get(field)
        candidates = [env_var_name(name, field)]
        var = placeholder_name(raw)
        if var is not None and var not in candidates:
            candidates.append(var)
        raise CredentialError(
            f"Missing credential {name}.{field}: set {' or '.join(candidates)} "
            f"in the environment or in {settings.ENV_FILE}"
        )

    @property
    def settings(self) -> Dict[str, Any]:
        merged = dict(DEFAULT_SETTINGS)
        merged.update(self.data.get(SETTINGS_KEY) or {})
        return merged

    @property
    def enabled(self) -> bool:
        return bool(self.settings["enabled"])

    def set_enabled(self, flag: bool) -> None:
        store.set_field(self.data, (SETTINGS_KEY, "enabled"), bool(flag))
        self.save()

    def masked(self, name: str) -> Dict[str, Any]:
        """Resolved block with credential-like fields masked for display."""
        block = self.integration(name)
        for field, value in block.items():
            if is_secret_field(field):
                block[field] = mask_secret(value)
        return block
