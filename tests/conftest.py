"""
Test configuration and fixtures for mlconfig tests.
"""
import pytest
from pathlib import Path

from mlconfig.config import settings, metadata_path, api_config_path
from mlconfig.documents import ProjectMetadata, ApiConfig
from mlconfig.domain.events import event_publisher


@pytest.fixture(autouse=True)
def test_settings(tmp_path, monkeypatch):
    """Point every document path at a temporary config dir."""
    config_dir = tmp_path / "config"
    monkeypatch.setattr(settings, "CONFIG_DIR", str(config_dir))
    monkeypatch.setattr(settings, "ENV_FILE", str(tmp_path / ".env"))
    yield settings


@pytest.fixture(autouse=True)
def clean_publisher():
    """Each test starts and ends without subscribers."""
    event_publisher.clear_subscribers()
    yield event_publisher
    event_publisher.clear_subscribers()


@pytest.fixture
def metadata_file(test_settings) -> Path:
    """A metadata document copied from the example."""
    return ProjectMetadata.create_from_example(metadata_path()).path


@pytest.fixture
def metadata(metadata_file):
    return ProjectMetadata(metadata_file).load()


@pytest.fixture
def environ():
    """Credentials as they would come from the environment."""
    return {
        "OPENAI_API_KEY": "sk-test-1234567890",
        "WANDB_API_KEY": "wandb-secret-abcdef",
    }


@pytest.fixture
def api_config(test_settings, environ):
    """An API configuration document copied from the example."""
    return ApiConfig.create_from_example(api_config_path(), environ=environ)
