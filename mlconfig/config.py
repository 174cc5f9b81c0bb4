from pydantic_settings import BaseSettings
from pathlib import Path

# Get the repository root directory (parent of mlconfig directory)
REPO_ROOT = Path(__file__).parent.parent.absolute()

class Settings(BaseSettings):
    """Application settings."""

    # Document locations
    CONFIG_DIR: str = str(REPO_ROOT / "config")
    METADATA_FILENAME: str = "project_metadata.json"
    API_CONFIG_FILENAME: str = "api_config.json"

    # Credentials are looked up here in addition to the process environment
    ENV_FILE: str = ".env"

    # Output
    JSON_INDENT: int = 2
    LOG_LEVEL: str = "INFO"

    # Recorded accuracy below this triggers a notification
    LOW_ACCURACY_THRESHOLD: float = 0.5

    class Config:
        env_file = ".env"
        # .env also holds integration credentials
        extra = "ignore"

settings = Settings()


def metadata_path() -> Path:
    """Path of the project metadata document."""
    return Path(settings.CONFIG_DIR) / settings.METADATA_FILENAME


def api_config_path() -> Path:
    """Path of the API configuration document."""
    return Path(settings.CONFIG_DIR) / settings.API_CONFIG_FILENAME
