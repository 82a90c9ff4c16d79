"""Configuration management for the application."""

import json
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

MIB = 1024 * 1024


class UploadConfig(BaseSettings):
    """Binary asset upload constraints."""

    max_image_bytes: int = 5 * MIB
    max_video_bytes: int = 100 * MIB
    allowed_image_types: list[str] = [
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
        "image/svg+xml",
    ]
    allowed_video_types: list[str] = ["video/mp4", "video/webm", "video/ogg"]
    allowed_buckets: list[str] = [
        "company-logos",
        "company-banners",
        "team-photos",
        "videos",
        "resumes",
    ]
    timeout_seconds: int = 60

    @classmethod
    def from_file(cls, filepath: str = "config/uploads.json") -> "UploadConfig":
        """
        Load upload configuration from JSON file.

        Args:
            filepath: Path to the configuration file

        Returns:
            UploadConfig instance
        """
        with open(filepath, "r") as f:
            data = json.load(f)
        return cls(**data)


class SequencerConfig(BaseSettings):
    """Section ordering configuration."""

    insert_retry_attempts: int = 3
    insert_retry_backoff_seconds: float = 0.05

    @classmethod
    def from_file(cls, filepath: str = "config/sequencer.json") -> "SequencerConfig":
        """
        Load sequencer configuration from JSON file.

        Args:
            filepath: Path to the configuration file

        Returns:
            SequencerConfig instance
        """
        with open(filepath, "r") as f:
            data = json.load(f)
        return cls(**data)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Data root: the SQLite DB and locally stored uploads live here
    data_root: str = Field(default="~/Documents/careerpage")

    # Database, auto-derived from data_root if not explicitly set
    database_url: str | None = Field(default=None)

    # Backend Server
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000)

    # Public site, used to build sitemap and feed URLs
    site_url: str = Field(default="http://localhost:3000")
    cors_origins: list[str] = Field(default=["http://localhost:3000"])

    log_level: str = Field(default="INFO")

    # Object store
    storage_backend: Literal["local", "http"] = "local"
    storage_api_url: str | None = Field(default=None)
    storage_api_key: str | None = Field(default=None)
    storage_public_url: str = Field(default="http://localhost:8000/uploads")

    @model_validator(mode="after")
    def derive_paths(self) -> "Settings":
        """Expand data_root and derive database_url if not explicitly set."""
        self.data_root = str(Path(self.data_root).expanduser().resolve())
        if self.database_url is None:
            self.database_url = f"sqlite:///{self.data_root}/careerpage.db"
        self.site_url = self.site_url.rstrip("/")
        return self


def _load(config_cls, filepath: str):
    """Load a JSON config file when it exists, otherwise fall back to defaults."""
    if Path(filepath).exists():
        return config_cls.from_file(filepath)
    return config_cls()


# Global settings instance
settings = Settings()

# Load configurations
upload_config: UploadConfig = _load(UploadConfig, "config/uploads.json")
sequencer_config: SequencerConfig = _load(SequencerConfig, "config/sequencer.json")
