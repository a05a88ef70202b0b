"""Configuration management using Pydantic Settings."""

import os
from pathlib import Path
from typing import Self

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from modmanager import __version__
from modmanager.storage.models import ReleaseChannel, ReleaseType

DEFAULT_CONFIG_FILE = "config.yaml"


class PathsConfig(BaseModel):
    """File paths configuration."""

    mods_dir: Path = Path("./mods")

    def resolve_relative_to(self, base_dir: Path) -> Self:
        """Convert relative paths to absolute."""
        if not self.mods_dir.is_absolute():
            self.mods_dir = (base_dir / self.mods_dir).resolve()
        return self


class NetworkConfig(BaseModel):
    """Catalog access settings."""

    timeout: float = Field(default=30.0, gt=0)
    max_concurrent_checks: int = Field(default=8, ge=1)
    user_agent: str = f"ModManager/{__version__}"


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MODMANAGER_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_provider: str = "modrinth"
    release_channel: ReleaseChannel = ReleaseChannel.STABLE_ONLY
    target_game_version: str = "1.17.1"
    loader: str = "fabric"
    direct_id_lookup: bool = False
    deny_list: list[str] = Field(default_factory=lambda: ["java", "minecraft"])
    paths: PathsConfig = Field(default_factory=PathsConfig)
    network: NetworkConfig = Field(default_factory=NetworkConfig)

    @field_validator("default_provider")
    @classmethod
    def lowercase_provider(cls, value: str) -> str:
        """Provider names are matched case-insensitively."""
        return value.strip().lower()

    def is_release_allowed(self, release_type: ReleaseType) -> bool:
        """Check if a release type passes the configured channel."""
        return self.release_channel.permits(release_type)


def load_config(config_path: Path | None = None) -> Config:
    """
    Load configuration from YAML file and environment.

    Args:
        config_path: Explicit config file; falls back to MODMANAGER_CONFIG,
            then config.yaml in the working directory

    Returns:
        Loaded configuration (defaults when no file exists)

    Raises:
        ValueError: If the file is not a YAML mapping
    """
    if config_path is None:
        env_path = os.getenv("MODMANAGER_CONFIG")
        config_path = Path(env_path) if env_path else Path.cwd() / DEFAULT_CONFIG_FILE

    config_data = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            config_data = yaml.safe_load(f) or {}
        if not isinstance(config_data, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping")

    config = Config(**config_data)
    config.paths.resolve_relative_to(config_path.parent.resolve())
    return config
