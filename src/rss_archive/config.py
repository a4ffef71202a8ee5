"""
Configuration management for RSS Archive.

Uses Pydantic for validation and pydantic-settings for environment variable support.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ArchiveConfig(BaseSettings):
    """On-disk layout of the archive.

    The layout under ``base_dir`` is::

        <base_dir>/<data_dir>/<channels_dir>   configuration fragments
        <base_dir>/<data_dir>/<items_dir>      one record per calendar day
    """

    model_config = SettingsConfigDict(env_prefix="ARCHIVE_")

    base_dir: str = Field(default="./", description="Base directory")
    data_dir: str = Field(default="data", description="Data directory, relative to base_dir")
    channels_dir: str = Field(default="channels", description="Fragment directory, relative to data_dir")
    items_dir: str = Field(default="items", description="Output directory, relative to data_dir")
    fragment_suffix: str = Field(default=".json", description="Suffix of fragment files")

    @field_validator("fragment_suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        """Ensure the suffix starts with a dot."""
        v = v.strip()
        if not v.startswith("."):
            v = "." + v
        return v

    def data_path(self, base_dir: Optional[str] = None) -> Path:
        """Get the data directory."""
        return Path(base_dir or self.base_dir) / self.data_dir

    def channels_path(self, base_dir: Optional[str] = None) -> Path:
        """Get the fragment directory."""
        return self.data_path(base_dir) / self.channels_dir

    def items_path(self, base_dir: Optional[str] = None) -> Path:
        """Get the output directory."""
        return self.data_path(base_dir) / self.items_dir


class FetcherConfig(BaseSettings):
    """RSS fetcher configuration."""

    model_config = SettingsConfigDict(env_prefix="FETCHER_")

    # HTTP settings
    timeout_seconds: int = Field(default=30, ge=1, le=300, description="Request timeout")
    user_agent: str = Field(
        default="RSS-Archive/0.1.0",
        description="User-Agent header"
    )

    # Follow redirects
    follow_redirects: bool = Field(default=True)
    max_redirects: int = Field(default=5, ge=0, le=20)


class DateConfig(BaseSettings):
    """Publication date parsing configuration."""

    model_config = SettingsConfigDict(env_prefix="DATES_")

    timezone_abbreviations: dict[str, str] = Field(
        default_factory=lambda: {"EDT": "America/New_York"},
        description="Timezone abbreviation to IANA zone name",
    )

    @field_validator("timezone_abbreviations")
    @classmethod
    def validate_abbreviations(cls, v: dict[str, str]) -> dict[str, str]:
        """Abbreviations are matched against upper-case designators only."""
        for abbr in v:
            if not abbr.isalpha() or not abbr.isupper():
                raise ValueError(f"Timezone abbreviation must be upper-case letters: {abbr!r}")
        return v


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        description="Log format"
    )

    # File logging
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_path: str = Field(default="logs/rss_archive.log", description="Log file path")
    rotation: str = Field(default="10 MB", description="Log rotation size")
    retention: str = Field(default="30 days", description="Log retention period")

    # Console logging
    console_enabled: bool = Field(default=True, description="Enable console logging")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RSS_ARCHIVE_",
        case_sensitive=False,
    )

    # Application
    app_name: str = Field(default="RSS Archive", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    # Sub-configurations
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    dates: DateConfig = Field(default_factory=DateConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


_SECTIONS = {
    "archive": ArchiveConfig,
    "fetcher": FetcherConfig,
    "dates": DateConfig,
    "logging": LoggingConfig,
}

# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config_from_yaml(yaml_path: str) -> Config:
    """Load configuration from a YAML file.

    Sections missing from the file are built from the environment.

    Args:
        yaml_path: Path to the YAML configuration file.

    Returns:
        Config instance loaded from the file.
    """
    import yaml

    yaml_file = Path(yaml_path)
    if not yaml_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

    with yaml_file.open("r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    main_config = {k: v for k, v in config_dict.items() if k not in _SECTIONS}
    for key, config_class in _SECTIONS.items():
        main_config[key] = config_class(**(config_dict.get(key) or {}))

    return Config(**main_config)


def set_config(config: Config) -> Config:
    """Install ``config`` as the global configuration instance."""
    global _config
    _config = config
    return _config
