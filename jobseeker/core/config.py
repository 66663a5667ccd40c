"""
Application Configuration

Centralized configuration management using Pydantic settings.
Handles environment variables and the job board search configuration file.
"""

from typing import List, Optional, Dict
from functools import lru_cache
import json
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, ValidationError

from jobseeker.core.exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "JobSeeker"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./jobseeker.db"

    # Scraping Configuration
    SCRAPER_DELAY_MS: int = Field(2000, ge=0)
    REQUEST_TIMEOUT_SECONDS: float = Field(30.0, gt=0)
    JOB_BOARDS_CONFIG: str = "config/job_boards.json"

    # Current user
    USER_EMAIL: Optional[str] = None
    USER_NAME: Optional[str] = None

    @property
    def scraper_delay_seconds(self) -> float:
        """Baseline inter-request delay in seconds."""
        return self.SCRAPER_DELAY_MS / 1000.0


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


class JobBoardConfig(BaseModel):
    """Search configuration for a single job board."""

    enabled: bool = False
    search_urls: List[str] = Field(default_factory=list)

    # Politeness overrides for the board's domain group
    delay_ms: Optional[int] = Field(None, ge=0)
    jitter_ms: Optional[int] = Field(None, ge=0)
    max_concurrent: Optional[int] = Field(None, ge=1)

    def group_overrides(self) -> Dict[str, float]:
        """Politeness overrides in domain group units (seconds)."""
        overrides: Dict[str, float] = {}
        if self.delay_ms is not None:
            overrides["delay"] = self.delay_ms / 1000.0
        if self.jitter_ms is not None:
            overrides["jitter"] = self.jitter_ms / 1000.0
        if self.max_concurrent is not None:
            overrides["max_concurrent"] = self.max_concurrent
        return overrides


class JobBoardsConfig(BaseModel):
    """Search configuration for all job boards, keyed by source name."""

    job_boards: Dict[str, JobBoardConfig] = Field(default_factory=dict)

    def board(self, source: str) -> JobBoardConfig:
        """Get a board's configuration, disabled if not configured."""
        return self.job_boards.get(source, JobBoardConfig())

    def group_overrides(self) -> Dict[str, Dict[str, float]]:
        """Per-board politeness overrides keyed by domain group name."""
        return {
            name: board.group_overrides()
            for name, board in self.job_boards.items()
            if board.group_overrides()
        }


def load_job_boards_config(path: Optional[str] = None) -> JobBoardsConfig:
    """
    Load job board search URLs from a JSON configuration file.

    Args:
        path: Path to the config file, defaults to ``JOB_BOARDS_CONFIG``

    Returns:
        JobBoardsConfig: Parsed configuration; empty if the file is missing

    Raises:
        ConfigurationError: If the file exists but cannot be parsed
    """
    config_path = Path(path or get_settings().JOB_BOARDS_CONFIG)

    if not config_path.exists():
        return JobBoardsConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return JobBoardsConfig.model_validate(json.load(f))
    except (json.JSONDecodeError, ValidationError) as e:
        raise ConfigurationError(
            f"Error loading job boards configuration: {e}",
            details={"path": str(config_path)},
        ) from e
