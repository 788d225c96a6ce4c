"""
Configuration settings for webcompare.
Uses Pydantic Settings for environment variable management.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Literal, Optional
from pathlib import Path


class BrowserSettings(BaseSettings):
    """Browser launch and navigation configuration."""

    headless: bool = Field(default=True, description="Run browser in headless mode")
    executable_path: Optional[Path] = Field(
        default=None,
        description="Chromium executable to launch instead of the bundled one"
    )
    no_sandbox: bool = Field(default=True, description="Pass --no-sandbox to Chromium")
    viewport_width: int = Field(default=1280, description="Browser viewport width")
    viewport_height: int = Field(default=720, description="Browser viewport height")
    timeout_ms: int = Field(default=30000, description="Navigation timeout in milliseconds")
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        default="networkidle",
        description="Load state to wait for before extraction starts"
    )
    user_agent: Optional[str] = Field(default=None, description="Custom user agent string")

    class Config:
        env_prefix = "BROWSER_"


class EngineSettings(BaseSettings):
    """Comparison engine configuration."""

    max_concurrency: int = Field(default=8, ge=1, description="Descriptors evaluated at once")
    strict_kinds: bool = Field(
        default=True,
        description="Fail on unknown comparison kinds instead of yielding a placeholder"
    )
    isolate_failures: bool = Field(
        default=False,
        description="Record extraction failures per descriptor instead of failing the run"
    )
    run_timeout_ms: Optional[int] = Field(
        default=None,
        description="Upper bound for a whole comparison run, page load included"
    )

    class Config:
        env_prefix = "ENGINE_"


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO")
    log_to_file: bool = Field(default=False, description="Enable file logging")
    log_dir: Path = Field(default=Path("logs"), description="Log directory")

    class Config:
        env_prefix = "LOG_"


class Settings(BaseSettings):
    """Main settings aggregator."""

    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
