"""
Application Settings
===================

Rendering and browser settings using Pydantic Settings.
Supports development, testing, and production environments.
"""

from typing import Optional, List, Union
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import json
from pathlib import Path

ASSETS_DIR = Path(__file__).resolve().parent.parent / "core" / "rendering" / "assets"
MERMAID_VERSION = "10.9.1"
MERMAID_CDN_URL = f"https://cdn.jsdelivr.net/npm/mermaid@{MERMAID_VERSION}/dist/mermaid.min.js"


class Settings(BaseSettings):
    """Main application settings with environment variable support."""

    # Application Configuration
    environment: str = Field(
        default="development", description="Environment: development, testing, production"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    # Browser Configuration
    playwright_headless: bool = Field(default=True, description="Run browser in headless mode")
    playwright_timeout: int = Field(
        default=30000, description="Default page timeout in milliseconds"
    )
    chromium_args: List[str] = Field(
        default=["--no-sandbox", "--disable-setuid-sandbox"],
        description="Command line flags passed to Chromium",
    )

    # Rendering Configuration
    render_timeout: float = Field(
        default=60.0, description="Per-diagram render timeout in seconds, 0 disables"
    )
    harness_path: Path = Field(
        default=ASSETS_DIR / "render.html", description="HTML page diagrams are rendered in"
    )
    # Set mermaid_script_path for offline builds, the URL needs network access on every render
    mermaid_script_path: Optional[Path] = Field(
        default=None, description="Local mermaid.min.js bundle, preferred over the URL"
    )
    mermaid_script_url: str = Field(
        default=MERMAID_CDN_URL,
        description="Mermaid bundle URL used when no local bundle is configured (requires network)",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed = {"development", "testing", "production"}
        if v not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of: {allowed}")
        return v.upper()

    @field_validator("chromium_args", mode="before")
    @classmethod
    def parse_chromium_args(cls, v: Union[str, List[str]]) -> List[str]:
        """Parse Chromium flags from string or list."""
        if isinstance(v, str):
            # Handle JSON-like string: ["--no-sandbox", "--disable-gpu"]
            v = v.strip()
            if v.startswith("[") and v.endswith("]"):
                try:
                    return json.loads(v)
                except json.JSONDecodeError:
                    pass
            # Handle comma-separated string: "--no-sandbox,--disable-gpu"
            return [arg.strip() for arg in v.split(",") if arg.strip()]
        return v

    @field_validator("render_timeout")
    @classmethod
    def validate_render_timeout(cls, v: float) -> float:
        """Reject negative timeouts."""
        if v < 0:
            raise ValueError("Render timeout must be zero or positive")
        return v

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, env_prefix="MERMAID_EMBED_"
    )


# Global settings instance - will be initialized when needed
settings = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global settings
    if settings is None:
        settings = Settings()
    return settings


def reload_settings() -> Settings:
    """Reload settings from environment."""
    global settings
    settings = Settings()
    return settings
