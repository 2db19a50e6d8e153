"""
Test Configuration
==================

Pytest configuration with fixtures for settings, markdown samples and fake
browser sessions.
"""

import pytest
from pathlib import Path
from typing import Generator

from mermaid_embed.config import settings as settings_module
from mermaid_embed.config.settings import Settings
from mermaid_embed.models.schemas import PipelineConfig

from tests.utils.mocks import SessionRecorder


class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    log_level: str = "DEBUG"
    playwright_headless: bool = True
    playwright_timeout: int = 5000
    render_timeout: float = 5.0


@pytest.fixture
def test_settings() -> Generator[TestSettings, None, None]:
    """Test settings installed as the global settings instance."""
    original = settings_module.settings
    test_settings = TestSettings()
    settings_module.settings = test_settings
    yield test_settings
    settings_module.settings = original


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    return PipelineConfig()


@pytest.fixture
def session_recorder() -> SessionRecorder:
    """Factory producing fake browser sessions."""
    return SessionRecorder()


@pytest.fixture
def sample_markdown() -> str:
    """Markdown with two diagrams and one unrelated code block."""
    return (
        "# Title\n"
        "\n"
        "```mermaid\n"
        "graph TD\n"
        "  A --> B\n"
        "```\n"
        "\n"
        "Some text.\n"
        "\n"
        "```python\n"
        "print('hello')\n"
        "```\n"
        "\n"
        "```mermaid:width=small&height=large\n"
        "sequenceDiagram\n"
        "  Alice->>Bob: Hi\n"
        "```\n"
    )


@pytest.fixture
def plain_markdown() -> str:
    """Markdown without any diagram."""
    return "# Title\n\n```python\nprint('hello')\n```\n\n```\nno language\n```\n"


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"
