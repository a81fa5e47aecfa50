"""Shared pytest fixtures."""

import sys
from pathlib import Path

import pytest

from mermaid_validator.env import RenderSettings

FAKE_MMDC = Path(__file__).parent / "mermaid_validator" / "tests" / "fake_mmdc.py"


@pytest.fixture
def fake_mmdc() -> Path:
    """Path to the fake mermaid-cli script."""
    return FAKE_MMDC


@pytest.fixture
def fake_settings() -> RenderSettings:
    """Settings that run the fake mermaid-cli with the current interpreter."""
    return RenderSettings(command=[sys.executable, str(FAKE_MMDC)], timeout=30.0)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every MERMAID_* variable so defaults apply.

    Each variable is registered with monkeypatch first, so values that
    load_dotenv writes during a test are removed again afterwards.
    """
    for name in ("MERMAID_CLI_COMMAND", "MERMAID_RENDER_TIMEOUT", "MERMAID_PUPPETEER_CONFIG"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
