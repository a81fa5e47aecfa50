"""Tests for environment variable resolution."""

import pytest

from mermaid_validator.env import (
    DEFAULT_RENDER_TIMEOUT,
    RenderSettings,
    resolve_command,
    resolve_puppeteer_config,
    resolve_settings,
    resolve_timeout,
)
from mermaid_validator.errors import ConfigurationError


class TestResolveCommand:

    def test_default_uses_npx(self, clean_env):
        assert resolve_command() == ["npx", "@mermaid-js/mermaid-cli"]

    def test_custom_command(self, clean_env):
        clean_env.setenv("MERMAID_CLI_COMMAND", "mmdc")
        assert resolve_command() == ["mmdc"]

    def test_shell_style_split(self, clean_env):
        clean_env.setenv("MERMAID_CLI_COMMAND", "'/opt/mermaid cli/mmdc' --quiet")
        assert resolve_command() == ["/opt/mermaid cli/mmdc", "--quiet"]

    def test_blank_command_rejected(self, clean_env):
        clean_env.setenv("MERMAID_CLI_COMMAND", "   ")
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_command()
        assert exc_info.value.variable == "MERMAID_CLI_COMMAND"

    def test_unbalanced_quotes_rejected(self, clean_env):
        clean_env.setenv("MERMAID_CLI_COMMAND", "mmdc 'oops")
        with pytest.raises(ConfigurationError):
            resolve_command()


class TestResolveTimeout:

    def test_default(self, clean_env):
        assert resolve_timeout() == DEFAULT_RENDER_TIMEOUT

    def test_custom(self, clean_env):
        clean_env.setenv("MERMAID_RENDER_TIMEOUT", "2.5")
        assert resolve_timeout() == 2.5

    def test_zero_disables(self, clean_env):
        clean_env.setenv("MERMAID_RENDER_TIMEOUT", "0")
        assert resolve_timeout() is None

    def test_not_a_number(self, clean_env):
        clean_env.setenv("MERMAID_RENDER_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError, match="MERMAID_RENDER_TIMEOUT"):
            resolve_timeout()

    def test_negative(self, clean_env):
        clean_env.setenv("MERMAID_RENDER_TIMEOUT", "-1")
        with pytest.raises(ConfigurationError, match="must not be negative"):
            resolve_timeout()


class TestResolveSettings:

    def test_defaults(self, clean_env):
        assert resolve_settings() == RenderSettings(
            command=["npx", "@mermaid-js/mermaid-cli"],
            timeout=DEFAULT_RENDER_TIMEOUT,
            puppeteer_config=None,
        )

    def test_puppeteer_config(self, clean_env):
        clean_env.setenv("MERMAID_PUPPETEER_CONFIG", "/etc/puppeteer.json")
        assert resolve_puppeteer_config() == "/etc/puppeteer.json"
        assert resolve_settings().puppeteer_config == "/etc/puppeteer.json"

    def test_empty_puppeteer_config_ignored(self, clean_env):
        clean_env.setenv("MERMAID_PUPPETEER_CONFIG", "")
        assert resolve_puppeteer_config() is None
