"""Tests for the command line entry point."""

from unittest.mock import MagicMock, patch

import pytest

from server import __main__ as entry
from server.core import SERVER_VERSION


@pytest.fixture
def no_logging_setup():
    with patch.object(entry, "configure_logging") as mock_configure:
        yield mock_configure


class TestParser:

    def test_defaults(self):
        args = entry.build_parser().parse_args([])
        assert args.env_file == ".env"
        assert args.log_file is None
        assert args.verbose is False

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            entry.build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert SERVER_VERSION in capsys.readouterr().out


class TestMain:

    def test_runs_stdio_server(self, clean_env, no_logging_setup, tmp_path):
        server = MagicMock()
        with patch.object(entry, "create_server", return_value=server) as mock_create:
            code = entry.main(["--env-file", str(tmp_path / "missing.env"), "-v"])

        assert code == 0
        server.run.assert_called_once_with(transport="stdio")
        settings = mock_create.call_args[0][0]
        assert settings.command == ["npx", "@mermaid-js/mermaid-cli"]
        assert mock_create.call_args[1]["log_level"] == "DEBUG"
        no_logging_setup.assert_called_once_with(True, None)

    def test_loads_env_file(self, clean_env, no_logging_setup, tmp_path):
        env_file = tmp_path / "mermaid.env"
        env_file.write_text("MERMAID_CLI_COMMAND=mmdc --quiet\nMERMAID_RENDER_TIMEOUT=5\n")
        with patch.object(entry, "create_server") as mock_create:
            entry.main(["--env-file", str(env_file)])

        settings = mock_create.call_args[0][0]
        assert settings.command == ["mmdc", "--quiet"]
        assert settings.timeout == 5.0

    def test_bad_configuration_exits_1(self, clean_env, no_logging_setup, tmp_path, capsys):
        clean_env.setenv("MERMAID_RENDER_TIMEOUT", "never")
        with patch.object(entry, "create_server") as mock_create:
            code = entry.main(["--env-file", str(tmp_path / "missing.env")])

        assert code == 1
        mock_create.assert_not_called()
        assert "MERMAID_RENDER_TIMEOUT" in capsys.readouterr().err

    def test_keyboard_interrupt_is_quiet(self, clean_env, no_logging_setup, tmp_path):
        server = MagicMock()
        server.run.side_effect = KeyboardInterrupt
        with patch.object(entry, "create_server", return_value=server):
            assert entry.main(["--env-file", str(tmp_path / "missing.env")]) == 0
