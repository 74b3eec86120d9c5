"""Unit tests for command-line parsing."""

from __future__ import annotations

from argparse import Namespace

import pytest

from autostarter import cli
from autostarter.cli import arguments_parse, logLevelOverride_get


class TestArgumentsParse:
    """Flag handling."""

    def test_defaults(self) -> None:
        args = arguments_parse([])

        assert args.config is None
        assert args.disable_notifications is False
        assert args.backend is None
        assert args.log_level is None

    def test_config_and_notifications(self) -> None:
        args = arguments_parse(["--disable-notifications", "--config", "/tmp/layout.yml"])

        assert args.disable_notifications is True
        assert args.config == "/tmp/layout.yml"

    def test_unknown_flags_are_ignored(self) -> None:
        """Unrecognised options do not abort parsing."""
        args = arguments_parse(["--frobnicate", "--config", "a.yml", "stray"])

        assert args.config == "a.yml"

    @pytest.mark.parametrize("flag", ["--help", "-h"])
    def test_help_exits_zero(self, flag: str, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            arguments_parse([flag])

        assert exc_info.value.code == 0
        assert "--disable-notifications" in capsys.readouterr().out


class TestLogLevelOverride:
    """Tests for CLI log-level precedence."""

    def test_error_overrides_debug(self) -> None:
        args = Namespace(debug=True, info=False, warning=False, error=True)
        assert logLevelOverride_get(args) == "ERROR"

    def test_info_overrides_debug_when_both_set(self) -> None:
        args = Namespace(debug=True, info=True, warning=False, error=False)
        assert logLevelOverride_get(args) == "INFO"

    def test_no_flags(self) -> None:
        args = Namespace(debug=False, info=False, warning=False, error=False)
        assert logLevelOverride_get(args) is None


class TestMain:
    """Exit status propagation."""

    def test_main_exits_with_session_code(self, monkeypatch) -> None:
        seen: list[Namespace] = []

        def _session_run(args: Namespace) -> int:
            seen.append(args)
            return 244

        monkeypatch.setattr("autostarter.session.main.session_run", _session_run)

        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--debug"])

        assert exc_info.value.code == 244
        assert seen[0].log_level == "DEBUG"
