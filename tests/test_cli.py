"""Tests for the titlebar-glow CLI.

Covers:
- Parser construction and argument parsing
- --help for all commands
- End-to-end apply / status / remove / restore against a temp stylesheet
- Error reporting for missing targets and bad settings
"""

import argparse
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from titlebar_glow import BLOCK_END, BLOCK_START
from titlebar_glow.cli import build_parser, main
from titlebar_glow.config import load_config

FIXTURES = Path(__file__).parent / "fixtures"
WORKBENCH_CSS = (FIXTURES / "workbench.css").read_text()


def _run(*argv):
    with patch("sys.argv", ["titlebar-glow", *argv]):
        return main()


# ── Parser construction ──────────────────────────────────────────


class TestParserConstruction:
    def test_build_parser_returns_parser(self):
        assert isinstance(build_parser(), argparse.ArgumentParser)

    def test_no_args_shows_help(self, capsys):
        assert _run() == 0
        assert "titlebar-glow" in capsys.readouterr().out

    def test_global_flags(self):
        args = build_parser().parse_args(
            ["--target", "/tmp/x.css", "--workspace", "/src/demo", "status", "--json"]
        )
        assert args.target == "/tmp/x.css"
        assert args.workspace == "/src/demo"
        assert args.json is True

    def test_override_flags(self):
        args = build_parser().parse_args(
            ["apply", "--seed", "s", "--intensity", "0.5", "--offset-x", "-10", "--diameter", "90"]
        )
        assert args.seed == "s"
        assert args.intensity == 0.5
        assert args.offset_x == -10
        assert args.diameter == 90
        assert args.dry_run is False


class TestHelpOutput:
    @pytest.mark.parametrize("cmd", [
        ["--help"],
        ["apply", "--help"],
        ["remove", "--help"],
        ["toggle", "--help"],
        ["sync", "--help"],
        ["restore", "--help"],
        ["status", "--help"],
        ["color", "--help"],
        ["config", "--help"],
        ["config", "set", "--help"],
    ])
    def test_help_exits_zero(self, cmd):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(cmd)
        assert exc_info.value.code == 0


# ── Commands ─────────────────────────────────────────────────────


class TestGlowCommands:
    def test_apply_and_remove(self, stylesheet, capsys):
        assert _run("--target", str(stylesheet), "--workspace", "demo", "apply") == 0
        out = capsys.readouterr().out
        assert "applied" in out
        assert "reopen" in out
        assert BLOCK_START in stylesheet.read_text()

        assert _run("--target", str(stylesheet), "remove") == 0
        assert stylesheet.read_text() == WORKBENCH_CSS

    def test_apply_dry_run(self, stylesheet, capsys):
        assert _run("--target", str(stylesheet), "apply", "--dry-run") == 0
        assert "[DRY RUN]" in capsys.readouterr().out
        assert stylesheet.read_text() == WORKBENCH_CSS

    def test_apply_with_overrides(self, stylesheet):
        rc = _run("--target", str(stylesheet), "apply", "--intensity", "0.8", "--diameter", "120")
        assert rc == 0
        content = stylesheet.read_text()
        assert "opacity: 0.8;" in content
        assert "width: 120px;" in content

    def test_invalid_override(self, stylesheet, capsys):
        assert _run("--target", str(stylesheet), "apply", "--intensity", "3") == 1
        assert "ERROR" in capsys.readouterr().out
        assert stylesheet.read_text() == WORKBENCH_CSS

    def test_toggle(self, stylesheet):
        assert _run("--target", str(stylesheet), "toggle") == 0
        assert BLOCK_START in stylesheet.read_text()
        assert _run("--target", str(stylesheet), "toggle") == 0
        assert stylesheet.read_text() == WORKBENCH_CSS

    def test_sync_not_applied(self, stylesheet, capsys):
        assert _run("--target", str(stylesheet), "sync") == 0
        assert "nothing to sync" in capsys.readouterr().out

    def test_remove_not_applied(self, stylesheet, capsys):
        assert _run("--target", str(stylesheet), "remove") == 0
        assert "not currently applied" in capsys.readouterr().out

    def test_missing_target(self, tmp_path, capsys):
        assert _run("--target", str(tmp_path / "missing.css"), "apply") == 1
        assert "ERROR" in capsys.readouterr().out

    def test_restore_without_backup(self, stylesheet, capsys):
        assert _run("--target", str(stylesheet), "restore") == 1
        assert "No backup" in capsys.readouterr().out

    def test_restore(self, stylesheet, capsys):
        _run("--target", str(stylesheet), "apply")
        assert _run("--target", str(stylesheet), "restore") == 0
        assert "Restored" in capsys.readouterr().out
        assert stylesheet.read_text() == WORKBENCH_CSS

    def test_status_json(self, stylesheet, capsys):
        _run("--target", str(stylesheet), "--workspace", "demo", "apply")
        capsys.readouterr()
        assert _run("--target", str(stylesheet), "--workspace", "demo", "status", "--json") == 0
        data = json.loads(capsys.readouterr().out)
        assert data["active"] is True
        assert data["in_sync"] is True
        assert data["workspace"] == "demo"

    def test_status_text(self, stylesheet, capsys):
        assert _run("--target", str(stylesheet), "status") == 0
        out = capsys.readouterr().out
        assert "Glow Off" in out
        assert "Workspace: default" in out

    def test_status_reports_malformed_block(self, stylesheet, capsys):
        _run("--target", str(stylesheet), "apply")
        stylesheet.write_text(stylesheet.read_text().replace(BLOCK_END, ""))
        capsys.readouterr()
        assert _run("--target", str(stylesheet), "status") == 0
        out = capsys.readouterr().out
        assert "Glow Malformed" in out
        assert "Glow Active" not in out

    def test_sync_malformed_block_fails(self, stylesheet, capsys):
        _run("--target", str(stylesheet), "apply")
        broken = stylesheet.read_text().replace(BLOCK_END, "")
        stylesheet.write_text(broken)
        capsys.readouterr()
        assert _run("--target", str(stylesheet), "sync") == 1
        assert "ERROR" in capsys.readouterr().out
        assert stylesheet.read_text() == broken


class TestColorCommand:
    def test_color_for_identity(self, capsys):
        assert _run("color", "a") == 0
        out = capsys.readouterr().out
        assert "#63b82e" in out
        assert "99, 184, 46" in out

    def test_color_with_seed(self, capsys):
        assert _run("color", "", "--seed", "a") == 0
        assert "#63b82e" in capsys.readouterr().out


class TestConfigCommands:
    def test_set_and_show(self, capsys):
        assert _run("config", "set", "intensity", "0.6") == 0
        assert "0.3 -> 0.6" in capsys.readouterr().out
        assert load_config().intensity == 0.6

        assert _run("config", "show") == 0
        assert "intensity: 0.6" in capsys.readouterr().out

    def test_set_invalid(self, capsys):
        assert _run("config", "set", "diameter", "-5") == 1
        assert "ERROR" in capsys.readouterr().out

    def test_disabled_apply(self, stylesheet, capsys):
        _run("config", "set", "enabled", "false")
        capsys.readouterr()
        assert _run("--target", str(stylesheet), "apply") == 0
        assert "disabled" in capsys.readouterr().out
        assert stylesheet.read_text() == WORKBENCH_CSS
