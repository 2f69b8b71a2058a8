"""Tests for target, config and identity resolution."""

from pathlib import Path

from titlebar_glow.paths import (
    DEFAULT_IDENTITY,
    config_path,
    css_candidate,
    locate_css_file,
    resolve_target,
    workspace_name,
)

CSS_TAIL = Path("app", "out", "vs", "workbench", "workbench.desktop.main.css")


def _install_editor(root: Path) -> tuple[Path, Path]:
    exe = root / "editor" / "code"
    css = root / "editor" / "resources" / CSS_TAIL
    css.parent.mkdir(parents=True)
    css.write_text("body {}\n")
    exe.write_text("")
    return exe, css


class TestCssCandidate:
    def test_linux(self):
        assert css_candidate("/usr/share/code/code", "linux") == Path("/usr/share/code/resources") / CSS_TAIL

    def test_windows(self):
        candidate = css_candidate("/opt/VS Code/Code.exe", "win32")
        assert candidate == Path("/opt/VS Code/resources") / CSS_TAIL

    def test_macos(self):
        candidate = css_candidate("/Applications/Code.app/Contents/MacOS/Electron", "darwin")
        expected = Path("/Applications/Code.app/Contents/MacOS/../Resources") / CSS_TAIL
        assert candidate == expected


class TestLocateCssFile:
    def test_found(self, tmp_path):
        exe, css = _install_editor(tmp_path)
        assert locate_css_file(exe, "linux") == css

    def test_missing(self, tmp_path):
        assert locate_css_file(tmp_path / "code", "linux") is None

    def test_no_executable_known(self):
        assert locate_css_file() is None

    def test_exec_from_env(self, tmp_path, monkeypatch):
        exe, css = _install_editor(tmp_path)
        monkeypatch.setenv("TITLEBAR_GLOW_EDITOR_EXEC", str(exe))
        assert locate_css_file(platform="linux") == css


class TestResolveTarget:
    def test_explicit(self, stylesheet):
        assert resolve_target(stylesheet) == stylesheet

    def test_explicit_missing(self, tmp_path):
        assert resolve_target(tmp_path / "missing.css") is None

    def test_env(self, stylesheet, monkeypatch):
        monkeypatch.setenv("TITLEBAR_GLOW_TARGET", str(stylesheet))
        assert resolve_target() == stylesheet

    def test_nothing_configured(self):
        assert resolve_target() is None


class TestWorkspaceName:
    def test_default(self):
        assert workspace_name() == DEFAULT_IDENTITY == "default"

    def test_explicit_dir(self, tmp_path):
        project = tmp_path / "my-project"
        project.mkdir()
        assert workspace_name(project) == "my-project"

    def test_env(self, monkeypatch):
        monkeypatch.setenv("TITLEBAR_GLOW_WORKSPACE", "/home/me/src/glow-demo")
        assert workspace_name() == "glow-demo"


class TestConfigPath:
    def test_env_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv("TITLEBAR_GLOW_CONFIG", str(tmp_path / "glow.yaml"))
        assert config_path() == tmp_path / "glow.yaml"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("TITLEBAR_GLOW_CONFIG")
        assert config_path() == Path.home() / ".config" / "titlebar-glow" / "config.yaml"
