"""Shared test fixtures for titlebar-glow."""

from pathlib import Path

import pytest

from titlebar_glow.injector import InjectionParameters

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep tests away from the real config file and editor install."""
    for var in (
        "TITLEBAR_GLOW_TARGET",
        "TITLEBAR_GLOW_EDITOR_EXEC",
        "TITLEBAR_GLOW_WORKSPACE",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("TITLEBAR_GLOW_CONFIG", str(tmp_path / "config" / "config.yaml"))


@pytest.fixture
def stylesheet(tmp_path):
    css = tmp_path / "workbench.desktop.main.css"
    css.write_bytes((FIXTURES / "workbench.css").read_bytes())
    return css


@pytest.fixture
def params():
    return InjectionParameters(color_hex="#4a90d9", intensity=0.3, offset_x=50, diameter=200)
