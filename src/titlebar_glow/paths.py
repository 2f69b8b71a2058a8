"""Path and identity resolution.

Resolves the stylesheet to patch, the config file and the workspace
identity. Uses environment variables when available, falls back to
conventional defaults.

Environment variables:
    TITLEBAR_GLOW_TARGET — stylesheet to patch (skips editor lookup)
    TITLEBAR_GLOW_EDITOR_EXEC — editor executable used to locate the stylesheet
    TITLEBAR_GLOW_CONFIG — config file (default: ~/.config/titlebar-glow/config.yaml)
    TITLEBAR_GLOW_WORKSPACE — workspace whose name picks the color
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

DEFAULT_IDENTITY = "default"

_DEFAULT_CONFIG = Path.home() / ".config" / "titlebar-glow" / "config.yaml"
_WORKBENCH_CSS = ("app", "out", "vs", "workbench", "workbench.desktop.main.css")


def config_path() -> Path:
    """Return the path to the YAML config file."""
    return Path(os.environ.get("TITLEBAR_GLOW_CONFIG", str(_DEFAULT_CONFIG)))


def css_candidate(exec_path: Path | str, platform: str | None = None) -> Path:
    """Where the workbench stylesheet lives relative to the editor executable.

    macOS bundles keep resources in Contents/Resources next to
    Contents/MacOS; Windows and Linux keep a resources/ directory beside
    the executable.
    """
    platform = platform or sys.platform
    exec_dir = Path(exec_path).parent
    if platform == "darwin":
        resources = exec_dir / ".." / "Resources"
    else:
        resources = exec_dir / "resources"
    return resources.joinpath(*_WORKBENCH_CSS)


def locate_css_file(
    exec_path: Path | str | None = None,
    platform: str | None = None,
) -> Path | None:
    """Locate the editor's workbench stylesheet.

    Args:
        exec_path: Editor executable. Defaults to $TITLEBAR_GLOW_EDITOR_EXEC.
        platform: sys.platform-style name. Defaults to the running platform.

    Returns:
        Path to the stylesheet, or None if it does not exist.
    """
    exec_path = exec_path or os.environ.get("TITLEBAR_GLOW_EDITOR_EXEC")
    if not exec_path:
        return None
    candidate = css_candidate(exec_path, platform)
    return candidate if candidate.is_file() else None


def resolve_target(explicit: Path | str | None = None) -> Path | None:
    """Resolve the stylesheet from an explicit path, the environment, or the editor."""
    raw = explicit or os.environ.get("TITLEBAR_GLOW_TARGET")
    if raw:
        target = Path(raw).expanduser()
        return target if target.is_file() else None
    return locate_css_file()


def workspace_name(workspace: Path | str | None = None) -> str:
    """Return the identity string for the current workspace."""
    raw = workspace or os.environ.get("TITLEBAR_GLOW_WORKSPACE")
    if raw:
        name = Path(raw).expanduser().resolve().name
        if name:
            return name
    return DEFAULT_IDENTITY
