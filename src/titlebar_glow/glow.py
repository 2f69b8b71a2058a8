"""Glow operations: derive the workspace color and drive the injector.

Each function resolves nothing itself: callers pass the target path (or
None when it could not be located), the loaded config and the workspace
identity. Status is rebuilt from the file on every call; nothing is
cached between calls.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from titlebar_glow.color import derive_color, format_hex
from titlebar_glow.config import GlowConfig
from titlebar_glow.errors import NoBackupAvailable, TargetNotFound
from titlebar_glow.injector import (
    BlockState,
    InjectionParameters,
    backup_path_for,
    check_block,
    detect,
    detect_file,
    extract_parameters,
    has_dangling_start,
    inject_file,
    read_target,
    remove_file,
    restore,
)

logger = logging.getLogger(__name__)


@dataclass
class GlowStatus:
    """Snapshot of what the stylesheet currently carries."""

    target: Path
    workspace: str
    expected_color: str
    state: BlockState
    applied: InjectionParameters | None = None
    enabled: bool = True
    has_backup: bool = False
    malformed: bool = False

    @property
    def active(self) -> bool:
        return self.state is BlockState.PRESENT and self.enabled

    @property
    def in_sync(self) -> bool:
        """True only when the applied block is verifiably the expected color."""
        if self.applied is None or self.malformed:
            return False
        return self.applied.color_hex.upper() == self.expected_color.upper()

    def summary(self) -> str:
        if self.malformed:
            return "Glow Malformed (start marker without end marker)"
        if not self.active:
            return "Glow Off"
        if self.in_sync:
            return f"Glow Active {self.expected_color}"
        return f"Glow Active (stale, expected {self.expected_color})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": str(self.target),
            "workspace": self.workspace,
            "expected_color": self.expected_color,
            "state": self.state.value,
            "applied_color": self.applied.color_hex if self.applied else None,
            "enabled": self.enabled,
            "active": self.active,
            "in_sync": self.in_sync,
            "has_backup": self.has_backup,
            "malformed": self.malformed,
        }


def expected_color(workspace: str, config: GlowConfig) -> str:
    """Hex color for this workspace under the current seed."""
    return format_hex(derive_color(workspace, config.color_seed))


def expected_parameters(workspace: str, config: GlowConfig) -> InjectionParameters:
    return config.to_parameters(expected_color(workspace, config))


def _require_target(target: Path | str | None) -> Path:
    if target is None:
        raise TargetNotFound()
    return Path(target)


def apply_glow(
    target: Path | str | None,
    config: GlowConfig,
    workspace: str,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Inject the glow for this workspace.

    Returns:
        {"path", "action", "color", "dry_run"} where action is "updated",
        "unchanged" or "disabled" (config.enabled is False, file untouched).
    """
    path = _require_target(target)
    color = expected_color(workspace, config)
    if not config.enabled:
        return {"path": str(path), "action": "disabled", "color": color, "dry_run": dry_run}

    action = inject_file(path, config.to_parameters(color), dry_run)
    logger.debug("apply %s -> %s (%s)", color, path, action)
    return {"path": str(path), "action": action, "color": color, "dry_run": dry_run}


def remove_glow(target: Path | str | None, dry_run: bool = False) -> dict[str, Any]:
    """Strip the glow block. Action is "removed" or "unchanged"."""
    path = _require_target(target)
    action = remove_file(path, dry_run)
    logger.debug("remove %s (%s)", path, action)
    return {"path": str(path), "action": action, "dry_run": dry_run}


def toggle_glow(
    target: Path | str | None,
    config: GlowConfig,
    workspace: str,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Remove the glow if present, otherwise apply it.

    Applying goes through apply_glow, so with enabled: false a missing
    glow stays missing and the action is "disabled". Removal ignores the
    enabled flag.
    """
    path = _require_target(target)
    if detect_file(path) is BlockState.PRESENT:
        return remove_glow(path, dry_run)
    return apply_glow(path, config, workspace, dry_run)


def sync_glow(
    target: Path | str | None,
    config: GlowConfig,
    workspace: str,
    dry_run: bool = False,
) -> dict[str, Any]:
    """Bring an existing injection in line with the current settings.

    - Dangling start marker: raise MalformedBlock, never report a match.
    - Disabled config: remove the block if present.
    - No block: leave the file alone ("skipped"); sync never adds a glow.
    - Block present: reapply unless it verifiably matches. A block whose
      parameters cannot be read back is treated as stale.
    """
    path = _require_target(target)
    content = read_target(path)
    present = detect(content) is BlockState.PRESENT
    check_block(content, path)

    if not config.enabled:
        if present:
            return remove_glow(path, dry_run)
        return {"path": str(path), "action": "unchanged", "dry_run": dry_run}

    expected = expected_parameters(workspace, config)
    color = expected.color_hex
    if not present:
        return {"path": str(path), "action": "skipped", "color": color, "dry_run": dry_run}

    if expected.matches(extract_parameters(content)):
        return {"path": str(path), "action": "unchanged", "color": color, "dry_run": dry_run}

    action = inject_file(path, expected, dry_run)
    return {"path": str(path), "action": action, "color": color, "dry_run": dry_run}


def restore_glow(target: Path | str | None) -> dict[str, Any]:
    """Put the pristine stylesheet back from its backup."""
    path = _require_target(target)
    if not restore(path):
        raise NoBackupAvailable(path)
    return {"path": str(path), "action": "restored", "backup": str(backup_path_for(path))}


def glow_status(
    target: Path | str | None,
    config: GlowConfig,
    workspace: str,
) -> GlowStatus:
    """Re-read the stylesheet and report what is applied."""
    path = _require_target(target)
    state = detect_file(path)
    applied = None
    malformed = False
    if state is BlockState.PRESENT:
        content = read_target(path)
        applied = extract_parameters(content)
        malformed = has_dangling_start(content)
    return GlowStatus(
        target=path,
        workspace=workspace,
        expected_color=expected_color(workspace, config),
        state=state,
        applied=applied,
        enabled=config.enabled,
        has_backup=backup_path_for(path).exists(),
        malformed=malformed,
    )
