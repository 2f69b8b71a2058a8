"""Glow CLI commands: apply, remove, toggle, sync, restore, status."""

import argparse
import dataclasses
import json

from titlebar_glow.config import GlowConfig, load_config
from titlebar_glow.paths import resolve_target, workspace_name

RESTART_HINT = "Close and reopen the editor completely for the change to take effect."

_OVERRIDES = {
    "seed": "color_seed",
    "intensity": "intensity",
    "offset_x": "offset_x",
    "diameter": "diameter",
}


def _settings(args: argparse.Namespace) -> GlowConfig:
    """Load the config file and layer command-line overrides on top."""
    config = load_config(args.config)
    overrides = {}
    for arg_name, field_name in _OVERRIDES.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            overrides[field_name] = value
    if overrides:
        config = dataclasses.replace(config, **overrides)
        config.validate()
    return config


def _report_write(result: dict, verb: str) -> int:
    prefix = "[DRY RUN] " if result.get("dry_run") else ""
    color = f" Color: {result['color']}." if result.get("color") else ""
    print(f"  {prefix}Titlebar glow {verb}.{color}")
    print(f"  Target: {result['path']}")
    if not result.get("dry_run"):
        print(f"  {RESTART_HINT}")
    return 0


def _report(result: dict) -> int:
    action = result["action"]
    if action == "updated":
        return _report_write(result, "applied")
    if action == "removed":
        return _report_write(result, "removed")
    if action == "disabled":
        print("  Titlebar glow is disabled in settings (enabled: false).")
        return 0
    if action == "skipped":
        print("  Titlebar glow is not applied; nothing to sync.")
        return 0
    print(f"  No change: {result['path']} is already up to date.")
    return 0


def cmd_apply(args: argparse.Namespace) -> int:
    from titlebar_glow.glow import apply_glow

    result = apply_glow(
        resolve_target(args.target),
        _settings(args),
        workspace_name(args.workspace),
        dry_run=args.dry_run,
    )
    return _report(result)


def cmd_remove(args: argparse.Namespace) -> int:
    from titlebar_glow.glow import remove_glow

    result = remove_glow(resolve_target(args.target), dry_run=args.dry_run)
    if result["action"] == "unchanged":
        print("  Titlebar glow is not currently applied.")
        return 0
    return _report(result)


def cmd_toggle(args: argparse.Namespace) -> int:
    from titlebar_glow.glow import toggle_glow

    result = toggle_glow(
        resolve_target(args.target),
        _settings(args),
        workspace_name(args.workspace),
        dry_run=args.dry_run,
    )
    return _report(result)


def cmd_sync(args: argparse.Namespace) -> int:
    from titlebar_glow.glow import sync_glow

    result = sync_glow(
        resolve_target(args.target),
        _settings(args),
        workspace_name(args.workspace),
        dry_run=args.dry_run,
    )
    return _report(result)


def cmd_restore(args: argparse.Namespace) -> int:
    from titlebar_glow.glow import restore_glow

    result = restore_glow(resolve_target(args.target))
    print(f"  Restored {result['path']} from {result['backup']}")
    print(f"  {RESTART_HINT}")
    return 0


def cmd_status(args: argparse.Namespace) -> int:
    from titlebar_glow.glow import glow_status

    status = glow_status(
        resolve_target(args.target),
        load_config(args.config),
        workspace_name(args.workspace),
    )

    if args.json:
        print(json.dumps(status.to_dict(), indent=2))
        return 0

    print("Titlebar Glow Status")
    print("─" * 40)
    print(f"  {status.summary()}")
    print(f"  Workspace: {status.workspace}")
    print(f"  Color:     {status.expected_color}")
    print(f"  Target:    {status.target}")
    print(f"  Backup:    {'yes' if status.has_backup else 'no'}")
    if status.malformed:
        print("  Start marker has no end marker; run `restore` or fix the file by hand.")
    elif status.active and status.applied is None:
        print("  Applied block could not be read back; run `sync` to refresh it.")
    elif status.active and not status.in_sync:
        print(f"  Applied color {status.applied.color_hex} is stale; run `sync` to refresh it.")
    return 0
