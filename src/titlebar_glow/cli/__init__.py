"""Unified CLI for titlebar-glow.

Usage:
    titlebar-glow apply [--dry-run] [--seed S] [--intensity X] [--offset-x PX] [--diameter PX]
    titlebar-glow remove [--dry-run]
    titlebar-glow toggle [--dry-run] [overrides]
    titlebar-glow sync [--dry-run] [overrides]
    titlebar-glow restore
    titlebar-glow status [--json]
    titlebar-glow color [identity] [--seed S]
    titlebar-glow config show
    titlebar-glow config set <key> <value>

Global options: --target <css>, --workspace <dir>, --config <yaml>, --verbose
"""

import argparse
import logging
import sys

import yaml

from titlebar_glow import __version__
from titlebar_glow.cli.color import cmd_color
from titlebar_glow.cli.config import cmd_config_set, cmd_config_show
from titlebar_glow.cli.glow import (
    cmd_apply,
    cmd_remove,
    cmd_restore,
    cmd_status,
    cmd_sync,
    cmd_toggle,
)
from titlebar_glow.errors import GlowError


def _add_overrides(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--seed", default=None,
        help="Color seed (overrides color_seed from config)",
    )
    parser.add_argument(
        "--intensity", type=float, default=None,
        help="Glow opacity between 0 and 1",
    )
    parser.add_argument(
        "--offset-x", dest="offset_x", type=float, default=None,
        help="Horizontal offset of the glow in pixels",
    )
    parser.add_argument(
        "--diameter", type=float, default=None,
        help="Glow diameter in pixels",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="titlebar-glow",
        description="Per-workspace accent glow for the editor titlebar",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--target", default=None,
        help="Stylesheet to patch (default: $TITLEBAR_GLOW_TARGET or the editor's workbench CSS)",
    )
    parser.add_argument(
        "--workspace", default=None,
        help="Workspace directory whose name picks the color",
    )
    parser.add_argument(
        "--config", default=None,
        help="Path to config.yaml",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command")

    apply = sub.add_parser("apply", help="Inject the glow for this workspace")
    _add_overrides(apply)

    rm = sub.add_parser("remove", help="Remove the glow block")
    rm.add_argument(
        "--dry-run", action="store_true",
        help="Report changes without writing",
    )

    toggle = sub.add_parser("toggle", help="Remove the glow if applied, otherwise apply it")
    _add_overrides(toggle)

    sync = sub.add_parser(
        "sync", help="Reapply an existing glow if settings or workspace changed",
    )
    _add_overrides(sync)

    sub.add_parser("restore", help="Restore the stylesheet from its pristine backup")

    status = sub.add_parser("status", help="Show whether the glow is applied")
    status.add_argument(
        "--json", action="store_true",
        help="Output machine-readable JSON",
    )

    color = sub.add_parser("color", help="Preview the color for a workspace")
    color.add_argument(
        "identity", nargs="?", default=None,
        help="Workspace name (default: current workspace)",
    )
    color.add_argument("--seed", default=None, help="Color seed")

    cfg = sub.add_parser("config", help="Show or change settings")
    cfg_sub = cfg.add_subparsers(dest="subcommand")
    cfg_sub.add_parser("show", help="Print the effective settings")
    cfg_set = cfg_sub.add_parser("set", help="Change one setting")
    cfg_set.add_argument(
        "key", help="enabled, intensity, offset_x, diameter or color_seed",
    )
    cfg_set.add_argument("value")

    return parser


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    dispatch = {
        ("apply", ""): cmd_apply,
        ("remove", ""): cmd_remove,
        ("toggle", ""): cmd_toggle,
        ("sync", ""): cmd_sync,
        ("restore", ""): cmd_restore,
        ("status", ""): cmd_status,
        ("color", ""): cmd_color,
        ("config", "show"): cmd_config_show,
        ("config", "set"): cmd_config_set,
    }

    subcommand: str | None = getattr(args, "subcommand", None)
    handler = dispatch.get((args.command, subcommand or ""))
    if handler:
        try:
            return handler(args)
        except (GlowError, ValueError, yaml.YAMLError) as e:
            print(f"  ERROR: {e}")
            return 1

    parser.parse_args([args.command, "--help"])
    return 0


if __name__ == "__main__":
    sys.exit(main())
