"""Config CLI commands."""

import argparse
from dataclasses import asdict

from titlebar_glow.paths import config_path


def cmd_config_show(args: argparse.Namespace) -> int:
    from titlebar_glow.config import load_config

    config = load_config(args.config)
    print(f"  Config: {args.config or config_path()}")
    for key, value in asdict(config).items():
        print(f"    {key}: {value!r}")
    return 0


def cmd_config_set(args: argparse.Namespace) -> int:
    from titlebar_glow.config import update_config

    old_value, new_value = update_config(args.key, args.value, args.config)
    print(f"  {args.key}: {old_value!r} -> {new_value!r}")
    return 0
