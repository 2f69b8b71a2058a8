"""Color preview CLI command."""

import argparse

from titlebar_glow.color import derive_color, derive_hsl, hash_string
from titlebar_glow.config import load_config
from titlebar_glow.paths import workspace_name


def cmd_color(args: argparse.Namespace) -> int:
    identity = args.identity if args.identity is not None else workspace_name(args.workspace)
    seed = args.seed if args.seed is not None else load_config(args.config).color_seed

    hue, saturation, lightness = derive_hsl(hash_string(identity + seed))
    color = derive_color(identity, seed)
    print(f"  Workspace: {identity}")
    if seed:
        print(f"  Seed:      {seed}")
    print(f"  HSL:       {hue}, {saturation}%, {lightness}%")
    print(f"  RGB:       {color.r}, {color.g}, {color.b}")
    print(f"  Hex:       {color.hex}")
    return 0
