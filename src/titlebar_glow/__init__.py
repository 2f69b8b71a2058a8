"""Titlebar glow — per-workspace accent color injected into the editor stylesheet.

A color is derived from the workspace name (plus an optional seed) and
written into the editor's workbench CSS as a single managed block:
    /* TITLEBAR_GLOW_EXTENSION_START */
    .titlebar-container::before { ... }
    /* TITLEBAR_GLOW_EXTENSION_END */

Anything outside these markers is preserved byte-for-byte. The pristine
stylesheet is copied to a sidecar backup before the first write.
"""

# Marker constants used by the injector and the status check
BLOCK_START = "/* TITLEBAR_GLOW_EXTENSION_START */"
BLOCK_END = "/* TITLEBAR_GLOW_EXTENSION_END */"

# Sidecar suffixes, appended to the full target path
BACKUP_SUFFIX = ".titlebar-glow.backup"
TEMP_SUFFIX = ".tmp"

__version__ = "0.1.0"
