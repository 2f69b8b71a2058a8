"""Managed-block injection into the editor stylesheet.

The stylesheet is treated as an opaque text buffer containing at most one
block delimited by BLOCK_START / BLOCK_END. The pure functions operate on
strings; the file functions wrap them in read-modify-write cycles:

1. Read the target without newline translation
2. Refuse to touch a buffer with a dangling start marker
3. Strip any existing block and append the freshly rendered one
4. Copy the pristine file to the backup sidecar (first write only)
5. Write to <target>.tmp, then os.replace() it over the target

Everything outside the markers is preserved byte-for-byte.
"""

from __future__ import annotations

import enum
import logging
import os
import re
import shutil
from dataclasses import dataclass
from pathlib import Path

from titlebar_glow import BACKUP_SUFFIX, BLOCK_END, BLOCK_START, TEMP_SUFFIX
from titlebar_glow.errors import MalformedBlock, ReadFailure, WriteFailure

logger = logging.getLogger(__name__)

_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
_NUMBER = r"(-?\d+(?:\.\d+)?(?:[eE][-+]?\d+)?)"

# Best-effort patterns matched against the block body only
_COLOR_PATTERN = re.compile(
    r"background:\s*radial-gradient\(\s*circle\s*,\s*(#[0-9a-fA-F]{6})(?![0-9a-fA-F])"
)
_OFFSET_PATTERN = re.compile(r"\bleft:\s*" + _NUMBER + r"px")
_DIAMETER_PATTERN = re.compile(r"\bwidth:\s*" + _NUMBER + r"px")
_INTENSITY_PATTERN = re.compile(r"\bopacity:\s*" + _NUMBER)


class BlockState(enum.Enum):
    ABSENT = "absent"
    PRESENT = "present"


@dataclass(frozen=True)
class InjectionParameters:
    """Everything needed to render the glow block."""

    color_hex: str
    intensity: float
    offset_x: float
    diameter: float

    def __post_init__(self) -> None:
        if not _HEX_COLOR_RE.match(self.color_hex):
            raise ValueError(f"color_hex must look like #RRGGBB, got {self.color_hex!r}")
        if not 0 <= self.intensity <= 1:
            raise ValueError(f"intensity must be within [0, 1], got {self.intensity}")
        if not self.diameter > 0:
            raise ValueError(f"diameter must be positive, got {self.diameter}")

    def matches(self, other: InjectionParameters | None) -> bool:
        """Compare with another set, ignoring hex case."""
        if other is None:
            return False
        return (
            self.color_hex.upper() == other.color_hex.upper()
            and self.intensity == other.intensity
            and self.offset_x == other.offset_x
            and self.diameter == other.diameter
        )


def backup_path_for(location: Path | str) -> Path:
    """Return the pristine-backup sidecar path for a target."""
    target = Path(location)
    return target.with_name(target.name + BACKUP_SUFFIX)


def temp_path_for(location: Path | str) -> Path:
    target = Path(location)
    return target.with_name(target.name + TEMP_SUFFIX)


# ── Pure buffer operations ───────────────────────────────────────────


def detect(buffer: str) -> BlockState:
    """PRESENT iff the buffer contains the start marker."""
    return BlockState.PRESENT if BLOCK_START in buffer else BlockState.ABSENT


def _block_span(buffer: str) -> tuple[int, int] | None:
    """Return (start, end) of the complete block, end exclusive of the newline."""
    start = buffer.find(BLOCK_START)
    if start == -1:
        return None
    end = buffer.find(BLOCK_END, start)
    if end == -1:
        return None
    return start, end + len(BLOCK_END)


def _parse_number(text: str) -> int | float:
    return int(text) if re.fullmatch(r"-?\d+", text) else float(text)


def _format_number(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def extract_parameters(buffer: str) -> InjectionParameters | None:
    """Read back the parameters of the currently injected block.

    This is a pattern scan, not a parse. Any hand edit that removes or
    reshapes the gradient, left, width or opacity declarations makes it
    return None, which callers must read as "cannot verify, assume stale".

    Returns:
        InjectionParameters with an uppercased color, or None.
    """
    start = buffer.find(BLOCK_START)
    if start == -1:
        return None
    end = buffer.find(BLOCK_END, start)
    body = buffer[start:] if end == -1 else buffer[start:end]

    color = _COLOR_PATTERN.search(body)
    offset = _OFFSET_PATTERN.search(body)
    diameter = _DIAMETER_PATTERN.search(body)
    intensity = _INTENSITY_PATTERN.search(body)
    if not (color and offset and diameter and intensity):
        return None

    try:
        return InjectionParameters(
            color_hex=color.group(1).upper(),
            intensity=_parse_number(intensity.group(1)),
            offset_x=_parse_number(offset.group(1)),
            diameter=_parse_number(diameter.group(1)),
        )
    except ValueError:
        return None


def render_block(params: InjectionParameters) -> str:
    """Render the managed block, markers included, with a trailing newline."""
    offset_x = _format_number(params.offset_x)
    diameter = _format_number(params.diameter)
    intensity = _format_number(params.intensity)
    return f"""\
{BLOCK_START}
.titlebar-container::before {{
    content: '';
    position: absolute;
    left: {offset_x}px;
    top: 50%;
    transform: translateY(-50%);
    width: {diameter}px;
    height: {diameter}px;
    border-radius: 50%;
    background: radial-gradient(circle, {params.color_hex} 0%, transparent 70%);
    opacity: {intensity};
    pointer-events: none;
    z-index: 0;
}}

.titlebar-container > * {{
    position: relative;
    z-index: 1;
}}
{BLOCK_END}
"""


def strip_block(buffer: str) -> str:
    """Remove the managed block and one newline following it.

    A start marker without an end marker leaves the buffer untouched.
    """
    span = _block_span(buffer)
    if span is None:
        return buffer
    start, end = span
    if buffer.startswith("\n", end):
        end += 1
    return buffer[:start] + buffer[end:]


def apply_block(buffer: str, params: InjectionParameters) -> str:
    """Replace any existing block with one rendered from params."""
    return strip_block(buffer) + render_block(params)


def has_dangling_start(buffer: str) -> bool:
    """True if a start marker has no end marker after it."""
    return detect(buffer) is BlockState.PRESENT and _block_span(buffer) is None


def check_block(buffer: str, location: Path | str = "<buffer>") -> None:
    """Raise MalformedBlock if a start marker has no end marker after it."""
    if has_dangling_start(buffer):
        logger.warning("Start marker without end marker in %s", location)
        raise MalformedBlock(location)


# ── File operations ──────────────────────────────────────────────────


def read_target(location: Path | str) -> str:
    """Read the target stylesheet exactly as stored."""
    target = Path(location)
    try:
        with open(target, encoding="utf-8", newline="") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadFailure(target, exc) from exc
    logger.debug("Read %d chars from %s", len(content), target)
    return content


def detect_file(location: Path | str) -> BlockState:
    """Detect the block in a file; an unreadable file counts as ABSENT."""
    try:
        return detect(read_target(location))
    except ReadFailure as exc:
        logger.debug("Treating unreadable target as absent: %s", exc)
        return BlockState.ABSENT


def commit(location: Path | str, content: str) -> None:
    """Write content to a temp sibling, then atomically move it into place.

    If either step fails the target keeps its previous content; a stale
    temp file may be left behind.
    """
    target = Path(location)
    temp = temp_path_for(target)
    try:
        with open(temp, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as exc:
        raise WriteFailure(temp, exc) from exc

    try:
        os.replace(temp, target)
    except OSError as exc:
        raise WriteFailure(target, exc) from exc
    logger.debug("Committed %d chars to %s", len(content), target)


def backup(location: Path | str) -> bool:
    """Snapshot the target to its sidecar unless a snapshot already exists.

    Returns:
        True if a backup was written, False if one was already there.
    """
    target = Path(location)
    backup_file = backup_path_for(target)
    if backup_file.exists():
        return False
    try:
        shutil.copyfile(target, backup_file)
    except OSError as exc:
        raise WriteFailure(backup_file, exc) from exc
    logger.debug("Backed up %s to %s", target, backup_file)
    return True


def restore(location: Path | str) -> bool:
    """Copy the pristine backup over the target.

    Returns:
        True on success, False if there is no backup (target untouched).
    """
    target = Path(location)
    backup_file = backup_path_for(target)
    if not backup_file.exists():
        return False
    try:
        shutil.copyfile(backup_file, target)
    except OSError as exc:
        raise WriteFailure(target, exc) from exc
    logger.debug("Restored %s from %s", target, backup_file)
    return True


def inject_file(
    location: Path | str,
    params: InjectionParameters,
    dry_run: bool = False,
) -> str:
    """Inject or replace the glow block in the target file.

    Returns:
        "updated" or "unchanged".
    """
    target = Path(location)
    content = read_target(target)
    check_block(content, target)

    new_content = apply_block(content, params)
    if new_content == content:
        return "unchanged"
    if not dry_run:
        backup(target)
        commit(target, new_content)
    return "updated"


def remove_file(location: Path | str, dry_run: bool = False) -> str:
    """Strip the glow block from the target file.

    Returns:
        "removed" or "unchanged".
    """
    target = Path(location)
    content = read_target(target)
    if detect(content) is BlockState.ABSENT:
        return "unchanged"
    check_block(content, target)

    new_content = strip_block(content)
    if not dry_run:
        commit(target, new_content)
    return "removed"
