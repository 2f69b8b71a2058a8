"""Error types raised by the injector and the coordinating layer."""

from __future__ import annotations

from pathlib import Path


class GlowError(Exception):
    """Base class for every recoverable titlebar-glow failure."""


class TargetNotFound(GlowError):
    """The stylesheet to patch could not be located."""

    def __init__(self, message: str = "Could not locate the editor CSS file") -> None:
        super().__init__(message)


class ReadFailure(GlowError):
    """Reading the target stylesheet failed."""

    def __init__(self, path: Path | str, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to read {self.path}: {cause}")


class WriteFailure(GlowError):
    """Writing the target stylesheet (or its backup) failed.

    The target keeps its last-known-good content because writes are
    staged through a temp file.
    """

    def __init__(self, path: Path | str, cause: OSError) -> None:
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Failed to write {self.path}: {cause}")


class MalformedBlock(GlowError):
    """A start marker exists without a matching end marker."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(
            f"{self.path} has a glow start marker without an end marker; "
            "refusing to modify it (restore from backup or fix by hand)"
        )


class NoBackupAvailable(GlowError):
    """Restore was requested but no pristine backup exists."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)
        super().__init__(f"No backup found for {self.path}")
