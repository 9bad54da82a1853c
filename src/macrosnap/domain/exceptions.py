"""Domain exceptions."""


class MacrosnapError(Exception):
    """Base class for errors that abort a snapshot run."""


class SnapshotWriteError(MacrosnapError):
    """Raised when the snapshot document cannot be persisted."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write snapshot to {path}: {reason}")
