"""Snapshot persistence."""

from macrosnap.infrastructure.storage.snapshot_writer import SnapshotWriter

__all__ = ["SnapshotWriter"]
