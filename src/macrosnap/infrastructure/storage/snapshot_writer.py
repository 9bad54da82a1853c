"""Atomic JSON writer for snapshot documents."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

import structlog

from macrosnap.domain.exceptions import SnapshotWriteError
from macrosnap.domain.models.snapshot import Snapshot

logger = structlog.get_logger(__name__)


class SnapshotWriter:
    """Publishes a snapshot as one JSON document.

    The document is written to a temporary file in the target directory and
    moved into place with ``os.replace``, so readers see either the previous
    document or the complete new one.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def write(self, snapshot: Snapshot) -> int:
        """Write ``snapshot`` and return the number of bytes published.

        Raises:
            SnapshotWriteError: If the document cannot be serialized or stored.
        """
        try:
            payload = json.dumps(snapshot.to_document(), indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise SnapshotWriteError(str(self._path), f"serialization failed: {e}") from e

        data = (payload + "\n").encode("utf-8")
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="wb",
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fp:
                tmp_name = fp.name
                fp.write(data)
                fp.flush()
                os.fsync(fp.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as e:
            raise SnapshotWriteError(str(self._path), str(e)) from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.info("snapshot written", path=str(self._path), size_bytes=len(data))
        return len(data)
