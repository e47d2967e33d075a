"""JSON File Store — the star collection as one pretty-printed JSON array on disk.

Invariants:
    - save_all writes a sibling temp file, fsyncs it, then os.replace()s it in:
      readers see either the old or the new collection, never a torn file
    - A failed save leaves the previous file untouched and raises StorageError
    - load_all never raises: missing, empty, or unparseable file → []
    - Every discarded read (missing file, bad JSON, non-object entries) logs a warning
    - Blocking file IO runs in a worker thread, never on the event loop

Design Decisions:
    - Whole-file rewrite: the collection is small and saved as one unit
    - Non-object entries in the array are dropped on load — the service only
      handles dict records
"""

import asyncio
import json
import logging
import os
import tempfile
from pathlib import Path

from starfield.core.domain_types import StarRecord
from starfield.core.errors import StorageError

logger = logging.getLogger(__name__)


class JsonFileStarStore:
    """Star store backed by a single JSON file."""

    def __init__(self, path: str | os.PathLike[str]):
        self.path = Path(path)

    async def initialize(self) -> None:
        await asyncio.to_thread(self._initialize_sync)

    async def load_all(self) -> list[StarRecord]:
        return await asyncio.to_thread(self._load_sync)

    async def save_all(self, stars: list[StarRecord]) -> None:
        await asyncio.to_thread(self._save_sync, stars)

    # ─── Blocking helpers (worker thread) ───────────────────────

    def _initialize_sync(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(str(e), "initialize") from e
        if not self.path.exists():
            self._save_sync([])
            logger.info(
                f"Initialized empty star collection at {self.path}",
                extra={"backend": "file"},
            )

    def _load_sync(self) -> list[StarRecord]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.warning(
                f"Star file {self.path} is missing, serving empty collection",
                extra={"backend": "file"},
            )
            return []
        except OSError as e:
            logger.warning(
                f"Could not read {self.path}, serving empty collection: {e}",
                extra={"backend": "file"},
            )
            return []
        if not raw.strip():
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(
                f"Unparseable star file {self.path}, serving empty collection: {e}",
                extra={"backend": "file"},
            )
            return []
        if not isinstance(data, list):
            logger.warning(
                f"Star file {self.path} is not a JSON array, serving empty collection",
                extra={"backend": "file"},
            )
            return []
        stars = [s for s in data if isinstance(s, dict)]
        dropped = len(data) - len(stars)
        if dropped:
            logger.warning(
                f"Dropped {dropped} non-object entries from {self.path}",
                extra={"backend": "file", "star_count": len(stars)},
            )
        return stars

    def _save_sync(self, stars: list[StarRecord]) -> None:
        try:
            payload = json.dumps(stars, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise StorageError(f"collection is not JSON-serializable: {e}", "save") from e

        tmp_path: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            logger.error(
                f"Failed to write {self.path}: {e}",
                extra={"backend": "file", "operation": "save"},
            )
            raise StorageError(str(e), "save") from e
        finally:
            if tmp_path is not None:
                _discard(tmp_path)


def _discard(path: str) -> None:
    """Remove a leftover temp file; a failure here only leaves litter behind."""
    try:
        os.unlink(path)
    except OSError as e:
        logger.warning(f"Could not remove temp file {path}: {e}")
