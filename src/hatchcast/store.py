"""Tiered JSON data store with freshness metadata.

Manages read/write of JSON data files organized into tiers by update frequency:
  - live/: Ephemeral, 15min-1h TTL (USGS readings, weather conditions cache)
  - derived/: Computed outputs, always recomputed (top picks snapshot)

Every file is wrapped in a metadata envelope with ``fetched_at`` and, for
cacheable data, ``valid_until`` so readers can decide whether it is still
fresh without parsing the payload.

Writes go to a temporary sibling and are moved into place with
``os.replace`` so concurrent readers never see a half-written file.
"""

from __future__ import annotations

import json
import os
import tempfile
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003
from typing import Any


class DataStore:
    """Manages read/write of JSON envelope files under a base directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.live = base_dir / "live"
        self.derived = base_dir / "derived"

    def read(self, path: Path) -> Any | None:
        """Read data payload from a metadata-enveloped JSON file.

        Returns the ``data`` field, or None if the file doesn't exist.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        return envelope.get("data")

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Read the full envelope (meta + data) from a JSON file."""
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            result: dict[str, Any] = json.load(f)
        return result

    def write(
        self,
        path: Path,
        data: Any,
        source: str,
        valid_until: datetime | None = None,
        fetched_at: datetime | None = None,
        **params: Any,
    ) -> Path:
        """Write data wrapped in a metadata envelope.

        Args:
            path: Relative path under base_dir (e.g. ``live/cache/usgs/ab12.json``).
            data: JSON-serializable payload stored under the ``data`` key.
            source: Data source identifier (e.g. ``"waterservices.usgs.gov"``).
            valid_until: Expiry timestamp. None means derived/no-cache.
            fetched_at: When the payload was produced (defaults to now).
            **params: Extra metadata fields (cache key, query params, etc.).

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        meta: dict[str, Any] = {
            "source": source,
            "fetched_at": (fetched_at or datetime.now(UTC)).isoformat(),
        }
        if valid_until is not None:
            meta["valid_until"] = valid_until.isoformat()
        if params:
            meta.update(params)

        envelope = {"meta": meta, "data": data}
        fd, tmp_name = tempfile.mkstemp(dir=full.parent, prefix=f".{full.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w") as f:
                json.dump(envelope, f, indent=2)
            os.replace(tmp_name, full)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        return full

    def delete(self, path: Path) -> bool:
        """Remove a stored file. Returns True if something was deleted."""
        full = self._resolve(path)
        try:
            full.unlink()
        except FileNotFoundError:
            return False
        return True

    def list_files(self, path: Path) -> list[Path]:
        """Return every JSON file stored under ``path`` (relative paths)."""
        root = self._resolve(path)
        if not root.exists():
            return []
        return sorted(p.relative_to(self.base) for p in root.rglob("*.json"))

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full

    def is_fresh(self, path: Path, now: datetime | None = None) -> bool:
        """Check if a file exists and hasn't expired.

        Returns False if the file is missing, has no ``valid_until``, or
        the expiry time has passed.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return False

        valid_until = envelope.get("meta", {}).get("valid_until")
        if valid_until is None:
            return False

        expiry = datetime.fromisoformat(valid_until)
        if expiry.tzinfo is None:
            expiry = expiry.replace(tzinfo=UTC)
        return (now or datetime.now(UTC)) < expiry
