"""A JSON file holding a list of documents.

Every read-modify-write cycle runs under a lock shared by all
repositories pointing at the same file, and the file is replaced in a
single rename. This gives each single-document operation (including the
relative ``$inc``-style adjustments) the atomicity the domain relies on
within one process.
"""

from __future__ import annotations

import json
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

_registry_lock = threading.Lock()
_file_locks: dict[Path, threading.RLock] = {}


def _lock_for(path: Path) -> threading.RLock:
    with _registry_lock:
        lock = _file_locks.get(path)
        if lock is None:
            lock = _file_locks[path] = threading.RLock()
        return lock


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path.resolve()
        self._lock = _lock_for(self._file_path)
        self._ensure_file()

    def read(self) -> list[dict]:
        with self._lock:
            return self._load_raw()

    @contextmanager
    def transaction(self) -> Iterator[list[dict]]:
        """Yield the documents for in-place edits; persist them on success."""
        with self._lock:
            records = self._load_raw()
            yield records
            self._persist_raw(records)

    @staticmethod
    def next_id(records: list[dict]) -> int:
        if not records:
            return 1
        return max(int(r["id"]) for r in records) + 1

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._file_path)

    def _ensure_file(self) -> None:
        with self._lock:
            if not self._file_path.exists():
                self._file_path.parent.mkdir(parents=True, exist_ok=True)
                self._file_path.write_text("[]", encoding="utf-8")
