"""A JSON array on disk, shared by the JSON-file repositories.

Writers take an exclusive ``flock`` on a sidecar ``.lock`` file for the
whole read-modify-write, so concurrent processes (and threads, which
each open their own descriptor) are serialised. Files are replaced via
``os.replace`` so an unlocked reader sees either the old or the new
contents, never a half-written file.
"""

from __future__ import annotations

import fcntl
import json
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


class JsonFileStore:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock_path = file_path.with_name(file_path.name + ".lock")
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_name(f"{self._file_path.name}.{os.getpid()}.tmp")
        tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._file_path)

    @contextmanager
    def locked(self) -> Iterator[list[dict]]:
        """Hold the write lock and yield the current records.

        Mutate the yielded list in place; it is written back on a clean exit.
        """
        with open(self._lock_path, "a+") as lock_file:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
            try:
                records = self.load()
                yield records
                self.persist(records)
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
