"""A JSON array on disk, shared by the JSON-file repositories.

Every write goes to a sibling temporary file which then replaces the
original, so a single ``persist`` call is all-or-nothing on disk.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from gstbill.domain.exceptions import StorageError

logger = logging.getLogger("gstbill.storage")


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        try:
            records = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.error("Could not read %s: %s", self._file_path, exc)
            raise StorageError(f"Could not read {self._file_path.name}: {exc}") from exc
        if not isinstance(records, list):
            raise StorageError(f"{self._file_path.name} does not contain a JSON array")
        return records

    def persist(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_name(self._file_path.name + ".tmp")
        try:
            tmp_path.write_text(
                json.dumps(records, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
            os.replace(tmp_path, self._file_path)
        except OSError as exc:
            logger.error("Could not write %s: %s", self._file_path, exc)
            raise StorageError(f"Could not write {self._file_path.name}: {exc}") from exc

    @staticmethod
    def next_id(records: list[dict]) -> int:
        if not records:
            return 1
        return max(r["id"] for r in records) + 1

    def _ensure_file(self) -> None:
        if self._file_path.exists():
            return
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Could not create {self._file_path}: {exc}") from exc
