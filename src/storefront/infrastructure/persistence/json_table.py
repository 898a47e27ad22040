"""A JSON file holding one table's rows (a list of dicts)."""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path

from storefront.domain.exceptions import BackendError


class JsonTable:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def load(self) -> list[dict]:
        try:
            rows = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise BackendError(f"Cannot read table {self._file_path.name}: {exc}") from exc
        if not isinstance(rows, list):
            raise BackendError(f"Table {self._file_path.name} is not a list of rows")
        return rows

    def persist(self, rows: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(rows, indent=2) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise BackendError(f"Cannot write table {self._file_path.name}: {exc}") from exc

    @staticmethod
    def stamp(row: dict, timestamped: bool = True) -> dict:
        """Fill the server-assigned columns of a row being inserted."""
        row = dict(row)
        row.setdefault("id", str(uuid.uuid4()))
        if timestamped:
            row.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        return row

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
