"""Shared file helpers for the JSON-backed repositories."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, TypeVar

from armory.domain.exceptions import PersistenceFailure

T = TypeVar("T")


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceFailure(f"Cannot read {self._file_path}: {exc}") from exc

    def parse(self, rows: list[dict], mapper: Callable[[dict], T], what: str) -> list[T]:
        """Map every row through *mapper*.

        A row with missing fields or unparseable values raises
        PersistenceFailure instead of leaking KeyError/ValueError.
        """
        parsed: list[T] = []
        for position, raw in enumerate(rows, start=1):
            try:
                parsed.append(mapper(raw))
            except (KeyError, TypeError, ValueError, ArithmeticError) as exc:
                raise PersistenceFailure(
                    f"Malformed {what} record #{position} in {self._file_path}: {exc!r}"
                ) from exc
        return parsed

    def records(self, mapper: Callable[[dict], T], what: str) -> list[T]:
        return self.parse(self.load(), mapper, what)

    def persist(self, records: list[dict]) -> None:
        try:
            self._file_path.write_text(
                json.dumps(records, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceFailure(f"Cannot write {self._file_path}: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
