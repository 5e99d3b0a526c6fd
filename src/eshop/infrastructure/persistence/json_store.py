"""JSON document backing every repository.

Products, orders and carts live in one file, ``store.json``, under the
data directory, keyed by collection name. A commit replaces the whole
file in one ``os.replace``, so a reader sees either every change of a
commit or none of them.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from pathlib import Path

from eshop.domain.exceptions import PersistenceFailure
from eshop.infrastructure.persistence.locking import RowLocks

COLLECTIONS = ("products", "orders", "carts")
FILENAME = "store.json"


class JsonStore:

    def __init__(self, data_dir: Path) -> None:
        self._path = data_dir / FILENAME
        self.commit_lock = threading.Lock()
        self.row_locks = RowLocks()
        self._ensure_file()

    def read(self, name: str) -> list[dict]:
        return self._load()[name]

    def write(self, collections: dict[str, list[dict]]) -> None:
        """Replace the given collections as one change.

        Callers hold ``commit_lock``. Either the file is replaced with
        every collection updated, or it is left untouched and
        PersistenceFailure is raised.
        """
        document = self._load()
        document.update(collections)
        try:
            text = json.dumps(document, indent=2) + "\n"
            self._replace(self._path, text)
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceFailure(f"Could not write {FILENAME}: {exc}") from exc

    # --- File helpers ---------------------------------------------------------

    def _load(self) -> dict[str, list[dict]]:
        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise PersistenceFailure(f"Could not read {FILENAME}: {exc}") from exc
        if not isinstance(document, dict):
            raise PersistenceFailure(f"Could not read {FILENAME}: not a JSON object")
        for name in COLLECTIONS:
            document.setdefault(name, [])
        return document

    @staticmethod
    def _replace(path: Path, text: str) -> None:
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(text)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _ensure_file(self) -> None:
        if not self._path.exists():
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps({name: [] for name in COLLECTIONS}, indent=2) + "\n",
                encoding="utf-8",
            )
