from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


class JsonDocumentStore:
    """One JSON document on disk, replaced atomically on every write."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self, default: Any) -> Any:
        if not self._path.exists():
            return default
        with self._path.open("r", encoding="utf-8") as fh:
            return json.load(fh)

    def write(self, data: Any) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self._path.parent, prefix=self._path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(data, fh, ensure_ascii=False, indent=2)
            os.replace(tmp, self._path)
        except Exception:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
