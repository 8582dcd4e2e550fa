# app/database/file_kv.py
import asyncio
import os
import tempfile
from pathlib import Path
from typing import Optional

from app.database.kv_store import KeyValueStore


class FileKeyValueStore(KeyValueStore):
    """Un file `<key>.json` per chiave dentro `base_dir` (replica locale)."""

    def __init__(self, base_dir: str):
        self.base_dir = Path(base_dir)

    def _path(self, key: str) -> Path:
        return self.base_dir / f"{key}.json"

    def _read(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def _write(self, key: str, value: str) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)
        # scrittura atomica: temp file nella stessa dir + replace
        fd, tmp = tempfile.mkstemp(dir=self.base_dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp, self._path(key))
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    # I/O bloccante fuori dall'event loop
    async def get(self, key: str) -> Optional[str]:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._write, key, value)
