from typing import Dict, Optional

from app.database.kv_store import KeyValueStore


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.items: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self.items.get(key)

    async def set(self, key: str, value: str) -> None:
        self.items[key] = value
