from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

class KeyValueStore(ABC):
    """Backing store chiave/valore: lo store usa solo get/set di stringhe JSON."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Ritorna il valore salvato sotto `key`, oppure None se la chiave non esiste."""
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Scrive (sovrascrivendo) il valore sotto `key`."""
        raise NotImplementedError
