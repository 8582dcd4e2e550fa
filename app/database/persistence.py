# app/database/persistence.py
import asyncio
import json
import logging
from typing import Callable, List, Sequence, Tuple, TypeVar

from pydantic import BaseModel, TypeAdapter

from app.core.exceptions import PersistenceError
from app.database.kv_store import KeyValueStore
from app.schemas.assignment import Assignment
from app.schemas.submission import Submission

logger = logging.getLogger(__name__)

ASSIGNMENTS_KEY = "assignments"
SUBMISSIONS_KEY = "submissions"

_assignments_adapter = TypeAdapter(List[Assignment])
_submissions_adapter = TypeAdapter(List[Submission])

M = TypeVar("M", bound=BaseModel)


def dump_collection(items: Sequence[BaseModel]) -> str:
    # i campi opzionali assenti vengono omessi (non null) per un round-trip stabile
    return json.dumps([i.model_dump(mode="json", exclude_none=True) for i in items])


class PersistenceAdapter:
    """
    Traduce le due collezioni in memoria da/verso il backing store chiave/valore.

    `load` non solleva mai: chiave assente o valore illeggibile -> seed di default.
    `save` e' best-effort: un errore viene loggato e non annulla la mutazione in memoria.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        seed_assignments: Callable[[], List[Assignment]] = list,
        seed_submissions: Callable[[], List[Submission]] = list,
    ):
        self.kv = kv
        self.seed_assignments = seed_assignments
        self.seed_submissions = seed_submissions
        self._write_lock = asyncio.Lock()

    async def _load_key(self, key: str, adapter: TypeAdapter, seed: Callable[[], List[M]]) -> List[M]:
        try:
            raw = await self.kv.get(key)
        except Exception:
            logger.exception("Lettura chiave %r fallita, uso i dati seed", key)
            return seed()
        if raw is None:
            logger.info("Chiave %r assente, bootstrap con i dati seed", key)
            return seed()
        try:
            return adapter.validate_json(raw)
        except ValueError:
            # pydantic.ValidationError e' una sottoclasse di ValueError
            logger.warning("Valore della chiave %r non valido, uso i dati seed", key, exc_info=True)
            return seed()

    async def load(self) -> Tuple[List[Assignment], List[Submission]]:
        assignments = await self._load_key(ASSIGNMENTS_KEY, _assignments_adapter, self.seed_assignments)
        submissions = await self._load_key(SUBMISSIONS_KEY, _submissions_adapter, self.seed_submissions)
        logger.debug("Caricati %d assignment e %d submission", len(assignments), len(submissions))
        return assignments, submissions

    async def save(self, assignments: Sequence[Assignment], submissions: Sequence[Submission]) -> bool:
        # serializza subito: lo snapshot riflette lo stato al momento della chiamata
        payload = {
            ASSIGNMENTS_KEY: dump_collection(assignments),
            SUBMISSIONS_KEY: dump_collection(submissions),
        }
        ok = True
        async with self._write_lock:
            # ogni chiave e' indipendente: un errore su una non blocca l'altra
            for key, value in payload.items():
                try:
                    await self.kv.set(key, value)
                except Exception as e:
                    err = PersistenceError(f"Scrittura chiave {key!r} fallita: {e}")
                    logger.error("%s (lo stato in memoria resta autorevole)", err, exc_info=e)
                    ok = False
        return ok
