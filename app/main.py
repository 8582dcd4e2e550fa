# app/main.py
from contextlib import asynccontextmanager
import logging
import sys
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from motor.motor_asyncio import AsyncIOMotorClient

from app.core.config import Settings, settings
from app.database.file_kv import FileKeyValueStore
from app.database.kv_store import KeyValueStore
from app.database.memory_kv import InMemoryKeyValueStore
from app.database.mongo_kv import MongoKeyValueStore
from app.database.persistence import PersistenceAdapter
from app.database import seed
from app.services.submission_store import SubmissionStore
from app.routers.v1 import health
from app.routers.v1 import assignment
from app.routers.v1 import submission

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s :: %(message)s",
    stream=sys.stdout,
)

logger = logging.getLogger(__name__)


def build_persistence(kv: KeyValueStore, cfg: Settings) -> PersistenceAdapter:
    if cfg.seed_demo_data:
        return PersistenceAdapter(kv, seed.seed_assignments, seed.seed_submissions)
    return PersistenceAdapter(kv)


def create_app(cfg: Settings = settings, kv: Optional[KeyValueStore] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        backing = kv
        if backing is None:
            if cfg.storage_backend == "mongo":
                client = AsyncIOMotorClient(cfg.mongo_uri, uuidRepresentation="standard")
                backing = MongoKeyValueStore(client[cfg.mongo_db_name], cfg.mongo_collection)
                await backing.ensure_indexes()
            elif cfg.storage_backend == "file":
                backing = FileKeyValueStore(cfg.data_dir)
            else:
                backing = InMemoryKeyValueStore()
        logger.info("Backing store: %s", type(backing).__name__)

        store = SubmissionStore(build_persistence(backing, cfg))
        # load completato prima di servire qualsiasi query
        await store.initialize()
        app.state.submission_store = store

        try:
            yield
        finally:
            if client is not None:
                client.close()

    app = FastAPI(
        title="Submission Tracker",
        description="Servizio per assignment, consegne e revisioni",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    app.include_router(health.router,     prefix="/api/v1", tags=["health"])
    app.include_router(assignment.router, prefix="/api/v1", tags=["assignments"])
    app.include_router(submission.router, prefix="/api/v1", tags=["submissions"])
    return app

app = create_app()
