# app/database/mongo_kv.py
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.database.kv_store import KeyValueStore


class MongoKeyValueStore(KeyValueStore):
    def __init__(self, db: AsyncIOMotorDatabase, collection: str = "kv"):
        self.col = db[collection]

    async def get(self, key: str) -> Optional[str]:
        d = await self.col.find_one({"key": str(key)})
        return d.get("value") if d else None

    async def set(self, key: str, value: str) -> None:
        await self.col.update_one(
            {"key": str(key)},
            {"$set": {"key": str(key), "value": value}},
            upsert=True,
        )

    async def ensure_indexes(self):
        await self.col.create_index("key", unique=True)
