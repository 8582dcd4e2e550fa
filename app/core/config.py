# app/core/config.py
from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TRACKER_", env_file=".env", extra="ignore")

    # memory: solo per test / run effimeri
    storage_backend: Literal["memory", "file", "mongo"] = "file"
    data_dir: str = "./data"

    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "submission_tracker"
    mongo_collection: str = "kv"

    log_level: str = "INFO"
    seed_demo_data: bool = True


settings = Settings()
