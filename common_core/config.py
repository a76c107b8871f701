from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field(default="dev", alias="APP_ENV")
    api_host: str = Field(default="127.0.0.1", alias="API_HOST")
    api_port: int = Field(default=8000, alias="PORT")

    registry_db_url: str = Field(
        default="sqlite+pysqlite:///./assetledger.db",
        alias="REGISTRY_DB_URL",
    )

    # Key of the serialized registry inside the state store
    contract_id: str = Field(default="assetledger.testnet", alias="CONTRACT_ID")

    # last: count of the last matching company (legacy), sum: across all matches
    count_mode: Literal["last", "sum"] = Field(default="last", alias="REGISTRY_COUNT_MODE")
    # scan: one "company not found" per non-matching company, once: single line on a full miss
    miss_log_mode: Literal["scan", "once"] = Field(default="scan", alias="REGISTRY_MISS_LOG_MODE")


settings = Settings()
