from __future__ import annotations

from common_core.config import settings


class ConfigError(RuntimeError):
    pass


def _must_set(name: str, value: str) -> None:
    if not value or not value.strip():
        raise ConfigError(f"{name} is required")
    if value.strip().upper() == "CHANGE_ME":
        raise ConfigError(f"{name} must not be CHANGE_ME")


def validate_runtime_settings() -> None:
    _must_set("CONTRACT_ID", settings.contract_id)
    _must_set("REGISTRY_DB_URL", settings.registry_db_url)
