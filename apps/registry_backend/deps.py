from __future__ import annotations

from functools import lru_cache

from apps.registry_backend.host import ContractHost
from common_core.config import settings
from common_core.db import RegistrySessionLocal


@lru_cache(maxsize=1)
def get_host() -> ContractHost:
    return ContractHost(
        RegistrySessionLocal,
        settings.contract_id,
        count_mode=settings.count_mode,
        miss_log_mode=settings.miss_log_mode,
    )
