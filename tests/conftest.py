import os
import tempfile
from datetime import datetime, timezone

import pytest

# Settings are read at import time; pin them before any app import during collection.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("CONTRACT_ID", "assetledger.test")

FIXED_NOW = datetime(2026, 1, 5, 14, 3, 22, tzinfo=timezone.utc)


def pytest_configure():
    fd, path = tempfile.mkstemp(prefix="assetledger_test_", suffix=".db")
    os.close(fd)
    os.environ["REGISTRY_DB_URL"] = f"sqlite+pysqlite:///{path}"

    from apps.registry_backend.init_db import init_registry_db

    init_registry_db()


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def session_factory(tmp_path):
    from apps.registry_backend import models  # noqa: F401
    from common_core.db import Base, make_engine, make_session

    engine = make_engine(f"sqlite+pysqlite:///{tmp_path / 'registry.db'}")
    Base.metadata.create_all(bind=engine)
    yield make_session(engine)
    engine.dispose()


@pytest.fixture
def host(session_factory, fixed_clock):
    from apps.registry_backend.host import ContractHost

    return ContractHost(session_factory, "kylastroke.testnet", clock=fixed_clock)


@pytest.fixture
def racing_host(session_factory):
    """A host whose clock lets another writer save a new version mid-call, once."""
    from apps.registry_backend.host import ContractHost
    from apps.registry_backend.state_store import load_state, save_state

    contract_id = "kylastroke.testnet"
    bumped: list[int] = []

    def clock():
        if not bumped:
            other = session_factory()
            try:
                state, version = load_state(other, contract_id)
                bumped.append(save_state(other, contract_id, state, version))
                other.commit()
            finally:
                other.close()
        return FIXED_NOW

    return ContractHost(session_factory, contract_id, clock=clock), bumped
