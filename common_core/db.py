from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from common_core.config import settings


class Base(DeclarativeBase):
    pass


def make_engine(db_url: str):
    connect_args = {}
    if db_url.startswith("sqlite"):
        # host calls run on threadpool workers that share pooled connections
        connect_args["check_same_thread"] = False
    return create_engine(db_url, pool_pre_ping=True, connect_args=connect_args)


def make_session(engine):
    return sessionmaker(bind=engine, autoflush=False)


registry_engine = make_engine(settings.registry_db_url)

RegistrySessionLocal = make_session(registry_engine)
