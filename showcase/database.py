from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    pass


def create_session_factory(database_url: str, echo: bool = False) -> sessionmaker:
    """Build an engine + session factory for the given store URL."""
    kwargs = {"echo": echo}

    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory SQLite: share one connection so every session sees the same data
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
