from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from blob_uploader import db_models  # noqa: F401  registers the history table


def get_engine(url: str):
    """Creates an engine; SQLite engines are shared across worker threads."""
    if not url.startswith("sqlite"):
        return create_engine(url)
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(url, connect_args={"check_same_thread": False})


def init_db(engine):
    SQLModel.metadata.create_all(engine)
