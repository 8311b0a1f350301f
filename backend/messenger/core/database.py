from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

from messenger.core.config import settings


def create_db_engine() -> Engine:
    return create_engine(
        f"sqlite:///{settings.db_path}",
        echo=settings.debug,
        connect_args={"check_same_thread": False},
    )


def init_db(engine: Engine) -> None:
    import messenger.models.collection  # noqa: F401 - ensure models are registered
    SQLModel.metadata.create_all(engine)
