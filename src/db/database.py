"""Generate database sessions"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import DATABASE_ECHO, DATABASE_URL
from src.db.schema import Base


def create_session_factory(
    url: str = DATABASE_URL, echo: bool = DATABASE_ECHO
) -> sessionmaker[Session]:
    """Engine for the configured database. Tables get created if they do not exist yet."""
    engine = create_engine(url, echo=echo)
    Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False)


def get_db(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
