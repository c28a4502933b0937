# taskplanner/infra/db/base.py
from __future__ import annotations
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy import create_engine
from pathlib import Path
import logging

from taskplanner.infra.path import default_db_path

logger = logging.getLogger(__name__)

Base = declarative_base()


def default_db_url() -> str:
    db_path: Path = default_db_path()
    db_path.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{db_path.as_posix()}"


def create_session_factory(db_url: str | None = None, create_schema: bool = True) -> sessionmaker:
    db_url = db_url or default_db_url()
    logger.info("Using database at: %s", db_url)

    engine = create_engine(
        db_url,
        echo=False,
        future=True,
    )
    if create_schema:
        Base.metadata.create_all(bind=engine)
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
