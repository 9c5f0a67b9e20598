# greeksurface/db/db.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from ..config import get_settings

Base = declarative_base()


def make_engine(url=None):
    url = url or get_settings().db_url
    return create_engine(url, future=True, echo=False)


def make_session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def init_db(engine):
    from . import models  # noqa: F401  (registers tables)
    Base.metadata.create_all(bind=engine)
