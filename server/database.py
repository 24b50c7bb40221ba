# server/database.py

from pathlib import Path
from fastapi import Depends
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from config import DATABASE_URL
from models import Base
from models.store import StoreEntry  # noqa: F401  registers the table
from core.storage import KeyValueStore, SqlKeyValueStore, record_repository, user_repository


url = make_url(DATABASE_URL)
if url.get_backend_name() == "sqlite" and url.database and url.database != ":memory:":
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)

engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if url.get_backend_name() == "sqlite" else {}
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine
)


def init_db():
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# -------------------------------
# Store & Repository Dependencies
# -------------------------------

def get_store(db: Session = Depends(get_db)) -> KeyValueStore:
    return SqlKeyValueStore(db)


def get_user_repository(store: KeyValueStore = Depends(get_store)):
    return user_repository(store)


def get_record_repository(store: KeyValueStore = Depends(get_store)):
    return record_repository(store)
