# server/core/storage.py

import json
import uuid
import logging
from datetime import date, datetime, timezone
from typing import Generic, Optional, Type, TypeVar
from pydantic import BaseModel
from sqlalchemy.orm import Session
from models.store import StoreEntry
from models.user import User, UserRole
from models.record import LabRecord


logger = logging.getLogger(__name__)

USERS_KEY = "aqualims_users"
RECORDS_KEY = "aqualims_records"

T = TypeVar("T", bound=BaseModel)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_id() -> str:
    return str(uuid.uuid4())


# -------------------------------
# Key-Value Stores
# -------------------------------

class KeyValueStore:
    """
    Opaque get/set-whole-value storage backend.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str):
        raise NotImplementedError


class InMemoryKeyValueStore(KeyValueStore):
    def __init__(self):
        self._data = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str):
        self._data[key] = value


class SqlKeyValueStore(KeyValueStore):
    """
    Stores each key as one row of the store_entries table.
    Every set() commits immediately.
    """

    def __init__(self, db: Session):
        self.db = db

    def get(self, key: str) -> Optional[str]:
        entry = self.db.get(StoreEntry, key)
        return entry.value if entry else None

    def set(self, key: str, value: str):
        entry = self.db.get(StoreEntry, key)
        if entry:
            entry.value = value
        else:
            self.db.add(StoreEntry(key=key, value=value))
        self.db.commit()


# -------------------------------
# Repositories
# -------------------------------

class CollectionRepository(Generic[T]):
    """
    A flat collection of entities serialized as a single JSON list under one key.
    Writes are whole-collection read-modify-write cycles.
    """

    def __init__(self, store: KeyValueStore, key: str, model: Type[T]):
        self.store = store
        self.key = key
        self.model = model

    def exists(self) -> bool:
        return self.store.get(self.key) is not None

    def get_all(self) -> list[T]:
        raw = self.store.get(self.key)
        if not raw:
            return []
        return [self.model.model_validate(item) for item in json.loads(raw)]

    def get(self, entity_id: str) -> Optional[T]:
        return next((item for item in self.get_all() if item.id == entity_id), None)

    def upsert(self, entity: T):
        items = self.get_all()
        for index, existing in enumerate(items):
            if existing.id == entity.id:
                items[index] = entity
                break
        else:
            items.append(entity)
        self.replace_all(items)

    def replace_all(self, items: list[T]):
        payload = [item.model_dump(mode="json", by_alias=True, exclude_none=True) for item in items]
        self.store.set(self.key, json.dumps(payload, ensure_ascii=False))


def user_repository(store: KeyValueStore) -> CollectionRepository[User]:
    return CollectionRepository(store, USERS_KEY, User)


def record_repository(store: KeyValueStore) -> CollectionRepository[LabRecord]:
    return CollectionRepository(store, RECORDS_KEY, LabRecord)


# -------------------------------
# Seed Data
# -------------------------------

def seed_data(store: KeyValueStore, password_hash: str, today: Optional[date] = None):
    """
    Seeds an admin and a technician account, and one sample record,
    for whichever collection does not exist yet.
    """
    users = user_repository(store)
    records = record_repository(store)
    now = utc_now()

    if not users.exists():
        users.replace_all([
            User(
                id="admin-1",
                username="admin",
                email="admin@aqualims.com",
                role=UserRole.ADMIN,
                is_active=True,
                password_hash=password_hash,
                created_at=now,
            ),
            User(
                id="user-1",
                username="tech1",
                email="tech1@aqualims.com",
                role=UserRole.USER,
                is_active=True,
                password_hash=password_hash,
                created_at=now,
            ),
        ])
        logger.info("Seeded default user accounts")

    if not records.exists():
        records.replace_all([
            LabRecord(
                id="rec-1",
                date=(today or date.today()).isoformat(),
                sample_point="PSF Inlet",
                attribute="TPC 22°C",
                value="<100",
                limit="<100cfu/100ml",
                observation_24h="Clear",
                observation_48h="Clear",
                observation_72h="Clear",
                negative_control="Clear",
                remarks="Routine check",
                created_by="tech1",
                created_by_id="user-1",
                created_at=now,
            ),
        ])
        logger.info("Seeded sample lab record")
