# futurehire/repositories/users.py
"""
Credential Store: the only component that mutates identity records.

Every mutation is a single atomic primitive of the backing store:
uniqueness of email is a unique index (not a check-then-insert), test history
grows through ``$push`` and the resume analysis is replaced with one ``$set``.
"""
import asyncio
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from copy import deepcopy
from typing import Any, Dict, Optional

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import DuplicateKeyError, PyMongoError

from futurehire.core.config import Settings
from futurehire.core.errors import ConfigurationError, DuplicateIdentity, IdentityNotFound, StoreUnavailable
from futurehire.db.mongo import get_users_collection
from futurehire.models.identity import Identity, TestAttempt, normalize_email, utcnow

logger = logging.getLogger(__name__)


class CredentialStore(ABC):
    """Durable table of identities keyed by a unique email."""

    @abstractmethod
    async def create(self, name: str, email: str, mobile: Optional[str], password_hash: str) -> Identity:
        """Insert a new identity; raises ``DuplicateIdentity`` if the email exists."""
        ...

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Identity]:
        ...

    @abstractmethod
    async def find_by_id(self, identity_id: str) -> Optional[Identity]:
        ...

    @abstractmethod
    async def append_test_attempt(self, identity_id: str, attempt: TestAttempt) -> None:
        """Atomically append to the identity's test history."""
        ...

    @abstractmethod
    async def replace_resume_analysis(self, identity_id: str, analysis: Dict[str, Any]) -> None:
        """Atomically overwrite the identity's resume analysis."""
        ...

    async def ensure_indexes(self) -> None:
        return None


def _check_password_hash(password_hash: str) -> None:
    if not password_hash:
        raise ValueError("password_hash must not be empty")


# ---------------------------------------------------------------------------
# MongoDB
# ---------------------------------------------------------------------------

def _to_oid(identity_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(identity_id)
    except (InvalidId, TypeError):
        return None

def _to_identity(doc: Optional[Dict[str, Any]]) -> Optional[Identity]:
    # convert Mongo's _id (ObjectId) to str when returning
    if not doc:
        return None
    doc = dict(doc)
    doc["id"] = str(doc.pop("_id"))
    doc["preferences"] = doc.get("preferences") or {}
    doc["test_history"] = doc.get("test_history") or []
    return Identity(**doc)

@contextmanager
def _store_errors(operation: str):
    try:
        yield
    except DuplicateKeyError:
        raise
    except PyMongoError as exc:
        logger.exception("MongoDB %s failed", operation)
        raise StoreUnavailable(f"{operation}: {exc}") from exc


class MongoCredentialStore(CredentialStore):

    def __init__(self, collection: AsyncIOMotorCollection):
        self._col = collection
        self._indexes_ready = False

    async def ensure_indexes(self) -> None:
        if self._indexes_ready:
            return
        with _store_errors("create_index"):
            # idempotent, concurrent callers may both run it
            await self._col.create_index("email", unique=True, name="email_unique")
        self._indexes_ready = True

    async def create(self, name: str, email: str, mobile: Optional[str], password_hash: str) -> Identity:
        _check_password_hash(password_hash)
        await self.ensure_indexes()
        doc = {
            "name": name,
            "email": normalize_email(email),
            "mobile": mobile,
            "password_hash": password_hash,
            "preferences": {},
            "test_history": [],
            "resume_analysis": None,
            "created_at": utcnow(),
        }
        try:
            with _store_errors("insert"):
                res = await self._col.insert_one(doc)
        except DuplicateKeyError as exc:
            raise DuplicateIdentity(doc["email"]) from exc
        doc["_id"] = res.inserted_id
        return _to_identity(doc)

    async def find_by_email(self, email: str) -> Optional[Identity]:
        with _store_errors("find_by_email"):
            doc = await self._col.find_one({"email": normalize_email(email)})
        return _to_identity(doc)

    async def find_by_id(self, identity_id: str) -> Optional[Identity]:
        oid = _to_oid(identity_id)
        if oid is None:
            return None
        with _store_errors("find_by_id"):
            doc = await self._col.find_one({"_id": oid})
        return _to_identity(doc)

    async def _update(self, identity_id: str, update: Dict[str, Any], operation: str) -> None:
        oid = _to_oid(identity_id)
        if oid is None:
            raise IdentityNotFound(identity_id)
        with _store_errors(operation):
            res = await self._col.update_one({"_id": oid}, update)
        if res.matched_count == 0:
            raise IdentityNotFound(identity_id)

    async def append_test_attempt(self, identity_id: str, attempt: TestAttempt) -> None:
        await self._update(identity_id, {"$push": {"test_history": attempt.model_dump()}}, "append_test_attempt")

    async def replace_resume_analysis(self, identity_id: str, analysis: Dict[str, Any]) -> None:
        await self._update(identity_id, {"$set": {"resume_analysis": analysis}}, "replace_resume_analysis")


# ---------------------------------------------------------------------------
# In-memory (development and tests)
# ---------------------------------------------------------------------------

class InMemoryCredentialStore(CredentialStore):
    """
    Process-local store. The lock is only held for synchronous dict work and
    never across an ``await``.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._records: Dict[str, Identity] = {}
        self._by_email: Dict[str, str] = {}

    async def create(self, name: str, email: str, mobile: Optional[str], password_hash: str) -> Identity:
        _check_password_hash(password_hash)
        # yield to the loop like a real driver round-trip would
        await asyncio.sleep(0)
        key = normalize_email(email)
        with self._lock:
            if key in self._by_email:
                raise DuplicateIdentity(key)
            identity = Identity(
                id=uuid.uuid4().hex,
                name=name,
                email=key,
                mobile=mobile,
                password_hash=password_hash,
                created_at=utcnow(),
            )
            self._records[identity.id] = identity
            self._by_email[key] = identity.id
            return identity.model_copy(deep=True)

    async def find_by_email(self, email: str) -> Optional[Identity]:
        await asyncio.sleep(0)
        with self._lock:
            identity_id = self._by_email.get(normalize_email(email))
            return self._copy(identity_id)

    async def find_by_id(self, identity_id: str) -> Optional[Identity]:
        await asyncio.sleep(0)
        with self._lock:
            return self._copy(identity_id)

    async def append_test_attempt(self, identity_id: str, attempt: TestAttempt) -> None:
        await asyncio.sleep(0)
        with self._lock:
            self._get(identity_id).test_history.append(attempt.model_copy(deep=True))

    async def replace_resume_analysis(self, identity_id: str, analysis: Dict[str, Any]) -> None:
        await asyncio.sleep(0)
        snapshot = deepcopy(analysis)
        with self._lock:
            self._get(identity_id).resume_analysis = snapshot

    def _get(self, identity_id: str) -> Identity:
        identity = self._records.get(identity_id)
        if identity is None:
            raise IdentityNotFound(identity_id)
        return identity

    def _copy(self, identity_id: Optional[str]) -> Optional[Identity]:
        identity = self._records.get(identity_id) if identity_id else None
        return identity.model_copy(deep=True) if identity else None


def build_store(settings: Settings) -> CredentialStore:
    backend = (settings.STORE_BACKEND or "").lower()
    if backend == "mongo":
        return MongoCredentialStore(get_users_collection(settings))
    if backend == "memory":
        logger.warning("Using in-memory credential store; data is lost on restart")
        return InMemoryCredentialStore()
    raise ConfigurationError(f"Unknown STORE_BACKEND: {settings.STORE_BACKEND!r}")
