"""Shared test fixtures for the customer API tests."""

import pytest
from datetime import timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from common.auth import JWTAuth, PasswordHasher
from customer_api.customer.services.customer_service import CustomerService


TEST_SECRET = "test-secret"


# ─────────────────────────────────────────────────────────────────
# In-memory customers collection
# ─────────────────────────────────────────────────────────────────


class _Cursor:
    def __init__(self, docs):
        self._docs = docs

    async def to_list(self, length=None):
        return list(self._docs if length is None else self._docs[:length])


class FakeCustomersCollection:
    """
    Minimal stand-in for a Motor collection holding customers.

    Enforces the unique email/username indexes the real collection has.
    """

    UNIQUE_FIELDS = ("email", "username")

    def __init__(self):
        self.docs = []

    @staticmethod
    def _matches(doc, query):
        for key, value in query.items():
            if key == "$or":
                if not any(FakeCustomersCollection._matches(doc, sub) for sub in value):
                    return False
            elif isinstance(value, dict) and "$ne" in value:
                if doc.get(key) == value["$ne"]:
                    return False
            elif doc.get(key) != value:
                return False
        return True

    def _check_unique(self, candidate, exclude_id=None):
        for doc in self.docs:
            if doc["_id"] == exclude_id:
                continue
            for field in self.UNIQUE_FIELDS:
                if field in candidate and doc.get(field) == candidate[field]:
                    raise DuplicateKeyError(f"E11000 duplicate key error: {field}")

    async def find_one(self, query):
        for doc in self.docs:
            if self._matches(doc, query):
                return dict(doc)
        return None

    async def insert_one(self, doc):
        self._check_unique(doc)
        doc.setdefault("_id", ObjectId())
        self.docs.append(dict(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def find_one_and_update(self, query, update, return_document=ReturnDocument.BEFORE):
        for doc in self.docs:
            if self._matches(doc, query):
                self._check_unique(update["$set"], exclude_id=doc["_id"])
                before = dict(doc)
                doc.update(update["$set"])
                return dict(doc) if return_document == ReturnDocument.AFTER else before
        return None

    async def find_one_and_delete(self, query):
        for doc in self.docs:
            if self._matches(doc, query):
                self.docs.remove(doc)
                return dict(doc)
        return None

    def find(self, query):
        return _Cursor([dict(doc) for doc in self.docs if self._matches(doc, query)])


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_customer_id():
    return str(ObjectId())


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine)
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def customers_collection():
    return FakeCustomersCollection()


@pytest.fixture
def fake_db(customers_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=customers_collection)
    return db


@pytest.fixture
def password_hasher():
    # Lowest bcrypt cost keeps the suite fast
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_auth():
    return JWTAuth(secret=TEST_SECRET, access_token_expire_minutes=60)


@pytest.fixture
def image_uploader():
    uploader = MagicMock()
    uploader.folder = "customer_profiles"
    uploader.upload = AsyncMock(
        return_value="https://res.cloudinary.com/demo/image/upload/customer_profiles/avatar.png"
    )
    return uploader


@pytest.fixture
def customer_service(fake_db, password_hasher, token_auth, image_uploader):
    return CustomerService(
        db=fake_db,
        password_hasher=password_hasher,
        token_auth=token_auth,
        image_uploader=image_uploader,
    )


@pytest.fixture
def admin_token(token_auth, sample_customer_id):
    return token_auth.issue_token(
        {"customer_id": sample_customer_id, "email": "admin@example.com", "is_admin": True},
        ttl=timedelta(minutes=5),
    )
