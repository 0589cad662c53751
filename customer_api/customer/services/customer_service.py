"""
Customer account service.

Handles registration, login and profile lifecycle against the customers
collection.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, List, Dict, Any

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from common.auth import JWTAuth, PasswordHasher
from common.media import CloudinaryUploader
from common.utils.exceptions import (
    BadRequestException,
    ConflictException,
    ForbiddenException,
    NotFoundException,
    UnauthorizedException,
)
from customer_api.auth.identity import IdentityContext
from customer_api.database.collections import CUSTOMERS_COLLECTION

logger = logging.getLogger(__name__)


# Registration tokens always live 7 days; login tokens use the configured lifetime.
REGISTRATION_TOKEN_TTL = timedelta(days=7)

UPDATABLE_FIELDS = ("username", "email", "phone", "password")
UNIQUE_FIELDS = ("email", "username")


def _isoformat(value: Any) -> Any:
    return value.isoformat() if isinstance(value, datetime) else value


class CustomerService:
    """
    Manages customer accounts and credentials.
    """

    def __init__(
        self,
        db: AsyncIOMotorDatabase,
        password_hasher: PasswordHasher,
        token_auth: JWTAuth,
        image_uploader: CloudinaryUploader,
    ):
        """
        Initialize CustomerService.

        Args:
            db: MongoDB database connection
            password_hasher: Hashes and verifies passwords
            token_auth: Issues identity tokens
            image_uploader: Stores profile images and returns their URLs
        """
        self._db = db
        self._customers_collection = db[CUSTOMERS_COLLECTION]
        self._password_hasher = password_hasher
        self._token_auth = token_auth
        self._image_uploader = image_uploader
        # Checked against on unknown emails so every failed login costs one bcrypt verify
        self._dummy_password_hash = password_hasher.hash("not-a-customer-password")

    # ─────────────────────────────────────────────────────────────────
    # Registration and login
    # ─────────────────────────────────────────────────────────────────

    async def register(
        self,
        email: Optional[str],
        username: Optional[str],
        password: Optional[str],
    ) -> Dict[str, Any]:
        """
        Create a customer account and issue its first token.

        Returns:
            dict with token and customer summary

        Raises:
            BadRequestException: A required field is missing
            ConflictException: Email or username already taken
        """
        if not email or not username or not password:
            raise BadRequestException(
                message="All fields are required",
                code="MISSING_FIELDS"
            )

        existing = await self._customers_collection.find_one(
            {"$or": [{"email": email}, {"username": username}]}
        )
        if existing:
            raise ConflictException(
                message="Customer already exists",
                code="CUSTOMER_EXISTS"
            )

        now = datetime.now(timezone.utc)
        customer_doc = {
            "email": email,
            "username": username,
            "password": self._password_hasher.hash(password),
            "phone": None,
            "image": None,
            "createdAt": now,
            "updatedAt": now,
        }

        try:
            result = await self._customers_collection.insert_one(customer_doc)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration
            raise ConflictException(
                message="Customer already exists",
                code="CUSTOMER_EXISTS"
            )
        customer_doc["_id"] = result.inserted_id

        customer_id = str(result.inserted_id)
        token = self._token_auth.issue_token(
            {"id": customer_id, "customer_id": customer_id, "email": email},
            ttl=REGISTRATION_TOKEN_TTL,
        )

        logger.info(f"Customer registered: {customer_id}")
        return {
            "token": token,
            "customer": {
                "id": customer_id,
                "email": customer_doc["email"],
                "username": customer_doc["username"],
                "image": customer_doc["image"],
            },
        }

    async def login(
        self,
        email: Optional[str],
        password: Optional[str],
    ) -> Dict[str, Any]:
        """
        Verify credentials and issue a token.

        Raises:
            BadRequestException: Email or password missing
            UnauthorizedException: Unknown email or wrong password (same message)
        """
        if not email or not password:
            raise BadRequestException(
                message="Email and password required",
                code="MISSING_FIELDS"
            )

        login_error = UnauthorizedException(
            message="Invalid email or password",
            code="LOGIN_FAILED"
        )

        customer = await self._customers_collection.find_one({"email": email})
        if not customer:
            self._password_hasher.verify(password, self._dummy_password_hash)
            logger.info("Login failed")
            raise login_error

        if not self._password_hasher.verify(password, customer.get("password", "")):
            logger.info("Login failed")
            raise login_error

        summary = self._summary(customer)
        token = self._token_auth.issue_token(summary)

        logger.info(f"Customer logged in: {summary['customer_id']}")
        return {"token": token, "customer": summary}

    # ─────────────────────────────────────────────────────────────────
    # Profile
    # ─────────────────────────────────────────────────────────────────

    async def get_profile(self, identity: IdentityContext) -> Dict[str, Any]:
        """
        Load the caller's own profile.

        Raises:
            NotFoundException: Customer no longer exists
        """
        customer = await self._find_by_id(identity.customer_id)
        if not customer:
            raise self._not_found()

        return {
            **self._summary(customer),
            "createdAt": _isoformat(customer.get("createdAt")),
        }

    async def update_profile(
        self,
        customer_id: str,
        updates: Dict[str, Any],
        image: Optional[bytes] = None,
    ) -> Dict[str, Any]:
        """
        Apply a partial update and persist it in a single write.

        Only non-empty fields among username, email, phone and password are
        applied; the password is re-hashed. When image bytes are given they
        are uploaded first, so a failed upload leaves the record untouched.

        Args:
            customer_id: MongoDB customer ID
            updates: Fields to update
            image: Optional new profile image

        Returns:
            Updated customer summary

        Raises:
            NotFoundException: Customer does not exist
            ConflictException: New email or username already taken
            InternalServerException: Image upload failed
        """
        object_id = self._object_id(customer_id)
        if object_id is None or not await self._customers_collection.find_one({"_id": object_id}):
            raise self._not_found()

        changes: Dict[str, Any] = {
            field: updates[field]
            for field in UPDATABLE_FIELDS
            if updates.get(field)
        }
        if "password" in changes:
            changes["password"] = self._password_hasher.hash(changes["password"])

        taken = [{field: changes[field]} for field in UNIQUE_FIELDS if field in changes]
        if taken and await self._customers_collection.find_one(
            {"_id": {"$ne": object_id}, "$or": taken}
        ):
            raise self._in_use()

        if image:
            changes["image"] = await self._image_uploader.upload(
                image, folder=self._image_uploader.folder
            )

        changes["updatedAt"] = datetime.now(timezone.utc)

        try:
            customer = await self._customers_collection.find_one_and_update(
                {"_id": object_id},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            raise self._in_use()

        if not customer:
            raise self._not_found()

        logger.info(f"Customer updated: {customer_id} (fields: {sorted(changes)})")
        return self._summary(customer)

    async def delete_profile(self, customer_id: str) -> None:
        """
        Delete a customer record.

        Raises:
            NotFoundException: Customer does not exist (including repeat deletes)
        """
        object_id = self._object_id(customer_id)
        if object_id is None:
            raise self._not_found()

        deleted = await self._customers_collection.find_one_and_delete({"_id": object_id})
        if not deleted:
            raise self._not_found()

        logger.info(f"Customer deleted: {customer_id}")

    async def list_all(self, identity: IdentityContext) -> List[Dict[str, Any]]:
        """
        List every customer for an admin.

        The admin claim is checked here as well as in the admin gate.
        Password hashes are never returned.

        Raises:
            ForbiddenException: Caller is not an admin
        """
        if not identity.is_admin:
            raise ForbiddenException(
                message="Access denied",
                code="ADMIN_REQUIRED"
            )

        customers = await self._customers_collection.find({}).to_list(length=None)
        return [self._public_record(customer) for customer in customers]

    # ─────────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────────

    async def _find_by_id(self, customer_id: str) -> Optional[dict]:
        object_id = self._object_id(customer_id)
        if object_id is None:
            return None
        return await self._customers_collection.find_one({"_id": object_id})

    @staticmethod
    def _object_id(customer_id: str) -> Optional[ObjectId]:
        try:
            return ObjectId(customer_id)
        except (InvalidId, TypeError):
            return None

    @staticmethod
    def _not_found() -> NotFoundException:
        return NotFoundException(
            message="Customer not found",
            code="CUSTOMER_NOT_FOUND"
        )

    @staticmethod
    def _in_use() -> ConflictException:
        return ConflictException(
            message="Email or username already in use",
            code="CUSTOMER_EXISTS"
        )

    @staticmethod
    def _summary(customer: dict) -> Dict[str, Any]:
        """Customer fields safe to return and to embed in tokens."""
        return {
            "customer_id": str(customer["_id"]),
            "email": customer.get("email"),
            "username": customer.get("username"),
            "phone": customer.get("phone"),
            "image": customer.get("image"),
        }

    @staticmethod
    def _public_record(customer: dict) -> Dict[str, Any]:
        """Full stored record without the password hash."""
        record = {
            key: _isoformat(value)
            for key, value in customer.items()
            if key not in ("_id", "password")
        }
        record["id"] = str(customer["_id"])
        return record
