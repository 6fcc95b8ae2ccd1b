"""Authentication service - registration, login and user lookup."""
import logging
from datetime import datetime
from typing import Optional

from app.models.user import User
from app.utils.auth import create_access_token, hash_password, verify_password
from app.utils.object_id import parse_object_id


logger = logging.getLogger(__name__)


class AuthService:
    """Service for handling user authentication."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.users = db["users"]

    def _doc_to_user(self, doc: dict) -> User:
        return User(
            _id=str(doc["_id"]),
            email=doc["email"],
            name=doc.get("name"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def register_user(
        self, email: str, password: str, name: Optional[str] = None
    ) -> User:
        """
        Register a new user.

        Raises:
            ValueError: If email is already registered
        """
        email = email.lower()
        if await self.users.find_one({"email": email}):
            raise ValueError("Email already registered")

        now = datetime.utcnow()
        user_doc = {
            "email": email,
            "hashed_password": hash_password(password),
            "name": name,
            "created_at": now,
            "updated_at": now,
        }
        result = await self.users.insert_one(user_doc)
        user_doc["_id"] = result.inserted_id

        logger.info("Registered user %s", result.inserted_id)
        return self._doc_to_user(user_doc)

    async def login(self, email: str, password: str) -> str:
        """
        Login user and return JWT token.

        Raises:
            ValueError: If credentials are invalid
        """
        user_doc = await self.users.find_one({"email": email.lower()})
        if not user_doc or not verify_password(password, user_doc["hashed_password"]):
            logger.debug("Failed login for %s", email)
            raise ValueError("Invalid email or password")

        return create_access_token(user_id=str(user_doc["_id"]), email=user_doc["email"])

    async def get_user_by_id(self, user_id: str) -> User:
        """
        Get user by ID.

        Raises:
            ValueError: If user not found
        """
        user_doc = await self.users.find_one(
            {"_id": parse_object_id(user_id, "User not found")}
        )
        if not user_doc:
            raise ValueError("User not found")

        return self._doc_to_user(user_doc)
