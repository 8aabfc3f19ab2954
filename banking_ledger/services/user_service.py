"""
User service — registration and login.

Password handling is a placeholder: a salted SHA-256 digest,
good enough to avoid storing plaintext in a demo ledger and
nothing more.
"""

import hashlib
import hmac
import logging
import secrets

from sqlalchemy.orm import Session

from banking_ledger.exceptions import AuthenticationFailed, DuplicateKey
from banking_ledger.models.user import User
from banking_ledger.schemas.user import UserRegister, UserLogin
from banking_ledger.services.directory import Directory

logger = logging.getLogger(__name__)


def _hash_password(password: str, salt: str) -> str:
    return hashlib.sha256((salt + password).encode()).hexdigest()


def verify_password(user: User, password: str) -> bool:
    expected = _hash_password(password, user.password_salt)
    return hmac.compare_digest(user.password_hash, expected)


class UserService:

    def __init__(self, db: Session):
        self.db = db
        self.directory = Directory(db)

    def register(self, request: UserRegister) -> User:
        """
        Register a new user.

        Raises DuplicateKey if the username is already taken.
        """
        if self.directory.username_taken(request.username):
            logger.warning(
                "Registration rejected: duplicate username",
                extra={"action": "register", "resource": request.username},
            )
            raise DuplicateKey(f"Username '{request.username}' already exists")

        salt = secrets.token_hex(16)
        user = User(
            username=request.username,
            password_hash=_hash_password(request.password, salt),
            password_salt=salt,
            email=request.email,
            role=request.role,
        )
        self.directory.add(user)
        logger.info(
            "User registered",
            extra={"action": "register", "resource": f"user:{user.id}"},
        )
        return user

    def authenticate(self, request: UserLogin) -> User:
        """
        Verify credentials and return the user.

        The same error is raised for an unknown username, a wrong
        password and a deactivated user, so callers cannot tell
        which usernames are registered.
        """
        user = self.directory.find_user_by_username(request.username)
        if user is None or not verify_password(user, request.password):
            logger.warning(
                "Login failed",
                extra={"action": "login", "resource": request.username},
            )
            raise AuthenticationFailed("Invalid username or password")
        if not user.is_active:
            logger.warning(
                "Login failed: user deactivated",
                extra={"action": "login", "resource": f"user:{user.id}"},
            )
            raise AuthenticationFailed("Invalid username or password")
        return user

    def deactivate(self, user_id: int) -> User:
        """Deactivate a user. Their accounts are left untouched."""
        user = self.directory.get_user(user_id)
        user.is_active = False
        self.db.flush()
        logger.info(
            "User deactivated",
            extra={"action": "deactivate", "resource": f"user:{user.id}"},
        )
        return user

    def get_user(self, user_id: int) -> User:
        return self.directory.get_user(user_id)

    def get_user_by_username(self, username: str) -> User:
        return self.directory.get_user_by_username(username)
