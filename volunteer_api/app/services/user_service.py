"""
Business logic for users.

Registration, login and profile lookup.  The API does not hash
passwords: the client sends a hash and it is stored and compared as
an opaque string.
"""

import hmac
import logging

from volunteer_api.app.core.db import get_connection, new_id, transaction
from volunteer_api.app.core.errors import AuthenticationError, ConflictError, NotFoundError
from volunteer_api.app.schemas.user import (
    LoginResult,
    UserCreate,
    UserRead,
    UserRegistered,
)


logger = logging.getLogger(__name__)


class UserService:
    """Service for volunteer and organization accounts."""

    @classmethod
    async def create_user(cls, data: UserCreate) -> UserRegistered:
        """Register a new user.

        The email check and the insert run in one write transaction so
        two concurrent sign-ups with the same address cannot both pass
        the check.  Raises ``ConflictError`` (``email_taken``) if the
        email is already registered.
        """
        user_id = new_id("user")
        with transaction() as conn:
            existing = conn.execute(
                "SELECT id FROM users WHERE email = ?", (data.email,)
            ).fetchone()
            if existing:
                raise ConflictError("Email already registered", code="email_taken")
            conn.execute(
                """
                INSERT INTO users (
                    id, email, password_hash, user_type, full_name, nik,
                    organization_name, npwp, phone_number
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    data.email,
                    data.password_hash,
                    data.user_type.value,
                    data.full_name,
                    data.nik,
                    data.organization_name,
                    data.npwp,
                    data.phone_number,
                ),
            )
        logger.info("Registered %s %s as %s", data.user_type.value, data.email, user_id)
        return UserRegistered(user_id=user_id, user_type=data.user_type)

    @classmethod
    async def authenticate(cls, email: str, password_hash: str) -> LoginResult:
        """Check credentials and return the stored account details.

        Raises ``AuthenticationError`` for an unknown email or a
        mismatching hash; both cases produce the same message.
        """
        conn = get_connection()
        try:
            row = conn.execute(
                """
                SELECT id, email, password_hash, user_type, full_name, organization_name
                FROM users WHERE email = ?
                """,
                (email,),
            ).fetchone()
        finally:
            conn.close()
        if not row or not hmac.compare_digest(
            row["password_hash"].encode("utf-8"), password_hash.encode("utf-8")
        ):
            logger.warning("Failed login attempt for %s", email)
            raise AuthenticationError("Invalid email or password")
        return LoginResult(
            user_id=row["id"],
            email=row["email"],
            user_type=row["user_type"],
            full_name=row["full_name"] or row["organization_name"],
        )

    @classmethod
    async def get_user(cls, user_id: str) -> UserRead:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        finally:
            conn.close()
        if not row:
            raise NotFoundError("User not found", code="user_not_found")
        return UserRead(
            id=row["id"],
            email=row["email"],
            user_type=row["user_type"],
            full_name=row["full_name"] or row["organization_name"],
            nik=row["nik"],
            npwp=row["npwp"],
            phone_number=row["phone_number"],
            profile_image_path=row["profile_image_path"],
        )
