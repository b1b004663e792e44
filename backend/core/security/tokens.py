"""
JWT token service for authentication.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt


@dataclass
class TokenPayload:
    """JWT token payload structure."""

    sub: str  # Subject (user ID)
    exp: datetime
    iat: datetime
    type: str  # "access" or "refresh"
    role: str | None = None
    newsroom_id: int | None = None


class TokenService:
    """Service for creating and validating JWT tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 30,
        refresh_token_expire_days: int = 7,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._access_token_expire_minutes = access_token_expire_minutes
        self._refresh_token_expire_days = refresh_token_expire_days

    def create_access_token(
        self,
        user_id: int | str,
        role: str | None = None,
        newsroom_id: int | None = None,
    ) -> str:
        """
        Create an access token.

        Args:
            user_id: User ID to encode in the token
            role: Optional role claim
            newsroom_id: Optional tenant claim

        Returns:
            Encoded JWT access token
        """
        now = datetime.now(UTC)
        payload = {
            "sub": str(user_id),
            "exp": now + timedelta(minutes=self._access_token_expire_minutes),
            "iat": now,
            "type": "access",
        }
        if role:
            payload["role"] = role
        if newsroom_id is not None:
            payload["newsroom_id"] = newsroom_id

        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def create_refresh_token(self, user_id: int | str) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": str(user_id),
            "exp": now + timedelta(days=self._refresh_token_expire_days),
            "iat": now,
            "type": "refresh",
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def create_token_pair(
        self,
        user_id: int | str,
        role: str | None = None,
        newsroom_id: int | None = None,
    ) -> tuple[str, str]:
        """Create both access and refresh tokens."""
        access_token = self.create_access_token(user_id, role, newsroom_id)
        refresh_token = self.create_refresh_token(user_id)
        return access_token, refresh_token

    def decode_token(self, token: str) -> TokenPayload | None:
        """
        Decode and validate a JWT token.

        Returns:
            TokenPayload if valid, None if invalid or expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )

            for field in ("sub", "exp", "type"):
                if field not in payload:
                    raise JWTError(f"Missing required field: {field}")

            return TokenPayload(
                sub=payload.get("sub"),
                exp=datetime.fromtimestamp(payload.get("exp"), tz=UTC),
                iat=datetime.fromtimestamp(payload.get("iat", 0), tz=UTC),
                type=payload.get("type"),
                role=payload.get("role"),
                newsroom_id=payload.get("newsroom_id"),
            )
        except JWTError:
            return None

    def verify_access_token(self, token: str) -> TokenPayload | None:
        payload = self.decode_token(token)
        if payload and payload.type == "access":
            return payload
        return None

    def verify_refresh_token(self, token: str) -> TokenPayload | None:
        payload = self.decode_token(token)
        if payload and payload.type == "refresh":
            return payload
        return None
