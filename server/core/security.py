# server/core/security.py

from datetime import datetime, timedelta, timezone
from jose import JWTError, jwt
from passlib.context import CryptContext
from core.errors import ConfigurationError, InvalidToken


# -------------------------------
# Password Hashing
# -------------------------------

class PasswordHasher:
    """
    Salted bcrypt hashing through passlib.
    `rounds` is the bcrypt work factor (log2 of the iteration count).
    """

    def __init__(self, rounds: int = 10):
        self.context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        try:
            return self.context.verify(plain_password, hashed_password)
        except (ValueError, TypeError):
            # Unrecognised or corrupt hash
            return False


# -------------------------------
# Bearer Tokens
# -------------------------------

class TokenService:
    """
    Issues and verifies signed JWTs carrying the user's id, username and email.
    """

    def __init__(self, secret_key: str | None, algorithm: str = "HS256", expire_minutes: int = 60):
        if not secret_key:
            raise ConfigurationError("JWT_SECRET_KEY is not set")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = timedelta(minutes=expire_minutes)

    def issue(self, claims: dict, expires_delta: timedelta | None = None) -> str:
        to_encode = {
            "id": claims["id"],
            "username": claims["username"],
            "email": claims["email"],
        }
        now = datetime.now(timezone.utc)
        to_encode.update({
            "iat": now,
            "exp": now + (expires_delta or self.expires_delta),
        })
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidToken(str(e)) from e

        if payload.get("id") is None:
            raise InvalidToken("missing user id")
        return payload
