# server/core/accounts.py

import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from core.errors import AuthError, ConflictError, NotFoundError, ValidationError
from core.security import PasswordHasher, TokenService
from models.user import User


logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def register_user(db: Session, hasher: PasswordHasher, username: str, email: str, password: str) -> dict:
    """
    Creates a new account. Does not log the user in;
    the client is expected to call login afterwards.
    """
    if not username or not email or not password:
        raise ValidationError("Please enter all fields")

    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already in use", field="email")

    if db.query(User).filter(User.username == username).first():
        raise ConflictError("Username already taken", field="username")

    new_user = User(username=username, email=email, password=hasher.hash(password))
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against a concurrent registration
        db.rollback()
        field = "email" if db.query(User).filter(User.email == email).first() else "username"
        message = "Email already in use" if field == "email" else "Username already taken"
        raise ConflictError(message, field=field)

    logger.info("Registered user %s (id=%s)", username, new_user.id)
    return {"success": True, "message": "Registration successful! Please log in."}


def authenticate_user(db: Session, hasher: PasswordHasher, email: str, password: str) -> User | None:
    user = db.query(User).filter(User.email == email).first()
    if not user or not hasher.verify(password, user.password):
        return None
    return user


def login_user(db: Session, hasher: PasswordHasher, tokens: TokenService, email: str, password: str) -> dict:
    if not email or not password:
        raise ValidationError("Please enter all fields")

    user = authenticate_user(db, hasher, email, password)
    if user is None:
        logger.warning("Failed login for %s", email)
        raise AuthError(INVALID_CREDENTIALS)

    profile = user.to_public()
    token = tokens.issue(profile)
    logger.info("Login: %s (id=%s)", user.username, user.id)
    return {"token": token, "user": profile}


def get_user_profile(db: Session, user_id: int) -> dict:
    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        raise NotFoundError("User not found")
    return user.to_public()
