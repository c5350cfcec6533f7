# server/api/auth.py

import logging
from pydantic import BaseModel
from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session
from database import get_db
from core.accounts import register_user, login_user, get_user_profile
from core.errors import InvalidToken, Unauthorized
from core.security import PasswordHasher, TokenService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


# -------------------------------
# Schemas
# -------------------------------

class RegisterRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class PublicUser(BaseModel):
    id: int
    username: str
    email: str


class LoginResponse(BaseModel):
    token: str
    user: PublicUser


# -------------------------------
# Dependencies
# -------------------------------

def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> dict:
    """
    Guards protected routes: verifies the bearer token and
    stores the decoded claims on `request.state.user`.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("No authentication token, authorization denied")

    try:
        claims = tokens.verify(credentials.credentials)
    except InvalidToken as e:
        logger.debug("Rejected token: %s", e)
        raise Unauthorized("Token is not valid")

    request.state.user = claims
    return claims


# -------------------------------
# Endpoints
# -------------------------------

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    req: RegisterRequest,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
):
    return register_user(db, hasher, req.username, req.email, req.password)


@router.post("/login", response_model=LoginResponse)
def login(
    req: LoginRequest,
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    return login_user(db, hasher, tokens, req.email, req.password)


@router.get("/user", response_model=PublicUser)
def read_current_user(current_user: dict = Depends(get_current_user), db: Session = Depends(get_db)):
    return get_user_profile(db, current_user["id"])
