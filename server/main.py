# server/main.py

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from api import auth, categories
from config import Settings
from core.assets import AssetStore
from core.errors import AppError, InternalError
from core.security import PasswordHasher, TokenService
from database import create_db_engine, create_session_factory, init_db, seed_db


logger = logging.getLogger(__name__)


# -------------------------------
# Error Translation
# -------------------------------

def register_exception_handlers(app: FastAPI):

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = errors[0].get("msg", "Invalid input") if errors else "Invalid input"
        return JSONResponse(status_code=400, content={"message": detail})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)})

    @app.exception_handler(SQLAlchemyError)
    async def db_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Database error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=InternalError().to_dict())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content=InternalError().to_dict())


# -------------------------------
# Application Factory
# -------------------------------

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings()

    # Fails here, before serving anything, when JWT_SECRET_KEY is missing
    tokens = TokenService(
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )
    hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    assets = AssetStore(
        settings.upload_dir,
        url_prefix=settings.upload_url_prefix,
        max_bytes=settings.max_upload_bytes,
    )

    engine = create_db_engine(settings.database_url)
    SessionLocal = create_session_factory(engine)
    init_db(engine)
    if settings.seed_sample_data:
        with SessionLocal() as db:
            seed_db(db, hasher)
    logger.info("Database initialized")

    app = FastAPI(title="E-Commerce API")
    app.state.settings = settings
    app.state.tokens = tokens
    app.state.hasher = hasher
    app.state.assets = assets
    app.state.engine = engine
    app.state.SessionLocal = SessionLocal

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(categories.router)
    app.mount(settings.upload_url_prefix, StaticFiles(directory=str(assets.upload_dir)), name="uploads")

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return "E-Commerce API is running"

    return app


_settings = Settings()
logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = create_app(_settings)
