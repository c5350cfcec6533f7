# server/config.py

from typing import Annotated
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process-wide configuration, read from the environment and `.env`.
    Built once at startup and handed to the services that need it.
    """
    jwt_secret_key: str | None = None
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    database_url: str = "sqlite:///./data/app.db"
    upload_dir: str = "data/uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_bytes: int = 5 * 1024 * 1024

    bcrypt_rounds: int = 10
    # Comma-separated in the environment
    cors_origins: Annotated[list[str], NoDecode] = ["*"]
    seed_sample_data: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value
