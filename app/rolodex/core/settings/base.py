import secrets
import warnings
from pathlib import Path
from typing import Annotated, Any, Literal, Self

from dotenv import load_dotenv
from pydantic import AliasChoices, AnyUrl, BeforeValidator, Field, PostgresDsn, RedisDsn, computed_field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


def parse_cors(v: Any) -> list[str]:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    elif isinstance(v, list):
        return v
    elif isinstance(v, str):
        return [v]
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    BASE_DIR: str = str(Path(__file__).resolve().parent.parent.parent.parent)

    APP_NAME: str = "Rolodex"
    APP_DESCRIPTION: str = "Rolodex API for user accounts and user profiles"
    APP_VERSION: str = "0.1.0"
    OPENAPI_DOCS_URL: str | None = "/docs"
    OPENAPI_JSON_SCHEMA_URL: str | None = "/openapi.json"
    DOMAIN: str = "localhost"
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    AUTH_SECRET_KEY: str = Field(
        default_factory=lambda: secrets.token_hex(64),
        validation_alias=AliasChoices("AUTH_SECRET_KEY", "JWT_SECRET_KEY"),
    )
    AUTH_TOKEN_ALGORITHM: str = "HS256"
    AUTH_TOKEN_MAX_AGE: int = 60 * 60  # 1 hour
    PASSWORD_HASH_ROUNDS: int = 10

    STORE_BACKEND: Literal["memory", "database"] = "memory"
    DATABASE_URL: str | None = None
    DATABASE_ECHO: bool = False

    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "rolodex"
    POSTGRES_PASSWORD: str = "changethis"
    POSTGRES_DB: str = "rolodex"

    CACHE_BACKEND: Literal["memory", "redis"] = "memory"
    CACHE_TTL: int = 10
    CACHE_KEY_PREFIX: str = "rolodex_cache"
    CACHE_MEMORY_MAX_SIZE: int = 1024
    CACHE_REDIS_DB: int = 1

    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str | None = None

    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 100
    RATE_LIMIT_NAMESPACE: str = "rolodex_base_throttler"
    AUTH_RATE_LIMIT: str = "10/minute"
    RATE_LIMIT_STORAGE_URL: str | None = None

    LOG_LEVEL: str | None = None
    LOG_CONFIG_FILE: str | None = None

    # Echo a caller-supplied X-Request-ID instead of generating one
    TRUST_REQUEST_ID: bool = False

    BACKEND_CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SERVER_URL(self) -> str:
        if self.ENVIRONMENT == "local":
            return f"http://{self.DOMAIN}:{self.PORT}"
        return f"https://{self.DOMAIN}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return str(
            PostgresDsn.build(
                scheme="postgresql+psycopg",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_HOST,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def REDIS_URL(self) -> str:
        return str(
            RedisDsn.build(
                scheme="redis",
                host=self.REDIS_HOST,
                port=self.REDIS_PORT,
                password=self.REDIS_PASSWORD,
                path=f"{self.CACHE_REDIS_DB}",
            )
        )

    def _check_default_secret(self, var_name: str, value: str | None) -> None:
        if value == "changethis":
            message = (
                f'The value of {var_name} is "changethis", ' "for security, please change it, at least for deployments."
            )
            if self.ENVIRONMENT == "local":
                warnings.warn(message, stacklevel=1)
            else:
                raise ValueError(message)

    @model_validator(mode="after")
    def _enforce_non_default_secrets(self) -> Self:
        self._check_default_secret("AUTH_SECRET_KEY", self.AUTH_SECRET_KEY)

        if self.STORE_BACKEND == "database" and not self.DATABASE_URL:
            self._check_default_secret("POSTGRES_PASSWORD", self.POSTGRES_PASSWORD)

        return self

    @model_validator(mode="after")
    def _enforce_cache_config(self) -> Self:
        if self.CACHE_TTL <= 0:
            raise ValueError("CACHE_TTL must be a positive number of seconds.")

        if self.CACHE_MEMORY_MAX_SIZE <= 0:
            raise ValueError("CACHE_MEMORY_MAX_SIZE must be greater than zero.")

        return self
