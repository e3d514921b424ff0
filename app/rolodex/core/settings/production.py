from typing import Literal

from .base import Settings as BaseSettings


class Settings(BaseSettings):
    ENVIRONMENT: Literal["local", "staging", "production"] = "production"
    STORE_BACKEND: Literal["memory", "database"] = "database"
    CACHE_BACKEND: Literal["memory", "redis"] = "redis"
    OPENAPI_DOCS_URL: str | None = None
    OPENAPI_JSON_SCHEMA_URL: str | None = None
