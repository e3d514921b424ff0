from typing import Literal

from .base import Settings as BaseSettings


class Settings(BaseSettings):
    """Development settings, profiles and accounts live in process memory."""

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    STORE_BACKEND: Literal["memory", "database"] = "memory"
