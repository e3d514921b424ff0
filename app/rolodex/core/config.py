from enum import StrEnum
from functools import lru_cache

from rolodex.core.settings.base import Settings as BaseSettings
from rolodex.core.settings.local import Settings as LocalSettings
from rolodex.core.settings.production import Settings as ProductionSettings
from rolodex.core.settings.staging import Settings as StagingSettings


class Environment(StrEnum):
    LOCAL = "local"
    STAGING = "staging"
    PRODUCTION = "production"


SETTINGS_MAP: dict[Environment, type[BaseSettings]] = {
    Environment.LOCAL: LocalSettings,
    Environment.STAGING: StagingSettings,
    Environment.PRODUCTION: ProductionSettings,
}


def settings_for(environment: str) -> type[BaseSettings]:
    """
    Returns the settings class for the given environment name.

    Raises:
        ValueError: If an invalid environment is specified
    """

    try:
        return SETTINGS_MAP[Environment(environment.lower())]
    except ValueError as error:
        raise ValueError(
            f"Invalid environment: {environment}. " f"Must be one of {', '.join(env.value for env in Environment)}"
        ) from error


@lru_cache
def get_settings() -> BaseSettings:
    """
    Returns the appropriate settings based on the environment.

    The environment is read once from ``ENVIRONMENT`` and the matching
    settings class is instantiated, so each deployment gets its defaults
    (store backend, cache backend, docs exposure) without extra flags.
    """

    environment = BaseSettings().ENVIRONMENT
    return settings_for(environment)()
