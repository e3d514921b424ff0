import logging
import logging.config
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from rolodex.core.settings.base import Settings

FORMATTER = "rolodex.core.logging.formatters.RolodexJsonFormatter"

# Third-party loggers that are too chatty at the application level
QUIET_LOGGERS = {
    "uvicorn": "INFO",
    "uvicorn.error": "INFO",
    "uvicorn.access": "WARNING",
    "sqlalchemy": "WARNING",
    "passlib": "ERROR",
    "aiosqlite": "WARNING",
}


def _stream_handler(stream: str, level: str, filters: list[str]) -> Dict[str, Any]:
    return {
        "class": "logging.StreamHandler",
        "level": level,
        "formatter": "json",
        "filters": filters,
        "stream": f"ext://sys.{stream}",
    }


def get_logging_config(settings: Settings) -> Dict[str, Any]:
    """
    Build the ``dictConfig`` for ``settings``.

    Everything is logged as JSON. Local runs log at DEBUG to stdout and also
    keep errors in ``logs/errors.log``. Deployed environments log INFO and up
    to stdout with source locations, errors to stderr, and skip health-check
    request lines.
    """
    local = settings.ENVIRONMENT == "local"
    level = settings.LOG_LEVEL or ("DEBUG" if local else "INFO")

    filters: Dict[str, Any] = {
        "context": {
            "()": "rolodex.core.logging.filters.ContextFilter",
            "app_name": settings.APP_NAME,
            "app_version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        },
        "health": {"()": "rolodex.core.logging.filters.HealthCheckFilter"},
    }

    if local:
        handlers: Dict[str, Any] = {
            "stdout": _stream_handler("stdout", "DEBUG", ["context"]),
            "error_file": {
                "class": "logging.FileHandler",
                "level": "ERROR",
                "formatter": "json",
                "filters": ["context"],
                "filename": str(Path(settings.BASE_DIR) / "logs" / "errors.log"),
                "delay": True,
            },
        }
    else:
        handlers = {
            "stdout": _stream_handler("stdout", "INFO", ["context", "health"]),
            "stderr": _stream_handler("stderr", "ERROR", ["context"]),
        }

    loggers: Dict[str, Any] = {name: {"level": lvl} for name, lvl in QUIET_LOGGERS.items()}
    loggers["rolodex"] = {"level": level, "handlers": list(handlers), "propagate": False}
    if settings.DATABASE_ECHO:
        loggers["sqlalchemy.engine"] = {"level": "INFO"}

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {"json": {"()": FORMATTER, "with_source": not local}},
        "filters": filters,
        "handlers": handlers,
        "loggers": loggers,
        "root": {"level": "WARNING", "handlers": [name for name in handlers if name != "error_file"]},
    }


def load_config_from_yaml(config_path: Path) -> Optional[Dict[str, Any]]:
    """Read a ``dictConfig`` mapping from YAML, None when the file is missing or unreadable."""
    if not config_path.exists():
        return None

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        print(f"Failed to load logging config from {config_path}: {e}", file=sys.stderr)
        return None


def setup_logging(settings: Settings, config_override: Optional[Dict[str, Any]] = None) -> None:
    """
    Configure logging from, in order of preference, ``config_override``,
    the YAML file named by ``LOG_CONFIG_FILE``, or ``get_logging_config``.
    """
    config = config_override
    if config is None and settings.LOG_CONFIG_FILE:
        config = load_config_from_yaml(Path(settings.LOG_CONFIG_FILE))
    if config is None:
        config = get_logging_config(settings)

    if settings.ENVIRONMENT == "local":
        (Path(settings.BASE_DIR) / "logs").mkdir(exist_ok=True)

    try:
        logging.config.dictConfig(config)
    except (ValueError, TypeError, AttributeError, ImportError) as e:
        print(f"Failed to configure logging: {e}", file=sys.stderr)
        logging.basicConfig(level=logging.INFO, stream=sys.stdout)


def setup_exception_logging() -> None:
    """Log uncaught exceptions (a store that never came up, say) before the process exits."""
    previous_hook = sys.excepthook

    def log_uncaught(exc_type, exc_value, exc_traceback):
        if not issubclass(exc_type, KeyboardInterrupt):
            logging.getLogger("rolodex").critical(
                "Uncaught exception, shutting down",
                exc_info=(exc_type, exc_value, exc_traceback),
            )
        previous_hook(exc_type, exc_value, exc_traceback)

    sys.excepthook = log_uncaught


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
