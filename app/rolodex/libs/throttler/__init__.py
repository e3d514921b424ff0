from .limiter_config import LimiterConfig, build_limiter  # noqa: F401

__all__ = ["LimiterConfig", "build_limiter"]
