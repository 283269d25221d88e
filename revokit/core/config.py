"""Settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'


# Loads .env during development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    REDIS_URL: str | None
        Connection URL of the revocation store. No manager is registered when
        unset.
    REVOCATION_KEY_PREFIX: str
        Namespace of the revocation keys in Redis. A ``:`` separator is
        appended when missing, so ``"revoked"`` stores keys as ``revoked:<token>``.
    JWT_SECRET_KEY: str
        Signing/verification key handed to the codec by the embedding app.
    JWT_ALGORITHM: str
        Algorithm used for the default access/refresh signing options.
    JWT_ACCESS_EXPIRES: str
        Lifetime of rotated access tokens (``"15m"``-style or seconds).
    JWT_REFRESH_EXPIRES: str
        Lifetime of rotated refresh tokens.
    LOG_LEVEL: str
        Verbosity of the ``revokit`` JSON logger (``INFO`` by default).
    DEBUG: bool
        Toggles Flask debug mode.
    TESTING: bool
        Enables Flask testing mode when ``True``.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    # Store
    REDIS_URL = os.getenv("REDIS_URL")
    REVOCATION_KEY_PREFIX = os.getenv("REVOCATION_KEY_PREFIX", "")

    # Secrets / tokens
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ACCESS_EXPIRES = os.getenv("JWT_ACCESS_EXPIRES", "15m")
    JWT_REFRESH_EXPIRES = os.getenv("JWT_REFRESH_EXPIRES", "2h")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Defaults to a local Redis when ``REDIS_URL`` is unset.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables debug logs.
    - Uses a dedicated key prefix so a shared Redis is never polluted.
    """

    TESTING = True
    DEBUG = False
    REDIS_URL = os.getenv("TEST_REDIS_URL")
    REVOCATION_KEY_PREFIX = "revokit-test"


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments."""

    DEBUG = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
