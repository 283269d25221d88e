"""Flask wiring for the revocation manager."""

from __future__ import annotations

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]

from revokit.core.logger import configure_logging
from revokit.manager import TokenRevocationManager, create_manager
from revokit.services._shared.ports import SignOptions
from revokit.services.rotation.dto import RotationOptions

EXTENSION_KEY = "revokit"


def rotation_defaults_from_config(config: dict) -> RotationOptions:
    """Build default rotation options from ``JWT_*`` settings."""
    algorithm = config.get("JWT_ALGORITHM", "HS256")
    return RotationOptions(
        access_sign_options=SignOptions(
            algorithm=algorithm, expires_in=config.get("JWT_ACCESS_EXPIRES", "15m")
        ),
        refresh_sign_options=SignOptions(
            algorithm=algorithm, expires_in=config.get("JWT_REFRESH_EXPIRES", "2h")
        ),
    )


def init_app(app: Flask) -> None:
    """Create the Redis client and revocation manager for ``app``.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``REDIS_URL``, ``REVOCATION_KEY_PREFIX`` and ``JWT_*``
        settings drive the manager. Nothing is registered when ``REDIS_URL``
        is empty.

    Raises
    ------
    RuntimeError
        If Redis does not answer ``PING``.
    """
    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    redis_url = app.config.get("REDIS_URL")
    if not redis_url:
        app.extensions.pop(EXTENSION_KEY, None)
        return

    client = redis.Redis.from_url(redis_url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {redis_url!r}") from exc

    app.extensions[EXTENSION_KEY] = create_manager(
        client,
        prefix=app.config.get("REVOCATION_KEY_PREFIX", ""),
        rotation_defaults=rotation_defaults_from_config(app.config),
    )


def get_manager(app: Flask | None = None) -> TokenRevocationManager:
    """Return the manager registered on ``app`` (the current app by default)."""
    target = app or current_app
    manager = target.extensions.get(EXTENSION_KEY)
    if manager is None:
        raise RuntimeError("Revocation manager is not initialized. Call init_app() first.")
    return manager
