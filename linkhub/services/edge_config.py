"""
Redis-backed edge config store.

Holds small, globally read configuration documents (reserved slugs, beta
feature allow-lists) as JSON values. Degrades gracefully: when Redis is
unreachable the store reports itself unavailable and reads return defaults.
"""

import logging
import json
from typing import Any, Optional

import redis
from redis.exceptions import RedisError, ConnectionError, TimeoutError
from flask import Flask

logger = logging.getLogger(__name__)


class EdgeConfig:
    """
    Key/value config store.

    Keys pattern: {prefix}:edge-config:{key}
    """

    def __init__(self, app: Optional[Flask] = None):
        """Initialize edge config store."""
        self.client: Optional[redis.Redis] = None
        self._enabled: bool = False
        self._prefix: str = ""

        if app:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Initialize Redis client from Flask app config."""
        self._enabled = app.config.get('CACHE_ENABLED', True)
        self._prefix = app.config.get('EDGE_CONFIG_KEY_PREFIX', 'linkhub')
        redis_url = app.config.get('REDIS_URL', 'redis://redis:6379/0')

        if not self._enabled:
            logger.info("[EDGE_CONFIG] Edge config is DISABLED via config")
            return

        try:
            self.client = redis.from_url(
                redis_url,
                decode_responses=True,
                socket_connect_timeout=3,
                socket_timeout=3,
                socket_keepalive=True,
                max_connections=50,
                retry_on_timeout=True,
                health_check_interval=30
            )
            self.client.ping()
            logger.info(f"[EDGE_CONFIG] ✓ Redis connected: {redis_url}")
        except (ConnectionError, TimeoutError, RedisError) as e:
            logger.warning(f"[EDGE_CONFIG] ⚠ Redis connection failed: {e}. Edge config DISABLED.")
            self._enabled = False
            self.client = None

    def is_available(self) -> bool:
        """Check if the store is available and healthy."""
        if not self._enabled or not self.client:
            return False
        try:
            self.client.ping()
            return True
        except (ConnectionError, RedisError):
            return False

    def _build_key(self, key: str) -> str:
        return f"{self._prefix}:edge-config:{key}"

    def get(self, key: str, default: Any = None) -> Any:
        """Read a JSON document, or default when missing or unreadable."""
        if not self.is_available():
            return default
        try:
            value = self.client.get(self._build_key(key))
            if value is None:
                return default
            return json.loads(value)
        except (RedisError, json.JSONDecodeError) as e:
            logger.warning(f"[EDGE_CONFIG] ✗ Get error for '{key}': {e}")
            return default

    def set(self, key: str, value: Any) -> bool:
        """Store a JSON document."""
        if not self.is_available():
            return False
        try:
            self.client.set(self._build_key(key), json.dumps(value))
            logger.info(f"[EDGE_CONFIG] ✓ Updated '{key}'")
            return True
        except (RedisError, TypeError) as e:
            logger.warning(f"[EDGE_CONFIG] ✗ Set error for '{key}': {e}")
            return False


_edge_config: Optional[EdgeConfig] = None


def init_edge_config(app: Flask) -> None:
    """Initialize edge config singleton."""
    global _edge_config
    _edge_config = EdgeConfig(app)
    app.extensions['edge_config'] = _edge_config


def get_edge_config() -> EdgeConfig:
    """Get edge config instance."""
    if _edge_config is None:
        raise RuntimeError("Edge config not initialized.")
    return _edge_config
