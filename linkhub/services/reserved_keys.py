"""Reserved slug lookup backed by the edge config store."""
import logging

from linkhub.services.edge_config import get_edge_config

logger = logging.getLogger(__name__)

RESERVED_KEYS_CONFIG_KEY = 'reservedKey'


def is_reserved_key(key: str) -> bool:
    """
    Check whether a slug is on the dynamic reserved list.

    Without a reachable edge config store nothing is considered reserved.
    """
    edge_config = get_edge_config()
    if not edge_config.is_available():
        return False
    reserved_keys = edge_config.get(RESERVED_KEYS_CONFIG_KEY, default=[]) or []
    is_reserved = key.lower() in reserved_keys
    if is_reserved:
        logger.info(f"[EDGE_CONFIG] Rejected reserved key '{key}'")
    return is_reserved
