"""Identifier helpers."""
import secrets
import string

NANOID_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase

WORKSPACE_ID_PREFIX = 'ws_'


def nanoid(size: int = 7) -> str:
    """Random URL-safe identifier of the given length."""
    return ''.join(secrets.choice(NANOID_ALPHABET) for _ in range(size))


def create_id(prefix: str = '') -> str:
    """Opaque primary key, optionally tagged with a type prefix (e.g. 'pn_')."""
    return f"{prefix}c{nanoid(24).lower()}"


def prefix_workspace_id(workspace_id: str) -> str:
    """Render an internal workspace id in its external form (ws_<id>)."""
    if workspace_id.startswith(WORKSPACE_ID_PREFIX):
        return workspace_id
    return f"{WORKSPACE_ID_PREFIX}{workspace_id}"


def normalize_workspace_id(workspace_id: str) -> str:
    """Strip the external ws_ tag, leaving the internal id."""
    if workspace_id.startswith(WORKSPACE_ID_PREFIX):
        return workspace_id[len(WORKSPACE_ID_PREFIX):]
    return workspace_id
