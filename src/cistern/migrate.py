"""State migration — upgrade stored container state to the current schema."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from typing import Any

from .config import Environment
from .errors import MigrationError
from .identity import encode

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1


def migrate_state(
    version: int,
    state: Mapping[str, Any],
    environment: Environment,
) -> tuple[int, dict[str, Any]]:
    """Upgrade `state` (``{"id": ..., "attributes": {...}}``) to SCHEMA_VERSION.

    Returns the new version and a migrated copy; the input is left untouched.
    """
    migrated = copy.deepcopy(dict(state))
    if version == 0:
        migrated = _migrate_v0_to_v1(migrated, environment)
        version = 1
    if version != SCHEMA_VERSION:
        raise MigrationError(f"Unexpected schema version: {version}")
    return version, migrated


def _migrate_v0_to_v1(state: dict[str, Any], environment: Environment) -> dict[str, Any]:
    # v0 ids were the bare container name
    attrs = state.get("attributes") or {}
    try:
        name = attrs["name"]
        account = attrs["storage_account_name"]
    except KeyError as exc:
        raise MigrationError(f"v0 state is missing attribute {exc}") from None

    new_id = encode(account, name, environment.storage_endpoint_suffix)
    logger.debug("Migrating storage container id '%s' -> '%s'", state.get("id"), new_id)
    state["id"] = new_id
    return state
