"""Tests for cistern.migrate."""

from __future__ import annotations

import pytest

from cistern.config import PUBLIC_CLOUD, Environment
from cistern.errors import MigrationError
from cistern.identity import decode
from cistern.migrate import SCHEMA_VERSION, migrate_state


def _v0_state():
    return {
        "id": "my-container",
        "attributes": {
            "name": "my-container",
            "resource_group_name": "rg",
            "storage_account_name": "acct",
            "container_access_type": "private",
        },
    }


class TestMigrateState:
    def test_v0_to_v1(self):
        version, state = migrate_state(0, _v0_state(), PUBLIC_CLOUD)
        assert version == SCHEMA_VERSION == 1
        assert state["id"] == "https://acct.core.windows.net/my-container"
        assert state["attributes"]["container_access_type"] == "private"

    def test_migrated_id_decodes_to_same_identity(self):
        _, state = migrate_state(0, _v0_state(), PUBLIC_CLOUD)
        identity = decode(state["id"], PUBLIC_CLOUD.storage_endpoint_suffix)
        assert identity.account_name == "acct"
        assert identity.container_name == "my-container"

    def test_uses_environment_suffix(self):
        _, state = migrate_state(0, _v0_state(), Environment.named("german"))
        assert state["id"] == "https://acct.core.cloudapi.de/my-container"

    def test_input_not_mutated(self):
        original = _v0_state()
        migrate_state(0, original, PUBLIC_CLOUD)
        assert original["id"] == "my-container"

    def test_current_version_passes_through(self):
        state = {"id": "https://acct.core.windows.net/logs", "attributes": {}}
        assert migrate_state(1, state, PUBLIC_CLOUD) == (1, state)

    def test_unknown_version(self):
        with pytest.raises(MigrationError, match="Unexpected schema version: 7"):
            migrate_state(7, _v0_state(), PUBLIC_CLOUD)

    def test_v0_missing_attribute(self):
        state = _v0_state()
        del state["attributes"]["storage_account_name"]
        with pytest.raises(MigrationError, match="storage_account_name"):
            migrate_state(0, state, PUBLIC_CLOUD)
