"""Remote gateway — the capabilities the engine needs from a storage API client.

Gateway operations never raise for remote failures. They return ``Ok``,
``Transient`` (worth retrying) or ``Fatal`` (give up) so the engine can
decide what to do without exception-driven control flow.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

ClientHandle = Any


@dataclass(frozen=True)
class Ok:
    """The remote call succeeded."""


@dataclass(frozen=True)
class Transient:
    """The remote call failed but may succeed if retried."""

    reason: str

    def __str__(self) -> str:
        return self.reason


@dataclass(frozen=True)
class Fatal:
    """The remote call failed and retrying will not help."""

    reason: str

    def __str__(self) -> str:
        return self.reason


OK = Ok()

type Outcome = Ok | Transient | Fatal


@dataclass(frozen=True)
class ContainerProperties:
    """Snapshot of a container as reported by a listing."""

    name: str
    last_modified: datetime | str | None = None
    lease_status: str = ""
    lease_state: str = ""
    lease_duration: str = ""


class StorageGateway(Protocol):
    """Account and container operations against the remote storage API."""

    def resolve_resource_group(self, account_name: str) -> str | None:
        """Return the resource group that owns an account, or None if it is gone."""
        ...

    def resolve_account(self, resource_group: str, account_name: str) -> tuple[ClientHandle, bool]:
        """Return a client for the account and whether the account exists."""
        ...

    def create_if_not_exists(self, client: ClientHandle, name: str) -> Ok | Transient | Fatal: ...

    def set_access_policy(self, client: ClientHandle, name: str, header_value: str) -> Ok | Fatal: ...

    def list_containers(self, client: ClientHandle, prefix: str) -> list[ContainerProperties] | Fatal: ...

    def exists(self, client: ClientHandle, name: str) -> bool | Fatal: ...

    def delete_if_exists(self, client: ClientHandle, name: str) -> Ok | Fatal: ...
