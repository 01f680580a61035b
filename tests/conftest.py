"""Shared fixtures: an in-memory storage gateway and a fake clock."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from cistern.engine import ContainerEngine
from cistern.gateway import OK, ContainerProperties, Fatal, Ok, Transient
from cistern.retry import RetryScheduler

LAST_MODIFIED = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


class FakeGateway:
    """In-memory StorageGateway that records every call.

    The client handle returned by resolve_account is the account name.
    """

    def __init__(self) -> None:
        self.groups: dict[str, str] = {}
        self.accounts: set[str] = set()
        self.containers: dict[str, dict[str, ContainerProperties]] = {}
        self.policies: dict[tuple[str, str], str] = {}
        self.calls: list[tuple] = []

        self.create_hook: Callable[[], Ok | Transient | Fatal] | None = None
        self.policy_result: Fatal | None = None
        self.list_result: Fatal | None = None
        self.exists_result: Fatal | None = None
        self.delete_result: Fatal | None = None

    def add_account(self, account: str, resource_group: str = "rg") -> None:
        self.groups[account] = resource_group
        self.accounts.add(account)
        self.containers.setdefault(account, {})

    def add_container(self, account: str, name: str) -> None:
        self.containers[account][name] = ContainerProperties(
            name=name,
            last_modified=LAST_MODIFIED,
            lease_status="unlocked",
            lease_state="available",
            lease_duration="",
        )

    def remote_calls(self, op: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == op]

    # -- StorageGateway --

    def resolve_resource_group(self, account_name):
        self.calls.append(("resolve_resource_group", account_name))
        return self.groups.get(account_name)

    def resolve_account(self, resource_group, account_name):
        self.calls.append(("resolve_account", resource_group, account_name))
        exists = account_name in self.accounts and self.groups.get(account_name) == resource_group
        return account_name, exists

    def create_if_not_exists(self, client, name):
        self.calls.append(("create_if_not_exists", client, name))
        if self.create_hook is not None:
            result = self.create_hook()
            if not isinstance(result, Ok):
                return result
        if name not in self.containers[client]:
            self.add_container(client, name)
        return OK

    def set_access_policy(self, client, name, header_value):
        self.calls.append(("set_access_policy", client, name, header_value))
        if self.policy_result is not None:
            return self.policy_result
        self.policies[(client, name)] = header_value
        return OK

    def list_containers(self, client, prefix):
        self.calls.append(("list_containers", client, prefix))
        if self.list_result is not None:
            return self.list_result
        return [c for n, c in sorted(self.containers[client].items()) if n.startswith(prefix)]

    def exists(self, client, name):
        self.calls.append(("exists", client, name))
        if self.exists_result is not None:
            return self.exists_result
        return name in self.containers[client]

    def delete_if_exists(self, client, name):
        self.calls.append(("delete_if_exists", client, name))
        if self.delete_result is not None:
            return self.delete_result
        self.containers[client].pop(name, None)
        return OK


class FakeClock:
    """Monotonic clock that only moves when something sleeps."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def gateway() -> FakeGateway:
    gw = FakeGateway()
    gw.add_account("acct")
    return gw


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock: FakeClock) -> RetryScheduler:
    return RetryScheduler(clock=clock, sleep=clock.sleep)


@pytest.fixture
def engine(gateway: FakeGateway, scheduler: RetryScheduler) -> ContainerEngine:
    return ContainerEngine(gateway, scheduler=scheduler)
