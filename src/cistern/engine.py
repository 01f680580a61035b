"""Convergence engine — create, read, probe and delete storage containers.

The engine keeps no per-resource state. Every call receives the id or the
declared config it works on, and re-resolves the owning resource group and
account, since either can disappear between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .config import PUBLIC_CLOUD, ContainerConfig, Environment
from .errors import CreateFailed, DependencyMissing, PolicyApplyFailed, RemoteError, ResourceNotFound
from .gateway import ClientHandle, ContainerProperties, Fatal, Ok, StorageGateway
from .identity import ResourceIdentity, decode, encode
from .projector import project
from .retry import RetryScheduler

logger = logging.getLogger(__name__)


class ResourceState(Enum):
    MANAGED = "managed"
    REMOVED = "removed"


@dataclass(frozen=True)
class ReconcileOutcome:
    """Result of a create or read: the tracked container, or a removal marker."""

    state: ResourceState
    id: str | None = None
    identity: ResourceIdentity | None = None
    properties: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def removed(cls) -> ReconcileOutcome:
        return cls(state=ResourceState.REMOVED)

    @property
    def is_removed(self) -> bool:
        return self.state is ResourceState.REMOVED


class ContainerEngine:
    """Reconcile storage containers through a StorageGateway."""

    def __init__(
        self,
        gateway: StorageGateway,
        environment: Environment = PUBLIC_CLOUD,
        scheduler: RetryScheduler | None = None,
    ) -> None:
        self.gateway = gateway
        self.environment = environment
        self.scheduler = scheduler or RetryScheduler()

    @property
    def endpoint_suffix(self) -> str:
        return self.environment.storage_endpoint_suffix

    def identify(self, config: ContainerConfig) -> str:
        """Return the id a container created from `config` will have."""
        return encode(config.storage_account_name, config.name, self.endpoint_suffix)

    # -- Lifecycle --

    def create(self, config: ContainerConfig | Mapping[str, Any]) -> ReconcileOutcome:
        """Create the container (if needed), apply its access policy, then read it back."""
        config = ContainerConfig.model_validate(config)
        name = config.name
        account = config.storage_account_name

        client, account_exists = self.gateway.resolve_account(config.resource_group_name, account)
        if not account_exists:
            raise DependencyMissing(f"Storage Account '{account}' Not Found")

        logger.info("Creating container '%s' in storage account '%s'", name, account)
        result = self.scheduler.run(
            lambda: self.gateway.create_if_not_exists(client, name),
            description=f"create container '{name}'",
        )
        if not isinstance(result, Ok):
            raise CreateFailed(
                f"Error creating container '{name}' in storage account '{account}'",
                container=name,
                account=account,
                cause=result,
            )

        access_type = config.access_type
        logger.debug("Setting access type '%s' on container '%s'", access_type.value, name)
        result = self.gateway.set_access_policy(client, name, access_type.header_value)
        if isinstance(result, Fatal):
            raise PolicyApplyFailed(
                f"Error setting permissions for container '{name}' in storage account '{account}'",
                container=name,
                account=account,
                cause=result,
            )

        return self.read(self.identify(config))

    def read(self, id: str) -> ReconcileOutcome:
        """Refresh the container's properties, or report it removed if it has drifted away."""
        identity = decode(id, self.endpoint_suffix)
        client = self._resolve_client(identity)
        if client is None:
            return ReconcileOutcome.removed()

        name = identity.container_name
        listing = self.gateway.list_containers(client, name)
        if isinstance(listing, Fatal):
            raise RemoteError(
                f"Failed to retrieve storage containers in account '{identity.account_name}'",
                container=name,
                account=identity.account_name,
                cause=listing,
            )

        # listing only filters by prefix; siblings such as 'name-2' come back too
        container = _exact_match(listing, name)
        if container is None:
            logger.warning(
                "Storage container '%s' does not exist in account '%s', removing from state",
                name,
                identity.account_name,
            )
            return ReconcileOutcome.removed()

        return ReconcileOutcome(
            state=ResourceState.MANAGED,
            id=id,
            identity=identity,
            properties=project(container),
        )

    def exists(self, id: str) -> bool:
        """Probe for the container without clearing anything when it is gone."""
        identity = decode(id, self.endpoint_suffix)
        client = self._resolve_client(identity)
        if client is None:
            return False

        name = identity.container_name
        logger.debug("Checking existence of container '%s' in account '%s'", name, identity.account_name)
        result = self.gateway.exists(client, name)
        if isinstance(result, Fatal):
            raise RemoteError(
                f"Error querying existence of container '{name}' in storage account '{identity.account_name}'",
                container=name,
                account=identity.account_name,
                cause=result,
            )
        if not result:
            logger.debug("Storage container '%s' does not exist in account '%s'", name, identity.account_name)
        return result

    def delete(self, id: str) -> None:
        """Delete the container; an already-missing container or account is success."""
        identity = decode(id, self.endpoint_suffix)
        client = self._resolve_client(identity)
        if client is None:
            return

        name = identity.container_name
        logger.info("Deleting container '%s' in account '%s'", name, identity.account_name)
        result = self.gateway.delete_if_exists(client, name)
        if isinstance(result, Fatal):
            raise RemoteError(
                f"Error deleting container '{name}' from storage account '{identity.account_name}'",
                container=name,
                account=identity.account_name,
                cause=result,
            )

    def import_resource(self, id: str) -> ReconcileOutcome:
        """Adopt an existing container by its id."""
        outcome = self.read(id)
        if outcome.is_removed:
            raise ResourceNotFound(f"Cannot import non-existent storage container '{id}'")
        logger.info("Imported storage container '%s'", id)
        return outcome

    def replace(self, id: str, config: ContainerConfig | Mapping[str, Any]) -> ReconcileOutcome:
        """Destroy the tracked container and create the newly declared one."""
        config = ContainerConfig.model_validate(config)
        logger.info("Replacing container '%s' with '%s'", id, self.identify(config))
        self.delete(id)
        return self.create(config)

    # -- Helpers --

    def _resolve_client(self, identity: ResourceIdentity) -> ClientHandle | None:
        """Resolve the account client, or None if the group or account is gone."""
        account = identity.account_name
        resource_group = self.gateway.resolve_resource_group(account)
        if resource_group is None:
            logger.warning(
                "Cannot locate resource group for storage account '%s' (presuming it's gone)",
                account,
            )
            return None

        client, account_exists = self.gateway.resolve_account(resource_group, account)
        if not account_exists:
            logger.warning(
                "Storage account '%s' not found; container '%s' cannot exist",
                account,
                identity.container_name,
            )
            return None
        return client


def _exact_match(listing: list[ContainerProperties], name: str) -> ContainerProperties | None:
    for container in listing:
        if container.name == name:
            return container
    return None
