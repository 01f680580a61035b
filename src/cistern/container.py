"""The storage_container resource declaration."""

from __future__ import annotations

import logging
from typing import Any

from .config import ContainerConfig
from .context import Context
from .engine import ContainerEngine, ReconcileOutcome
from .spec import Specification, spec

logger = logging.getLogger(__name__)


@spec("storage_container")
class StorageContainer(Specification[ContainerEngine]):
    """A declared container; all attributes are force-replace."""

    def __init__(self, **attrs: Any) -> None:
        self.config = ContainerConfig(**attrs)
        self.outcome: ReconcileOutcome | None = None

    def __repr__(self) -> str:
        return f"StorageContainer({self.config.storage_account_name}/{self.config.name})"

    def equals(self, ctx: Context[ContainerEngine]) -> bool:
        # no field can be updated in place, so an existing container always matches
        return self.exists(ctx)

    def exists(self, ctx: Context[ContainerEngine]) -> bool:
        return ctx.engine.exists(ctx.engine.identify(self.config))

    def apply(self, ctx: Context[ContainerEngine]) -> None:
        self.outcome = ctx.engine.create(self.config)
        logger.debug("Container %r is now tracked as '%s'", self, self.outcome.id)

    def remove(self, ctx: Context[ContainerEngine]) -> None:
        ctx.engine.delete(ctx.engine.identify(self.config))
        self.outcome = ReconcileOutcome.removed()
