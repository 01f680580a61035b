"""SpecOp strategies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .context import Context
from .spec import Specification

logger = logging.getLogger(__name__)


class SpecOp[E](ABC):
    """Wraps a Specification with conditional execution logic."""

    def __init__(self, spec: Specification[E]) -> None:
        self.spec = spec

    @abstractmethod
    def __call__(self, ctx: Context[E]) -> None: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.spec!r})"


class Present[E](SpecOp[E]):
    """Apply only if resource doesn't exist."""

    def __call__(self, ctx: Context[E]) -> None:
        if self.spec.exists(ctx):
            logger.debug("Skipping %r; already exists", self.spec)
        elif ctx.dry_run:
            logger.info("[DRY RUN] Would apply %r", self.spec)
        else:
            logger.info("Applying %r", self.spec)
            self.spec.apply(ctx)


class Ensure[E](SpecOp[E]):
    """Apply if current state doesn't match."""

    def __call__(self, ctx: Context[E]) -> None:
        if self.spec.equals(ctx):
            logger.debug("Skipping %r; up to date", self.spec)
        elif ctx.dry_run:
            logger.info("[DRY RUN] Would apply %r", self.spec)
        else:
            logger.info("Applying %r", self.spec)
            self.spec.apply(ctx)


class Absent[E](SpecOp[E]):
    """Remove if resource exists."""

    def __call__(self, ctx: Context[E]) -> None:
        if self.spec.exists(ctx):
            if ctx.dry_run:
                logger.info("[DRY RUN] Would remove %r", self.spec)
            else:
                logger.info("Removing %r", self.spec)
                self.spec.remove(ctx)
        else:
            logger.debug("Skipping removal of %r; not present", self.spec)


STRATEGIES: dict[str, type[SpecOp]] = {
    "present": Present,
    "ensure": Ensure,
    "absent": Absent,
}
