"""Runtime execution context for applying declarations."""

from __future__ import annotations


class Context[E]:
    """Runtime state passed to every spec operation."""

    def __init__(self, engine: E, *, dry_run: bool = False) -> None:
        self.engine = engine
        self.dry_run = dry_run
