"""HCL loading engine — parse .hcl files into spec operations.

A declaration file holds strategy blocks at the top level:

    ensure "storage_container" {
        name                 = "logs"
        resource_group_name  = "rg-prod"
        storage_account_name = "acmeprod"
    }

Files are rendered as Jinja2 templates before they are parsed.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Callable
from pathlib import Path
from typing import Any

import hcl2
import jinja2

from .spec import Specification, _spec_registry
from .specop import STRATEGIES, SpecOp

logger = logging.getLogger(__name__)

_VAR_PATTERN = re.compile(r"\$\{(?:env\.(\w+)|(\w+))\}")

_BUILTIN_VARS: dict[str, Callable[[], str]] = {
    "CWD": os.getcwd,
}


def scan(
    path: str | Path,
    *,
    recurse: bool = True,
    context: dict[str, Any] | None = None,
) -> list[SpecOp]:
    """Load every .hcl file under a directory and return their operations in path order."""
    root = Path(path)
    if not root.is_dir():
        logger.debug("Declaration directory '%s' does not exist", root)
        return []

    pattern = "**/*.hcl" if recurse else "*.hcl"
    ops: list[SpecOp] = []
    for file in sorted(root.glob(pattern)):
        logger.debug("Loading declarations from '%s'", file)
        ops.extend(parse(load(file, context=context)))
    return ops


def load(
    file: Path,
    *,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Load and parse a single HCL file, rendering Jinja2 templates with context."""
    text = file.read_text()
    ctx = context if context is not None else {}
    env = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    try:
        template = env.from_string(text)
        text = template.render(ctx)
    except jinja2.TemplateError as exc:
        raise ValueError(f"{file}: {exc}") from exc
    return hcl2.loads(text)


def parse(data: dict[str, Any]) -> list[SpecOp]:
    """Build spec operations from parsed HCL data.

    HCL2 structure for strategy blocks:
        {"ensure": [{"storage_container": {"name": "logs", ...}}, ...], ...}
    """
    ops: list[SpecOp] = []
    for strategy_name, strategy_cls in STRATEGIES.items():
        for spec_block in data.get(strategy_name, []):
            for spec_name, attrs in spec_block.items():
                spec_instance = _decode_spec(spec_name, dict(attrs))
                ops.append(strategy_cls(spec_instance))
    return ops


def _expand_var(match: re.Match) -> str:
    """Expand a single ${...} variable reference."""
    env_name = match.group(1)
    builtin_name = match.group(2)
    if env_name is not None:
        if env_name not in os.environ:
            logger.warning("Environment variable '%s' is not set", env_name)
        return os.environ.get(env_name, "")
    if builtin_name is not None and builtin_name in _BUILTIN_VARS:
        return _BUILTIN_VARS[builtin_name]()
    logger.warning("Unknown variable '%s'", builtin_name)
    return match.group(0)


def _interpolate_value(value: Any) -> Any:
    """Expand ${env.VAR} and ${CWD} references in a string value."""
    if isinstance(value, str) and "${" in value:
        return _VAR_PATTERN.sub(_expand_var, value)
    return value


def _decode_spec(spec_name: str, attrs: dict[str, Any]) -> Specification[Any]:
    """Decode a declaration block into a Specification via the registry.

    Attribute errors (unknown or invalid fields) propagate from the spec class.
    """
    if spec_name not in _spec_registry:
        raise ValueError(f"Unknown spec type: '{spec_name}'")
    attrs = {k: _interpolate_value(v) for k, v in attrs.items()}
    spec_cls = _spec_registry[spec_name]
    logger.debug("Decoding spec '%s' -> %s", spec_name, spec_cls.__name__)
    return spec_cls(**attrs)

