"""Access-policy validator — naming and access-level rules for containers."""

from __future__ import annotations

import re
from enum import Enum

_NAME_PATTERN = re.compile(r"\$root|[0-9a-z-]+")

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 63


class AccessType(Enum):
    """Public access level of a container."""

    PRIVATE = "private"
    BLOB = "blob"
    CONTAINER = "container"

    @classmethod
    def parse(cls, value: str) -> AccessType:
        """Look up an access type by name, ignoring case."""
        return cls(value.lower())

    @property
    def header_value(self) -> str:
        """Value sent as the public-access header; private sends none."""
        if self is AccessType.PRIVATE:
            return ""
        return self.value


def validate_name(name: str, field: str = "name") -> list[str]:
    """Return every naming rule that `name` violates."""
    errors: list[str] = []
    if not _NAME_PATTERN.fullmatch(name):
        errors.append(f"only lowercase alphanumeric characters and hyphens allowed in '{field}': '{name}'")
    if len(name) < NAME_MIN_LENGTH or len(name) > NAME_MAX_LENGTH:
        errors.append(
            f"'{field}' must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters: '{name}'"
        )
    if name.startswith("-"):
        errors.append(f"'{field}' cannot begin with a hyphen: '{name}'")
    return errors


def validate_access_type(value: str) -> str | None:
    """Return an error message if `value` is not a known access type."""
    try:
        AccessType.parse(value)
    except ValueError:
        allowed = ", ".join(f"'{t.value}'" for t in AccessType)
        return f"container access type '{value}' is invalid, must be one of {allowed}"
    return None
