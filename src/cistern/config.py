"""Declared configuration models — container declarations and cloud environments."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, model_validator

from .errors import ValidationError
from .validation import AccessType, validate_access_type, validate_name

logger = logging.getLogger(__name__)


class Environment(BaseModel):
    """A cloud environment and the endpoint suffix its storage accounts live under."""

    model_config = {"frozen": True}

    name: str
    storage_endpoint_suffix: str

    @classmethod
    def named(cls, name: str) -> Environment:
        """Return a built-in environment by name (case-insensitive)."""
        try:
            return _ENVIRONMENTS[name.lower()]
        except KeyError:
            raise ValueError(f"Unknown environment: '{name}'") from None


_ENVIRONMENTS: dict[str, Environment] = {
    "public": Environment(name="public", storage_endpoint_suffix="core.windows.net"),
    "china": Environment(name="china", storage_endpoint_suffix="core.chinacloudapi.cn"),
    "usgovernment": Environment(name="usgovernment", storage_endpoint_suffix="core.usgovcloudapi.net"),
    "german": Environment(name="german", storage_endpoint_suffix="core.cloudapi.de"),
}

PUBLIC_CLOUD = _ENVIRONMENTS["public"]


class ContainerConfig(BaseModel):
    """Desired state of a storage container.

    Every field forces replacement: changing any of them means the container
    is deleted and created again rather than updated in place.
    """

    model_config = {"frozen": True, "extra": "forbid", "revalidate_instances": "always"}

    name: str
    resource_group_name: str
    storage_account_name: str
    container_access_type: str = AccessType.PRIVATE.value

    @model_validator(mode="after")
    def _check_rules(self) -> ContainerConfig:
        errors: dict[str, list[str]] = {}
        if name_errors := validate_name(self.name):
            errors["name"] = name_errors
        if access_error := validate_access_type(self.container_access_type):
            errors["container_access_type"] = [access_error]
        if errors:
            logger.debug("Rejected container config '%s': %s", self.name, errors)
            raise ValidationError(errors)
        return self

    @property
    def access_type(self) -> AccessType:
        return AccessType.parse(self.container_access_type)

    def requires_replacement(self, other: ContainerConfig) -> set[str]:
        """Return the fields that differ between two declarations."""
        changed: set[str] = set()
        for field in type(self).model_fields:
            mine: Any = getattr(self, field)
            theirs: Any = getattr(other, field)
            if field == "container_access_type":
                mine, theirs = mine.lower(), theirs.lower()
            if mine != theirs:
                changed.add(field)
        return changed
