"""Property projector — map a listed container onto its output attributes."""

from __future__ import annotations

from typing import Any

from .gateway import ContainerProperties

PROPERTY_FIELDS = ("last_modified", "lease_status", "lease_state", "lease_duration")


def project(props: ContainerProperties) -> dict[str, Any]:
    return {field: getattr(props, field) for field in PROPERTY_FIELDS}
