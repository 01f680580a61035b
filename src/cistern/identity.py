"""Identity codec — convert container ids to and from their components.

The persisted id of a container is its URI:

    https://{account}.{endpoint_suffix}/{container}
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlsplit

from .errors import MalformedIdentity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceIdentity:
    """The durable key of a storage container."""

    account_name: str
    container_name: str

    def to_uri(self, endpoint_suffix: str) -> str:
        return encode(self.account_name, self.container_name, endpoint_suffix)


def encode(account_name: str, container_name: str, endpoint_suffix: str) -> str:
    """Build the id URI for a container."""
    return f"https://{account_name}.{endpoint_suffix}/{container_name}"


def decode(uri: str, endpoint_suffix: str) -> ResourceIdentity:
    """Parse an id URI into a ResourceIdentity.

    Raises MalformedIdentity if the value is not an absolute URI, if the host
    is not under the endpoint suffix, or if the path has no segments.
    """
    try:
        parts = urlsplit(uri)
        _ = parts.port  # raises on a malformed port
    except ValueError as exc:
        raise MalformedIdentity(f"Error parsing '{uri}' as URI: {exc}") from exc

    # netloc keeps the case of the account; hostname would lowercase it
    host = parts.netloc.rpartition("@")[2].partition(":")[0]
    if parts.scheme not in ("https", "http") or not host:
        raise MalformedIdentity(f"Error parsing '{uri}' as URI: expected an absolute URL")

    suffix = f".{endpoint_suffix}"
    if not host.lower().endswith(suffix.lower()) or len(host) == len(suffix):
        raise MalformedIdentity(f"Host '{host}' of '{uri}' is not under '{endpoint_suffix}'")
    account_name = host[: -len(suffix)]

    segments = [s for s in parts.path.split("/") if s]
    if not segments:
        raise MalformedIdentity(f"Expected at least one path segment in '{uri}'")

    logger.debug("Decoded '%s' -> account '%s', container '%s'", uri, account_name, segments[0])
    return ResourceIdentity(account_name=account_name, container_name=segments[0])
