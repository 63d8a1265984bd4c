"""
Identity registry: one self-managed identity record per principal.

A principal creates, updates and deletes only its own record (the caller
is the key). Anyone may read any record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from . import calls
from . import codec
from .clock import BlockClock, Clock
from .errors import CallResult, ErrorCode

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["name", "date-of-birth", "country", "created-at", "updated-at"]


# ---------------------------------------------------------------------------
# Record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IdentityRecord:
    """A registered identity. Heights come from the store's clock."""
    name: str
    date_of_birth: int
    country: str
    created_at: int
    updated_at: int

    def to_dict(self) -> dict:
        """Return the record keyed by its contract field names."""
        return {
            "name": self.name,
            "date-of-birth": self.date_of_birth,
            "country": self.country,
            "created-at": self.created_at,
            "updated-at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "IdentityRecord":
        return cls(
            name=data["name"],
            date_of_birth=data["date-of-birth"],
            country=data["country"],
            created_at=data["created-at"],
            updated_at=data["updated-at"],
        )


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class IdentityStore:
    """In-memory identity registry backed by a dict keyed by principal."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock if clock is not None else BlockClock()
        self._identities: dict[str, IdentityRecord] = {}

    def create_identity(
        self, sender: str, name: str, date_of_birth: int, country: str
    ) -> CallResult:
        """Register an identity for the calling principal.

        Fails with ALREADY_EXISTS when the sender already has one.
        """
        if sender in self._identities:
            logger.debug("create-identity rejected: %s already registered", sender)
            return CallResult.err(ErrorCode.ALREADY_EXISTS)

        height = self._clock()
        self._identities[sender] = IdentityRecord(
            name=name,
            date_of_birth=date_of_birth,
            country=country,
            created_at=height,
            updated_at=height,
        )
        logger.debug("identity created for %s at height %d", sender, height)
        return CallResult.ok()

    def update_identity(
        self, sender: str, name: str, date_of_birth: int, country: str
    ) -> CallResult:
        """Replace the caller's identity fields, keeping created_at.

        Fails with NOT_FOUND when the sender has no identity.
        """
        existing = self._identities.get(sender)
        if existing is None:
            logger.debug("update-identity rejected: %s not registered", sender)
            return CallResult.err(ErrorCode.NOT_FOUND)

        height = self._clock()
        self._identities[sender] = replace(
            existing,
            name=name,
            date_of_birth=date_of_birth,
            country=country,
            updated_at=height,
        )
        logger.debug("identity updated for %s at height %d", sender, height)
        return CallResult.ok()

    def delete_identity(self, sender: str) -> CallResult:
        """Remove the caller's identity. Fails with NOT_FOUND when absent."""
        if sender not in self._identities:
            logger.debug("delete-identity rejected: %s not registered", sender)
            return CallResult.err(ErrorCode.NOT_FOUND)
        del self._identities[sender]
        logger.debug("identity deleted for %s", sender)
        return CallResult.ok()

    def get_identity(self, principal: str) -> CallResult:
        """Read a principal's identity. The value is None when absent."""
        return CallResult.ok(self._identities.get(principal))

    def identity_exists(self, principal: str) -> CallResult:
        return CallResult.ok(principal in self._identities)

    def call(self, request: calls.Request, sender: str) -> CallResult:
        """Dispatch a typed request on behalf of sender.

        Requests addressed to the verification registry fail with
        UNKNOWN_METHOD.
        """
        if not isinstance(request, calls.IdentityRequest):
            logger.warning("identity registry has no method %s", request.method)
            return CallResult.err(ErrorCode.UNKNOWN_METHOD)
        return request.apply(self, sender)

    def __len__(self) -> int:
        return len(self._identities)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def serialize_identity(record: IdentityRecord) -> str:
    """Serialize an IdentityRecord to canonical JSON using contract field names."""
    return codec.canonicalize_json(record.to_dict())


def deserialize_identity(json_str: str) -> IdentityRecord:
    """Parse canonical identity JSON back into an IdentityRecord.

    Raises:
        ValueError: When the JSON is empty, malformed or missing fields.
    """
    parsed = codec.parse_object(json_str, "identity", REQUIRED_FIELDS)
    for field_name in ("date-of-birth", "created-at", "updated-at"):
        if not isinstance(parsed[field_name], int) or isinstance(parsed[field_name], bool):
            raise ValueError(f"Invalid identity JSON: {field_name} must be an integer")
    return IdentityRecord.from_dict(parsed)
