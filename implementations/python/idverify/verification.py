"""
Verification registry: an owner-managed verifier allow-list and an
append-only ledger of credential verifications.

The contract owner authorizes and revokes verifiers. Authorized verifiers
record verifications, each assigned the next integer id (starting at 1).
Records are never modified or removed, and ids are never reused.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from . import calls
from . import codec
from . import config
from .clock import BlockClock, Clock
from .errors import CallResult, ErrorCode

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ["verifier", "credential-id", "status", "verified-at"]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VerificationRecord:
    """An attestation by a verifier about a credential's status."""
    verifier: str
    credential_id: int
    status: str
    verified_at: int

    def to_dict(self) -> dict:
        """Return the record keyed by its contract field names."""
        return {
            "verifier": self.verifier,
            "credential-id": self.credential_id,
            "status": self.status,
            "verified-at": self.verified_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VerificationRecord":
        return cls(
            verifier=data["verifier"],
            credential_id=data["credential-id"],
            status=data["status"],
            verified_at=data["verified-at"],
        )


@dataclass(frozen=True)
class LatestVerification:
    """A verification record together with its id.

    The all-zero instance (see EMPTY_LATEST_VERIFICATION) stands in when a
    credential has never been verified.
    """
    verification_id: int
    verifier: str
    credential_id: int
    status: str
    verified_at: int

    @classmethod
    def from_record(cls, verification_id: int, record: VerificationRecord) -> "LatestVerification":
        return cls(
            verification_id=verification_id,
            verifier=record.verifier,
            credential_id=record.credential_id,
            status=record.status,
            verified_at=record.verified_at,
        )

    def to_dict(self) -> dict:
        return {
            "verification-id": self.verification_id,
            "verifier": self.verifier,
            "credential-id": self.credential_id,
            "status": self.status,
            "verified-at": self.verified_at,
        }


EMPTY_LATEST_VERIFICATION = LatestVerification(
    verification_id=0, verifier="", credential_id=0, status="", verified_at=0
)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------

class VerificationStore:
    """In-memory verification registry.

    Args:
        owner: Principal allowed to authorize and revoke verifiers.
            Defaults to ``config.CONTRACT_OWNER``.
        clock: Zero-argument callable returning the current block height.
    """

    def __init__(self, owner: Optional[str] = None, clock: Optional[Clock] = None) -> None:
        self._owner = owner if owner is not None else config.CONTRACT_OWNER
        if not isinstance(self._owner, str) or self._owner.strip() == "":
            raise ValueError("VerificationStore(): owner must be a non-empty string")
        self._clock: Clock = clock if clock is not None else BlockClock()
        self._verifiers: dict[str, bool] = {}
        self._verifications: dict[int, VerificationRecord] = {}
        self._nonce = 0

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def last_verification_id(self) -> int:
        """The most recently allocated verification id (0 before the first)."""
        return self._nonce

    # -- verifier allow-list ------------------------------------------------

    def authorize_verifier(self, sender: str, verifier_id: str) -> CallResult:
        """Allow verifier_id to record verifications. Owner only."""
        return self._set_authorization(sender, verifier_id, True)

    def revoke_verifier_authorization(self, sender: str, verifier_id: str) -> CallResult:
        """Stop verifier_id from recording verifications. Owner only."""
        return self._set_authorization(sender, verifier_id, False)

    def _set_authorization(self, sender: str, verifier_id: str, authorized: bool) -> CallResult:
        if sender != self._owner:
            logger.warning(
                "%s rejected: %s is not the contract owner",
                "authorize-verifier" if authorized else "revoke-verifier-authorization",
                sender,
            )
            return CallResult.err(ErrorCode.NOT_AUTHORIZED)
        self._verifiers[verifier_id] = authorized
        logger.info(
            "verifier %s %s", verifier_id, "authorized" if authorized else "revoked"
        )
        return CallResult.ok()

    def is_authorized_verifier(self, verifier_id: str) -> CallResult:
        return CallResult.ok(self._verifiers.get(verifier_id, False))

    # -- verification ledger ------------------------------------------------

    def verify_credential(self, sender: str, credential_id: int, status: str) -> CallResult:
        """Record a verification of credential_id by the calling verifier.

        Fails with NOT_AUTHORIZED unless the sender is an authorized
        verifier; no id is consumed in that case. On success the value is
        the new verification id.
        """
        if not self._verifiers.get(sender, False):
            logger.warning("verify-credential rejected: %s is not an authorized verifier", sender)
            return CallResult.err(ErrorCode.NOT_AUTHORIZED)

        self._nonce += 1
        verification_id = self._nonce
        self._verifications[verification_id] = VerificationRecord(
            verifier=sender,
            credential_id=credential_id,
            status=status,
            verified_at=self._clock(),
        )
        logger.debug(
            "verification %d recorded by %s for credential %s",
            verification_id, sender, credential_id,
        )
        return CallResult.ok(verification_id)

    def get_verification(self, verification_id: int) -> CallResult:
        """Read a verification by id. The value is None when absent."""
        return CallResult.ok(self._verifications.get(verification_id))

    def get_latest_verification(self, credential_id: int) -> CallResult:
        """Find the most recent verification of a credential.

        The record with the greatest verified_at wins; among records with the
        same verified_at, the highest verification id wins. When the
        credential has no verifications the value is
        EMPTY_LATEST_VERIFICATION.
        """
        latest_id = 0
        latest: Optional[VerificationRecord] = None
        for verification_id, record in self._verifications.items():
            if record.credential_id != credential_id:
                continue
            if latest is None or (record.verified_at, verification_id) > (latest.verified_at, latest_id):
                latest_id, latest = verification_id, record

        if latest is None:
            return CallResult.ok(EMPTY_LATEST_VERIFICATION)
        return CallResult.ok(LatestVerification.from_record(latest_id, latest))

    def call(self, request: calls.Request, sender: str) -> CallResult:
        """Dispatch a typed request on behalf of sender.

        Requests addressed to the identity registry fail with UNKNOWN_METHOD.
        """
        if not isinstance(request, calls.VerificationRequest):
            logger.warning("verification registry has no method %s", request.method)
            return CallResult.err(ErrorCode.UNKNOWN_METHOD)
        return request.apply(self, sender)

    def __len__(self) -> int:
        return len(self._verifications)


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def serialize_verification(record: VerificationRecord) -> str:
    """Serialize a VerificationRecord to canonical JSON using contract field names."""
    return codec.canonicalize_json(record.to_dict())


def deserialize_verification(json_str: str) -> VerificationRecord:
    """Parse canonical verification JSON back into a VerificationRecord.

    Raises:
        ValueError: When the JSON is empty, malformed or missing fields.
    """
    parsed = codec.parse_object(json_str, "verification", REQUIRED_FIELDS)
    for field_name in ("credential-id", "verified-at"):
        if not isinstance(parsed[field_name], int) or isinstance(parsed[field_name], bool):
            raise ValueError(f"Invalid verification JSON: {field_name} must be an integer")
    return VerificationRecord.from_dict(parsed)
