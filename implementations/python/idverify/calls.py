"""
Typed registry calls.

Each contract method is a frozen request dataclass carrying its arguments.
Stores dispatch requests through ``store.call(request, sender)``; the
string-based ``contract_call`` boundary parses a method name and positional
argument list into a request first.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, ClassVar, Union

from .errors import CallResult, ErrorCode, UnknownMethodError

if TYPE_CHECKING:
    from .identity import IdentityStore
    from .verification import VerificationStore

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Request base classes
# ---------------------------------------------------------------------------

class IdentityRequest:
    """A call addressed to the identity registry."""
    method: ClassVar[str]

    def apply(self, store: "IdentityStore", sender: str) -> CallResult:
        raise NotImplementedError


class VerificationRequest:
    """A call addressed to the verification registry."""
    method: ClassVar[str]

    def apply(self, store: "VerificationStore", sender: str) -> CallResult:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Identity registry calls
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CreateIdentity(IdentityRequest):
    method: ClassVar[str] = "create-identity"
    name: str
    date_of_birth: int
    country: str

    def apply(self, store, sender):
        return store.create_identity(sender, self.name, self.date_of_birth, self.country)


@dataclass(frozen=True)
class UpdateIdentity(IdentityRequest):
    method: ClassVar[str] = "update-identity"
    name: str
    date_of_birth: int
    country: str

    def apply(self, store, sender):
        return store.update_identity(sender, self.name, self.date_of_birth, self.country)


@dataclass(frozen=True)
class DeleteIdentity(IdentityRequest):
    method: ClassVar[str] = "delete-identity"

    def apply(self, store, sender):
        return store.delete_identity(sender)


@dataclass(frozen=True)
class GetIdentity(IdentityRequest):
    method: ClassVar[str] = "get-identity"
    principal: str

    def apply(self, store, sender):
        return store.get_identity(self.principal)


@dataclass(frozen=True)
class IdentityExists(IdentityRequest):
    method: ClassVar[str] = "identity-exists"
    principal: str

    def apply(self, store, sender):
        return store.identity_exists(self.principal)


# ---------------------------------------------------------------------------
# Verification registry calls
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AuthorizeVerifier(VerificationRequest):
    method: ClassVar[str] = "authorize-verifier"
    verifier_id: str

    def apply(self, store, sender):
        return store.authorize_verifier(sender, self.verifier_id)


@dataclass(frozen=True)
class RevokeVerifierAuthorization(VerificationRequest):
    method: ClassVar[str] = "revoke-verifier-authorization"
    verifier_id: str

    def apply(self, store, sender):
        return store.revoke_verifier_authorization(sender, self.verifier_id)


@dataclass(frozen=True)
class VerifyCredential(VerificationRequest):
    method: ClassVar[str] = "verify-credential"
    credential_id: int
    status: str

    def apply(self, store, sender):
        return store.verify_credential(sender, self.credential_id, self.status)


@dataclass(frozen=True)
class GetVerification(VerificationRequest):
    method: ClassVar[str] = "get-verification"
    verification_id: int

    def apply(self, store, sender):
        return store.get_verification(self.verification_id)


@dataclass(frozen=True)
class IsAuthorizedVerifier(VerificationRequest):
    method: ClassVar[str] = "is-authorized-verifier"
    verifier_id: str

    def apply(self, store, sender):
        return store.is_authorized_verifier(self.verifier_id)


@dataclass(frozen=True)
class GetLatestVerification(VerificationRequest):
    method: ClassVar[str] = "get-latest-verification"
    credential_id: int

    def apply(self, store, sender):
        return store.get_latest_verification(self.credential_id)


Request = Union[IdentityRequest, VerificationRequest]

METHODS: dict[str, type] = {
    request_type.method: request_type
    for request_type in (
        CreateIdentity,
        UpdateIdentity,
        DeleteIdentity,
        GetIdentity,
        IdentityExists,
        AuthorizeVerifier,
        RevokeVerifierAuthorization,
        VerifyCredential,
        GetVerification,
        IsAuthorizedVerifier,
        GetLatestVerification,
    )
}


# ---------------------------------------------------------------------------
# String-method boundary
# ---------------------------------------------------------------------------

def parse_call(method: str, args: list) -> Request:
    """Build a typed request from a contract method name and its arguments.

    Args:
        method: Contract method name, e.g. ``"verify-credential"``.
        args: Positional arguments in contract order.

    Returns:
        The request dataclass instance.

    Raises:
        UnknownMethodError: When the method is not known or the number of
            arguments does not match.
    """
    request_type = METHODS.get(method)
    if request_type is None:
        raise UnknownMethodError(f"Unknown method: {method!r}", method)
    expected = len(fields(request_type))
    if len(args) != expected:
        raise UnknownMethodError(
            f"{method} expects {expected} argument(s), got {len(args)}", method
        )
    return request_type(*args)


def contract_call(
    store: Union["IdentityStore", "VerificationStore"],
    method: str,
    args: list,
    sender: str,
) -> CallResult:
    """Invoke a registry method by name, as a contract client would.

    Unknown methods (including methods of the other registry) produce a
    failed result with UNKNOWN_METHOD rather than an exception.
    """
    try:
        request = parse_call(method, args)
    except UnknownMethodError as err:
        logger.warning("contract call rejected: %s", err)
        return CallResult.err(ErrorCode.UNKNOWN_METHOD)
    return store.call(request, sender)
