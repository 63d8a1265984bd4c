"""
idverify: in-memory identity and credential verification registries.

Provides the identity registry, the verification registry with its
owner-managed verifier allow-list, typed contract calls, a block-height
clock, and canonical JSON encoding for records.
"""

from . import calls
from . import clock
from . import codec
from . import config
from . import errors
from . import identity
from . import verification

from .calls import contract_call, parse_call
from .clock import BlockClock
from .errors import CallResult, ErrorCode, UnknownMethodError
from .identity import IdentityRecord, IdentityStore
from .verification import LatestVerification, VerificationRecord, VerificationStore

__version__ = "1.0.0"

__all__ = [
    "calls",
    "clock",
    "codec",
    "config",
    "errors",
    "identity",
    "verification",
    "BlockClock",
    "CallResult",
    "ErrorCode",
    "IdentityRecord",
    "IdentityStore",
    "LatestVerification",
    "UnknownMethodError",
    "VerificationRecord",
    "VerificationStore",
    "contract_call",
    "parse_call",
]
