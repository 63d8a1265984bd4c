"""
Contract call results and error codes.

Registry operations never raise for contract-level failures. They return a
CallResult carrying a success flag plus either a value or an ErrorCode,
mirroring the ``(ok ...)`` / ``(err ...)`` responses of the on-chain
contracts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Error codes returned by registry calls."""

    ALREADY_EXISTS = "ERR_ALREADY_EXISTS"
    NOT_FOUND = "ERR_NOT_FOUND"
    NOT_AUTHORIZED = "ERR_NOT_AUTHORIZED"
    UNKNOWN_METHOD = "ERR_UNKNOWN_METHOD"


class UnknownMethodError(ValueError):
    """Raised when a contract method name or its arguments cannot be parsed."""

    def __init__(self, message: str, method: str = ""):
        self.method = method
        super().__init__(message)


@dataclass(frozen=True)
class CallResult:
    """Outcome of a single registry call."""
    success: bool
    value: Any = None
    error: Optional[ErrorCode] = None

    @classmethod
    def ok(cls, value: Any = None) -> "CallResult":
        return cls(success=True, value=value)

    @classmethod
    def err(cls, error: ErrorCode) -> "CallResult":
        return cls(success=False, error=error)

    def to_dict(self) -> dict:
        """Render the result in the ``{success, value?, error?}`` wire shape.

        Record values are converted to their wire form (contract field
        names). A ``None`` value is omitted.
        """
        out: dict[str, Any] = {"success": self.success}
        if self.value is not None:
            value = self.value
            if hasattr(value, "to_dict"):
                value = value.to_dict()
            out["value"] = value
        if self.error is not None:
            out["error"] = self.error.value
        return out
