from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    MISCONFIGURED = "misconfigured"
    RATE_LIMITED = "rate_limited"
    PAYMENT_REQUIRED = "payment_required"
    UPSTREAM_FAILURE = "upstream_failure"
    UNPARSABLE_RESPONSE = "unparsable_response"


class ClassificationError(Exception):
    """
    Failure of a single classification request.

    Args:
        kind: Which failure occurred
        message: Human-readable message, safe to return to the caller
        detail: Optional diagnostics (upstream status/body, raw model reply)
    """

    def __init__(self, kind: ErrorKind, message: str, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail or {}

    def __repr__(self) -> str:
        return f"ClassificationError(kind={self.kind.value!r}, message={self.message!r})"
