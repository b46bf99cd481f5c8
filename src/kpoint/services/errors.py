"""Rule violations raised by the ledger services."""

from __future__ import annotations


class LedgerRuleViolation(Exception):
    """Raised when business constraints are violated.

    ``kind`` is a stable machine-readable identifier, ``detail`` the message
    shown to people.
    """

    kind = "invalid_request"
    default_status_code = 400

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code or self.default_status_code

    def as_detail(self) -> dict[str, str]:
        return {"kind": self.kind, "message": self.detail}


class Forbidden(LedgerRuleViolation):
    kind = "forbidden"
    default_status_code = 403


class InvalidRequest(LedgerRuleViolation):
    kind = "invalid_request"
    default_status_code = 400


class InsufficientBalance(LedgerRuleViolation):
    kind = "insufficient_balance"
    default_status_code = 400


class RateLimited(LedgerRuleViolation):
    kind = "rate_limited"
    default_status_code = 429


class NotFound(LedgerRuleViolation):
    kind = "not_found"
    default_status_code = 404


class Conflict(LedgerRuleViolation):
    kind = "conflict"
    default_status_code = 409


class LedgerInternalError(LedgerRuleViolation):
    kind = "internal"
    default_status_code = 500
