"""Ledger policy constants."""

from __future__ import annotations

from dataclasses import dataclass

from .config import Settings

UNASSIGNED_DEPARTMENT = "unassigned"
PRIVILEGED_DEPARTMENT = "SuperAdmin"
CIRCULATION_TARGET_KEY = "total_circulation_target"
DEFAULT_BALANCE = 20


@dataclass(frozen=True)
class LedgerPolicy:
    """Tunable limits applied to organic transfers and resets."""

    daily_send_limit: int = 3
    min_transfer_points: int = 1
    max_transfer_points: int = 3
    baseline_balance: int = DEFAULT_BALANCE

    @classmethod
    def from_settings(cls, settings: Settings) -> "LedgerPolicy":
        return cls(
            daily_send_limit=settings.daily_send_limit,
            min_transfer_points=settings.min_transfer_points,
            max_transfer_points=settings.max_transfer_points,
            baseline_balance=settings.baseline_balance,
        )


DEFAULT_POLICY = LedgerPolicy()
