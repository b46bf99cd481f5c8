"""Service layer exports."""

from . import (
	account_service,
	circulation_service,
	daily_limit_service,
	department_service,
	distribution_service,
	override_service,
	reset_service,
	transfer_service,
)

__all__ = [
	"account_service",
	"circulation_service",
	"daily_limit_service",
	"department_service",
	"distribution_service",
	"override_service",
	"reset_service",
	"transfer_service",
]
