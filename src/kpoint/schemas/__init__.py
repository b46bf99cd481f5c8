"""Public schema exports."""

from .account import (
	AccountCreate,
	AccountRead,
	AccountSummary,
	AccountUpdate,
	AccountWithStats,
	BalanceOverride,
	BalanceUpdate,
	NameUpdate,
	RoleUpdate,
)
from .admin import CirculationReceipt, CirculationUpdate, ResetSummary, SystemStats
from .department import (
	AdjustmentCreate,
	AdjustmentRead,
	DepartmentRanking,
	DepartmentRead,
	DistributionCreate,
	DistributionReceipt,
	DistributionShare,
	TeamDistributionCreate,
)
from .transfer import TransferCreate, TransferRead

__all__ = [
	"AccountCreate",
	"AccountRead",
	"AccountSummary",
	"AccountUpdate",
	"AccountWithStats",
	"AdjustmentCreate",
	"AdjustmentRead",
	"BalanceOverride",
	"BalanceUpdate",
	"CirculationReceipt",
	"CirculationUpdate",
	"DepartmentRanking",
	"DepartmentRead",
	"DistributionCreate",
	"DistributionReceipt",
	"DistributionShare",
	"NameUpdate",
	"ResetSummary",
	"RoleUpdate",
	"SystemStats",
	"TeamDistributionCreate",
	"TransferCreate",
	"TransferRead",
]
