"""Jobs em lote disparados por cron (HTTP) ou pela CLI."""

from .daily_status_board import DailyStatusBoardJob
from .daily_summary import DailySummaryJob
from .periodic_sync import PeriodicSyncJob
from .renew_channels import RenewChannelsJob, needs_renewal
from .summary import JobSummary

__all__ = [
    "DailyStatusBoardJob",
    "DailySummaryJob",
    "JobSummary",
    "PeriodicSyncJob",
    "RenewChannelsJob",
    "needs_renewal",
]
