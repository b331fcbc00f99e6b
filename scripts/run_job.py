#!/usr/bin/env python3
"""Executa um job em lote do calendar relay fora do HTTP.

Uso:
    python scripts/run_job.py periodic-sync
    python scripts/run_job.py renew-channels
    python scripts/run_job.py daily-status-board --json
    python scripts/run_job.py daily-summary

Mesmas settings de ambiente do serviço (STORE_BACKEND, REDIS_URL, ...).
Código de saída 1 quando alguma assinatura falhou.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import TYPE_CHECKING

from app.bootstrap import initialize_app, validate_runtime_settings
from app.bootstrap.dependencies import (
    get_daily_status_board_job,
    get_daily_summary_job,
    get_periodic_sync_job,
    get_renew_channels_job,
)
from app.observability import correlation_scope

if TYPE_CHECKING:
    from collections.abc import Callable

    from app.use_cases.jobs import (
        DailyStatusBoardJob,
        DailySummaryJob,
        JobSummary,
        PeriodicSyncJob,
        RenewChannelsJob,
    )

JOBS: dict[
    str,
    Callable[[], PeriodicSyncJob | RenewChannelsJob | DailyStatusBoardJob | DailySummaryJob],
] = {
    "periodic-sync": get_periodic_sync_job,
    "renew-channels": get_renew_channels_job,
    "daily-status-board": get_daily_status_board_job,
    "daily-summary": get_daily_summary_job,
}


async def run_job(name: str) -> JobSummary:
    job = JOBS[name]()
    with correlation_scope():
        return await job.run()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("job", choices=sorted(JOBS), help="Job a executar.")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Imprime o resumo completo em JSON (padrao: linha resumida).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    initialize_app()
    validate_runtime_settings()
    summary = asyncio.run(run_job(args.job))
    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(
            f"[{summary.job}] succeeded={len(summary.succeeded)} "
            f"skipped={len(summary.skipped)} errors={len(summary.errors)}"
        )
    return 1 if summary.errors else 0


if __name__ == "__main__":
    sys.exit(main())
