"""Testes da CLI de jobs em lote."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.use_cases.jobs import JobSummary
from scripts import run_job as run_job_module


@pytest.fixture
def job(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    fake = MagicMock()
    fake.run = AsyncMock(return_value=JobSummary(job="periodic-sync", succeeded=["sub-1"]))
    monkeypatch.setitem(run_job_module.JOBS, "periodic-sync", lambda: fake)
    monkeypatch.setattr(run_job_module, "initialize_app", lambda: None)
    monkeypatch.setattr(run_job_module, "validate_runtime_settings", lambda: None)
    return fake


def test_main_prints_summary_line(job: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
    assert run_job_module.main(["periodic-sync"]) == 0

    assert capsys.readouterr().out.strip() == "[periodic-sync] succeeded=1 skipped=0 errors=0"
    job.run.assert_awaited_once()


def test_main_json_output_and_failure_exit_code(
    job: MagicMock, capsys: pytest.CaptureFixture[str]
) -> None:
    summary = JobSummary(job="periodic-sync")
    summary.record_error("sub-1", RuntimeError("boom"))
    job.run = AsyncMock(return_value=summary)

    assert run_job_module.main(["periodic-sync", "--json"]) == 1

    payload = json.loads(capsys.readouterr().out)
    assert payload["details"]["errors"] == [{"subscription_id": "sub-1", "error": "boom"}]


def test_unknown_job_is_rejected() -> None:
    with pytest.raises(SystemExit):
        run_job_module.parse_args(["nope"])


def test_every_cron_job_is_available() -> None:
    assert sorted(run_job_module.JOBS) == [
        "daily-status-board",
        "daily-summary",
        "periodic-sync",
        "renew-channels",
    ]
    assert run_job_module.parse_args(["daily-summary"]).job == "daily-summary"
