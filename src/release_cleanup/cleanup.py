from __future__ import annotations
import asyncio
from contextlib import AsyncExitStack
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.release_cleanup.application.contracts import RunReportRecord, WorkflowInput, WorkflowResult
from src.release_cleanup.application.use_cases.delete_oldest_release import (
    DeleteOldestReleaseCommand,
    DeleteOldestReleaseUseCase,
)
from src.release_cleanup.application.workflows.delete_oldest_release import (
    WORKFLOW_NAME,
    WORKFLOW_TAGS,
    WORKFLOW_VERSION,
    DeleteOldestReleaseWorkflow,
    DeleteWorkflowConfig,
)
from src.release_cleanup.infrastructure.console.playwright_console import (
    BrowserConsoleConfig,
    PlaywrightReleaseConsole,
)
from src.release_cleanup.infrastructure.console.public_history_source import PublicHistorySource
from src.release_cleanup.infrastructure.sinks.run_report_sink import JsonRunReportSink


def build_workflow_input(settings: Settings) -> WorkflowInput:
    return WorkflowInput(
        package_name=settings.package_name,
        username=settings.username,
        password=settings.password,
        dry_run=settings.dry_run,
    )


def build_console(settings: Settings) -> PlaywrightReleaseConsole | PublicHistorySource:
    if settings.page_source == "browser":
        return PlaywrightReleaseConsole(
            BrowserConsoleConfig(headless=settings.headless, base_url=settings.registry_base_url)
        )
    if settings.page_source == "http":
        if not settings.dry_run:
            raise ValueError("PAGE_SOURCE=http is read-only and requires DRY_RUN=true")
        return PublicHistorySource(base_url=settings.registry_base_url)
    raise ValueError(f"Unsupported page source: {settings.page_source}")


async def run_cleanup_async(
    settings: Settings,
    *,
    console: Any | None = None,
    report_dir: str | Path | None = None,
    show_progress: bool = True,
) -> WorkflowResult:
    workflow_input = build_workflow_input(settings)
    run_id = _build_run_id()

    async with AsyncExitStack() as stack:
        if console is None:
            console = await stack.enter_async_context(build_console(settings))
        workflow = DeleteOldestReleaseWorkflow(
            session=console,
            page_source=console,
            deleter=console,
            config=DeleteWorkflowConfig(show_progress=show_progress),
        )
        use_case = DeleteOldestReleaseUseCase(workflow=workflow)
        result = await use_case.execute(
            DeleteOldestReleaseCommand(workflow_input=workflow_input, page_source=settings.page_source)
        )

    report_sink = JsonRunReportSink(report_dir if report_dir is not None else settings.run_report_dir)
    report_sink.write_report(
        RunReportRecord(
            run_id=run_id,
            workflow_name=WORKFLOW_NAME,
            workflow_version=WORKFLOW_VERSION,
            package_name=workflow_input.package_name,
            dry_run=workflow_input.dry_run,
            page_source=settings.page_source,
            result=result,
            tags=WORKFLOW_TAGS,
        )
    )
    return result


def run_cleanup(
    settings: Settings,
    *,
    report_dir: str | Path | None = None,
    show_progress: bool = True,
) -> WorkflowResult:
    return asyncio.run(
        run_cleanup_async(
            settings,
            report_dir=report_dir,
            show_progress=show_progress,
        )
    )


def _build_run_id() -> str:
    return datetime.now(timezone.utc).strftime("run_%Y%m%dT%H%M%S%fZ")
