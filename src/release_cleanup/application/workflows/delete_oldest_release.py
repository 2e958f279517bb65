from dataclasses import dataclass
from datetime import datetime, timezone
from time import perf_counter
from typing import Sequence

from tqdm import tqdm

from src.config.logger_config import logger
from src.release_cleanup.application.contracts import WorkflowInput, WorkflowResult
from src.release_cleanup.application.ports import (
    ConsoleSessionPort,
    DeletionTriggerPort,
    PageTextProviderPort,
)
from src.release_cleanup.application.workflows.steps import (
    DeleteVersionStep,
    FindOldestVersionStep,
    NavigateToConsoleStep,
    WorkflowContext,
    WorkflowStep,
)

WORKFLOW_NAME = "Delete Oldest PyPI Version"
WORKFLOW_VERSION = "1.0.0"
WORKFLOW_TAGS = ("pypi", "package-management", "automation", "cleanup")


@dataclass(frozen=True)
class DeleteWorkflowConfig:
    show_progress: bool = True


class DeleteOldestReleaseWorkflow:
    def __init__(
        self,
        session: ConsoleSessionPort,
        page_source: PageTextProviderPort,
        deleter: DeletionTriggerPort,
        config: DeleteWorkflowConfig | None = None,
        steps: Sequence[WorkflowStep] | None = None,
    ) -> None:
        self.config = config or DeleteWorkflowConfig()
        self.steps: tuple[WorkflowStep, ...] = tuple(
            steps
            if steps is not None
            else (
                NavigateToConsoleStep(session),
                FindOldestVersionStep(page_source),
                DeleteVersionStep(deleter),
            )
        )

    async def run(self, workflow_input: WorkflowInput) -> WorkflowResult:
        started = perf_counter()
        started_at = datetime.now(timezone.utc).isoformat()
        context = WorkflowContext()
        completed: list[str] = []
        failed_step: str | None = None
        error: str | None = None

        logger.info(
            "Workflow started: name={}, package_name={}, dry_run={}, steps={}",
            WORKFLOW_NAME,
            workflow_input.package_name,
            workflow_input.dry_run,
            [step.step_id for step in self.steps],
        )
        with tqdm(
            total=len(self.steps),
            desc="Workflow steps",
            unit="step",
            leave=True,
            disable=not self.config.show_progress,
        ) as progress:
            for step in self.steps:
                logger.info("Step started: step_id={}, name={}", step.step_id, step.name)
                try:
                    update = await step.execute(workflow_input, context)
                except Exception as exc:
                    failed_step = step.step_id
                    error = str(exc) or type(exc).__name__
                    logger.error(
                        "Step failed: step_id={}, error_type={}, error={}",
                        step.step_id,
                        type(exc).__name__,
                        error,
                    )
                    break
                context.state.update(update or {})
                completed.append(step.step_id)
                progress.update(1)

        duration_ms = int((perf_counter() - started) * 1000)
        result = WorkflowResult(
            status="error" if failed_step else "success",
            state=dict(context.state),
            completed_steps=tuple(completed),
            duration_ms=duration_ms,
            started_at=started_at,
            finished_at=datetime.now(timezone.utc).isoformat(),
            failed_step=failed_step,
            error=error,
        )
        logger.info(
            "Workflow completed: status={}, completed_steps={}, failed_step={}, duration_ms={}",
            result.status,
            list(result.completed_steps),
            result.failed_step,
            result.duration_ms,
        )
        return result
