from dataclasses import dataclass

from src.config.logger_config import logger
from src.release_cleanup.application.contracts import WorkflowInput, WorkflowResult
from src.release_cleanup.application.workflows.delete_oldest_release import DeleteOldestReleaseWorkflow


@dataclass(frozen=True)
class DeleteOldestReleaseCommand:
    workflow_input: WorkflowInput
    page_source: str = "browser"


class DeleteOldestReleaseUseCase:
    def __init__(self, workflow: DeleteOldestReleaseWorkflow) -> None:
        self.workflow = workflow

    async def execute(self, command: DeleteOldestReleaseCommand) -> WorkflowResult:
        logger.info(
            "Delete oldest release use case started: package_name={}, username={}, dry_run={}, page_source={}",
            command.workflow_input.package_name,
            command.workflow_input.username,
            command.workflow_input.dry_run,
            command.page_source,
        )
        result = await self.workflow.run(command.workflow_input)
        logger.info(
            "Delete oldest release use case completed: status={}, oldest_version={}, deleted_version={}, total_versions={}",
            result.status,
            result.state.get("oldest_version"),
            result.state.get("deleted_version"),
            result.state.get("total_versions"),
        )
        return result
