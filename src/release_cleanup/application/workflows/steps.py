from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Protocol

from src.config.logger_config import logger
from src.release_cleanup.application.contracts import WorkflowInput
from src.release_cleanup.application.ports import (
    ConsoleSessionPort,
    DeletionTriggerPort,
    PageTextProviderPort,
)
from src.release_cleanup.domain.comparator import sort_versions
from src.release_cleanup.domain.errors import WorkflowStepError
from src.release_cleanup.domain.extractor import extract_versions_with_strategy


@dataclass
class WorkflowContext:
    state: dict[str, Any] = field(default_factory=dict)


class WorkflowStep(Protocol):
    step_id: str
    name: str
    description: str

    async def execute(self, workflow_input: WorkflowInput, context: WorkflowContext) -> dict[str, Any]: ...


class NavigateToConsoleStep:
    step_id = "navigate_to_console"
    name = "Navigate to PyPI and Login"
    description = "Opens the package release management page and handles login if needed"

    def __init__(self, session: ConsoleSessionPort) -> None:
        self.session = session

    async def execute(self, workflow_input: WorkflowInput, context: WorkflowContext) -> dict[str, Any]:
        package_name = workflow_input.package_name
        manage_url = await self.session.open_manage_page(package_name)
        logger.info("Opened release management page: package_name={}, url={}", package_name, manage_url)

        logged_in = await self.session.log_in_if_required(
            workflow_input.username,
            workflow_input.password.get_secret_value(),
        )
        if logged_in:
            logger.info("Login completed, reopening release management page")
            manage_url = await self.session.open_manage_page(package_name)
        else:
            logger.info("Already logged in or login not required")

        on_manage_page = await self.session.verify_manage_page()
        if on_manage_page:
            logger.info("Successfully navigated to package management page")
        else:
            logger.warning("Could not verify manage page, continuing anyway")

        return {
            "logged_in": True,
            "on_manage_page": on_manage_page,
            "package_name": package_name,
            "manage_url": manage_url,
        }


class FindOldestVersionStep:
    step_id = "find_oldest_version"
    name = "Find Oldest Version"
    description = "Locates the oldest version in the releases list"

    def __init__(self, page_source: PageTextProviderPort) -> None:
        self.page_source = page_source

    async def execute(self, workflow_input: WorkflowInput, context: WorkflowContext) -> dict[str, Any]:
        page_text = await self.page_source.get_page_text()
        strategy, versions = extract_versions_with_strategy(page_text)
        logger.info(
            "Found {} versions using strategy={}: {}",
            len(versions),
            strategy,
            ", ".join(versions.raws),
        )

        ordered = sort_versions(versions)
        oldest_version = ordered[0].raw
        logger.info("Identified oldest version: {}", oldest_version)
        return {
            "oldest_version": oldest_version,
            "total_versions": len(versions),
            "all_versions": [token.raw for token in ordered],
            "extraction_strategy": strategy,
        }


class DeleteVersionStep:
    step_id = "delete_version"
    name = "Delete Oldest Version"
    description = "Deletes the oldest version through the registry web interface"

    def __init__(self, deleter: DeletionTriggerPort) -> None:
        self.deleter = deleter

    async def execute(self, workflow_input: WorkflowInput, context: WorkflowContext) -> dict[str, Any]:
        oldest_version = context.state.get("oldest_version")
        if not oldest_version:
            raise WorkflowStepError(self.step_id, "Oldest version not found in context")

        if workflow_input.dry_run:
            logger.info("Dry run: version {} identified but NOT deleted", oldest_version)
            return {"dry_run_skipped": True, "success": True}

        logger.info("Preparing to delete version: {}", oldest_version)
        result = await self.deleter.trigger_deletion(oldest_version)
        if result.warning:
            logger.warning("Deletion of {} finished with warning: {}", oldest_version, result.warning)
        if result.confirmed:
            logger.info("Successfully deleted version {} via {}", oldest_version, result.method)
        else:
            logger.warning("Deletion of {} via {} was not confirmed", oldest_version, result.method)
        return {
            "deleted_version": result.version,
            "deletion_method": result.method,
            "deletion_confirmed": result.confirmed,
            "deletion_timestamp": datetime.now(timezone.utc).isoformat(),
            "success": True,
        }
