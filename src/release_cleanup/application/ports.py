from typing import Protocol, runtime_checkable

from src.release_cleanup.application.contracts import RunReportRecord
from src.release_cleanup.domain.models import DeletionResult, PageText


@runtime_checkable
class ConsoleSessionPort(Protocol):
    async def open_manage_page(self, package_name: str) -> str: ...
    """Open the release management page and return its URL."""

    async def log_in_if_required(self, username: str, password: str) -> bool: ...
    """Authenticate when a login control is shown. Returns True if a login happened."""

    async def verify_manage_page(self) -> bool: ...
    """Check that the release management page is displayed."""


@runtime_checkable
class PageTextProviderPort(Protocol):
    async def get_page_text(self) -> PageText: ...
    """Return the currently rendered page content."""


@runtime_checkable
class DeletionTriggerPort(Protocol):
    async def trigger_deletion(self, version: str) -> DeletionResult: ...
    """Locate the entry for ``version`` and confirm its deletion."""


@runtime_checkable
class RunReportSinkPort(Protocol):
    def write_report(self, report: RunReportRecord) -> str: ...
    """Persist the run report and return where it was written."""
