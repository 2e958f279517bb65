"""Infrastructure adapters for release cleanup."""

from src.release_cleanup.infrastructure.console.playwright_console import (
    BrowserConsoleConfig,
    PlaywrightReleaseConsole,
)
from src.release_cleanup.infrastructure.console.public_history_source import PublicHistorySource
from src.release_cleanup.infrastructure.sinks.run_report_sink import JsonRunReportSink

__all__ = ["BrowserConsoleConfig", "JsonRunReportSink", "PlaywrightReleaseConsole", "PublicHistorySource"]
