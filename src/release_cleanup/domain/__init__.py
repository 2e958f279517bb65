"""Version extraction and ordering for release cleanup."""

from src.release_cleanup.domain.comparator import (
    compare_versions,
    oldest,
    oldest_version,
    sort_versions,
    version_sort_key,
)
from src.release_cleanup.domain.errors import (
    ConsoleUnavailable,
    DeletionFailed,
    ExtractionEmpty,
    ReleaseCleanupError,
    WorkflowStepError,
)
from src.release_cleanup.domain.extractor import extract_versions, snapshot_from_html
from src.release_cleanup.domain.models import (
    DeletionResult,
    PageSnapshot,
    PageText,
    VersionSet,
    VersionToken,
    parse_fields,
)

__all__ = [
    "compare_versions",
    "ConsoleUnavailable",
    "DeletionFailed",
    "DeletionResult",
    "extract_versions",
    "ExtractionEmpty",
    "oldest",
    "oldest_version",
    "PageSnapshot",
    "PageText",
    "parse_fields",
    "ReleaseCleanupError",
    "snapshot_from_html",
    "sort_versions",
    "version_sort_key",
    "VersionSet",
    "VersionToken",
    "WorkflowStepError",
]
