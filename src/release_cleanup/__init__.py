"""Delete the oldest release of a registry package through its web console."""

from src.release_cleanup.cleanup import run_cleanup, run_cleanup_async
from src.release_cleanup.domain.comparator import compare_versions, oldest
from src.release_cleanup.domain.errors import ExtractionEmpty
from src.release_cleanup.domain.extractor import extract_versions

__all__ = [
    "compare_versions",
    "extract_versions",
    "ExtractionEmpty",
    "oldest",
    "run_cleanup",
    "run_cleanup_async",
]
