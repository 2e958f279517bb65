class ReleaseCleanupError(Exception):
    """Base error for the release cleanup tool."""


class ExtractionEmpty(ReleaseCleanupError):
    """No version-like token was found by any extraction strategy."""

    def __init__(self, message: str = "No versions found on the page") -> None:
        super().__init__(message)


class DeletionFailed(ReleaseCleanupError):
    pass


class ConsoleUnavailable(ReleaseCleanupError):
    pass


class WorkflowStepError(ReleaseCleanupError):
    def __init__(self, step_id: str, message: str) -> None:
        super().__init__(message)
        self.step_id = step_id
