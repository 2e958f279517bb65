from dataclasses import dataclass, field
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class WorkflowInput(BaseModel):
    """Validated inputs of one cleanup run."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    package_name: str = Field(..., description="Package name on the registry, e.g. terminator-py")
    username: str = Field(..., description="Registry account username")
    password: SecretStr = Field(..., description="Registry password or API token")
    dry_run: bool = Field(default=False, description="If true, only identify the version without deleting")

    @field_validator("package_name")
    @classmethod
    def _package_name_required(cls, value: str) -> str:
        if not value:
            raise ValueError("Package name is required")
        return value

    @field_validator("username")
    @classmethod
    def _username_required(cls, value: str) -> str:
        if not value:
            raise ValueError("PyPI username is required")
        return value

    @field_validator("password")
    @classmethod
    def _password_required(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("PyPI password/token is required")
        return value


WorkflowStatus = Literal["success", "error"]


@dataclass(frozen=True)
class WorkflowResult:
    status: WorkflowStatus
    state: dict[str, Any]
    completed_steps: tuple[str, ...]
    duration_ms: int
    started_at: str
    finished_at: str
    failed_step: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "state": self.state,
            "completed_steps": list(self.completed_steps),
            "failed_step": self.failed_step,
            "error": self.error,
            "duration_ms": self.duration_ms,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
        }


@dataclass(frozen=True)
class RunReportRecord:
    run_id: str
    workflow_name: str
    workflow_version: str
    package_name: str
    dry_run: bool
    page_source: str
    result: WorkflowResult
    tags: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "workflow_name": self.workflow_name,
            "workflow_version": self.workflow_version,
            "package_name": self.package_name,
            "dry_run": self.dry_run,
            "page_source": self.page_source,
            "tags": list(self.tags),
            "result": self.result.to_dict(),
        }
