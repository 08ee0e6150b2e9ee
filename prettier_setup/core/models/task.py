"""
Pending task and TaskReceipt models — the deferred-work contract.

The pipeline never runs external tools itself.  It returns
PendingTasks; the caller hands them to a runner after the tree has
been committed, and the runner returns TaskReceipts.  Never exceptions.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


PackageManager = Literal["npm", "yarn", "pnpm"]


class PendingTask(BaseModel):
    """Work requested by a pipeline step, executed after the pipeline."""

    kind: Literal["node-package-install"] = "node-package-install"
    working_directory: str = "."
    package_manager: PackageManager | None = None   # None = detect from lock files


class TaskReceipt(BaseModel):
    """Result of running a PendingTask.

    The runner NEVER raises — failures are captured here.
    """

    kind: str
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    command: list[str] = Field(default_factory=list)
    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the task succeeded."""
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        """Whether the task failed."""
        return self.status == "failed"

    @classmethod
    def success(cls, kind: str, output: str = "", **kwargs: Any) -> TaskReceipt:
        """Create a success receipt."""
        return cls(kind=kind, status="ok", output=output, **kwargs)

    @classmethod
    def failure(cls, kind: str, error: str, **kwargs: Any) -> TaskReceipt:
        """Create a failure receipt."""
        return cls(kind=kind, status="failed", error=error, **kwargs)
