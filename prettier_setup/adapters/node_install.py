"""
Node install runner — executes the deferred "install packages" task.

The pipeline only *requests* an install (a PendingTask).  This runner
carries it out after the tree has been committed, using whichever
package manager the project's lock file points to.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from pathlib import Path

from prettier_setup.core.models.task import PendingTask, TaskReceipt

logger = logging.getLogger(__name__)


class NodeInstallRunner:
    """Runs ``<pm> install`` for node-package-install tasks.

    Never raises — a missing executable, a timeout or a non-zero exit
    all come back as a failed TaskReceipt.
    """

    def __init__(self, timeout: int = 600):
        self._timeout = timeout

    @staticmethod
    def detect_package_manager(cwd: Path) -> str:
        """Auto-detect the package manager from lock files."""
        if (cwd / "pnpm-lock.yaml").exists():
            return "pnpm"
        if (cwd / "yarn.lock").exists():
            return "yarn"
        return "npm"

    def run(self, task: PendingTask, project_root: Path) -> TaskReceipt:
        """Execute ``task`` inside ``project_root``."""
        if task.kind != "node-package-install":
            return TaskReceipt.failure(kind=task.kind, error=f"Unsupported task: {task.kind}")

        cwd = (project_root / task.working_directory).resolve()
        pm = task.package_manager or self.detect_package_manager(cwd)
        cmd = [pm, "install"]

        if shutil.which(pm) is None:
            return TaskReceipt.failure(
                kind=task.kind,
                error=f"{pm} not installed — run '{' '.join(cmd)}' manually",
                command=cmd,
            )

        logger.info("Installing packages with %s in %s", pm, cwd)
        start = time.monotonic()
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except subprocess.TimeoutExpired:
            return TaskReceipt.failure(
                kind=task.kind,
                error=f"Command timed out after {self._timeout}s",
                command=cmd,
            )
        except OSError as e:
            return TaskReceipt.failure(kind=task.kind, error=f"Cannot run {pm}: {e}", command=cmd)

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if result.returncode == 0:
            return TaskReceipt.success(
                kind=task.kind,
                output=result.stdout.strip(),
                command=cmd,
                duration_ms=elapsed_ms,
                metadata={"package_manager": pm, "return_code": 0},
            )
        return TaskReceipt.failure(
            kind=task.kind,
            error=result.stderr.strip() or f"Exit code {result.returncode}",
            command=cmd,
            duration_ms=elapsed_ms,
            metadata={"package_manager": pm, "return_code": result.returncode},
        )
