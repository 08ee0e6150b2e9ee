"""
Setup use case — add Prettier, lint-staged and husky to a project.

The full vertical slice: load settings, run the pipeline against a
staged tree, commit it to disk, then run the deferred install.
A fatal error anywhere before the commit leaves the project untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from prettier_setup.adapters.node_install import NodeInstallRunner
from prettier_setup.adapters.npm_registry import NpmRegistryClient
from prettier_setup.adapters.tree import FileChange, ProjectTree
from prettier_setup.core.config.loader import ConfigError, load_settings
from prettier_setup.core.engine.pipeline import (
    PipelineResult,
    Resolver,
    SetupContext,
    run_pipeline,
)
from prettier_setup.core.errors import SetupError
from prettier_setup.core.models.settings import SetupSettings
from prettier_setup.core.models.task import PendingTask, TaskReceipt

logger = logging.getLogger(__name__)


class TaskRunner(Protocol):
    def run(self, task: PendingTask, project_root: Path) -> TaskReceipt: ...


@dataclass
class SetupResult:
    """Result of a setup run."""

    project_root: Path | None = None
    dry_run: bool = False
    pipeline: PipelineResult | None = None
    changes: list[FileChange] = field(default_factory=list)
    receipts: list[TaskReceipt] = field(default_factory=list)
    error: str | None = None

    @property
    def install_failed(self) -> bool:
        return any(r.failed for r in self.receipts)

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            return result

        result["project_root"] = str(self.project_root)
        result["dry_run"] = self.dry_run
        result["changes"] = [c.to_dict() for c in self.changes]
        if self.pipeline:
            result["steps"] = [s.to_dict() for s in self.pipeline.steps]
            result["tasks"] = [t.model_dump(mode="json") for t in self.pipeline.tasks]
        result["receipts"] = [r.model_dump(mode="json") for r in self.receipts]
        return result


def run_setup(
    project_root: Path,
    config_path: Path | None = None,
    settings: SetupSettings | None = None,
    dry_run: bool = False,
    install: bool = True,
    resolver: Resolver | None = None,
    runner: TaskRunner | None = None,
) -> SetupResult:
    """Run the Prettier setup against ``project_root``.

    Args:
        project_root: Directory holding package.json.
        config_path: Optional explicit settings file.
        settings: Pre-built settings (skips config loading).
        dry_run: Plan and report changes without writing or installing.
        install: Run the deferred package install after committing.
        resolver: Version lookup override (default: npm registry).
        runner: Task runner override (default: NodeInstallRunner).

    Returns:
        SetupResult with the committed (or planned) changes.
    """
    result = SetupResult(project_root=project_root.resolve(), dry_run=dry_run)

    # ── Settings ─────────────────────────────────────────────────
    if settings is None:
        try:
            settings = load_settings(result.project_root, config_path)
        except ConfigError as e:
            result.error = str(e)
            return result

    if resolver is None:
        client = NpmRegistryClient(settings.registry_url, timeout=settings.registry_timeout)
        resolver = client.resolve_latest_version

    # ── Pipeline (staged) ────────────────────────────────────────
    tree = ProjectTree(result.project_root)
    ctx = SetupContext(settings=settings, resolve=resolver)
    try:
        pipeline = run_pipeline(tree, ctx)
    except SetupError as e:
        logger.debug("Setup aborted: %s", e)
        result.error = str(e)
        return result
    result.pipeline = pipeline

    if dry_run:
        result.changes = tree.changes
        return result

    try:
        result.changes = tree.commit()
    except OSError as e:
        result.error = f"Cannot write to {result.project_root}: {e}"
        return result

    # ── Deferred tasks ───────────────────────────────────────────
    if not (install and settings.install):
        logger.info("Skipping %d pending task(s)", len(pipeline.tasks))
        return result

    if runner is None:
        runner = NodeInstallRunner(timeout=settings.install_timeout)

    for task in pipeline.tasks:
        receipt = runner.run(task, result.project_root)
        if receipt.failed:
            logger.warning("Task %s failed: %s", task.kind, receipt.error)
        result.receipts.append(receipt)

    return result
