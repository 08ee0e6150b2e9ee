"""
Setup pipeline — the ordered chain of tree mutations.

Seven steps, always in this order:

    add-dependencies → add-prettier-files → install-packages →
    modify-tslint → add-lint-staged-config → update-gitignore → add-scripts

Each step takes the tree, mutates it in place, and hands it back in a
StepOutcome.  Steps never run external tools: the install step only
*requests* an install, and the request comes back to the caller in
PipelineResult.tasks.  A step that raises stops the chain.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from prettier_setup.adapters.tree import ProjectTree
from prettier_setup.core.models.package import RegistryPackage
from prettier_setup.core.models.settings import SetupSettings
from prettier_setup.core.models.task import PendingTask
from prettier_setup.core.models.template import TemplateFile
from prettier_setup.core.services.generators.prettier_files import generate_prettier_files
from prettier_setup.core.services.gitignore import update_gitignore
from prettier_setup.core.services.lint_config import TSLINT_CONFIG_PACKAGE, patch_lint_extends
from prettier_setup.core.services.manifest import add_dependency, merge_property

logger = logging.getLogger(__name__)

DEV_DEPENDENCIES = "devDependencies"

PRETTIER_WRITE_COMMAND = "prettier --write --ignore-unknown"
PRETTIER_CHECK_COMMAND = "prettier --check --ignore-unknown"

# Resolved one at a time, in this order
RESOLVED_PACKAGES = (TSLINT_CONFIG_PACKAGE, "prettier", "lint-staged")

HUSKY_CONFIG = {"hooks": {"pre-commit": "lint-staged"}}
LINT_STAGED_CONFIG = {"**/*": [PRETTIER_WRITE_COMMAND]}
SCRIPTS = {
    "prettier": f"{PRETTIER_WRITE_COMMAND} .",
    "prettier:check": f"{PRETTIER_CHECK_COMMAND} .",
}

Resolver = Callable[[str], RegistryPackage]


@dataclass(frozen=True)
class SetupContext:
    """Read-only inputs shared by every step."""

    settings: SetupSettings
    resolve: Resolver


@dataclass
class StepOutcome:
    """What a step hands back: the tree, plus any deferred work."""

    tree: ProjectTree
    tasks: list[PendingTask] = field(default_factory=list)


Step = Callable[[ProjectTree, SetupContext], StepOutcome]


@dataclass
class StepRecord:
    """Timing for one completed step."""

    name: str
    duration_ms: int = 0

    def to_dict(self) -> dict:
        return {"name": self.name, "duration_ms": self.duration_ms}


@dataclass
class PipelineResult:
    """Final tree state plus the queue of pending tasks."""

    tree: ProjectTree
    tasks: list[PendingTask] = field(default_factory=list)
    steps: list[StepRecord] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "steps": [s.to_dict() for s in self.steps],
            "tasks": [t.model_dump(mode="json") for t in self.tasks],
            "changes": [c.to_dict() for c in self.tree.changes],
        }


# ═══════════════════════════════════════════════════════════════════
#  Steps
# ═══════════════════════════════════════════════════════════════════


def add_dependencies(tree: ProjectTree, ctx: SetupContext) -> StepOutcome:
    """Pin husky, then resolve and add each tooling package in order."""
    add_dependency(tree, DEV_DEPENDENCIES, "husky", ctx.settings.husky_version)

    # Sequential fold: each package is in package.json before the next lookup
    for name in RESOLVED_PACKAGES:
        package = ctx.resolve(name)
        add_dependency(tree, DEV_DEPENDENCIES, package.name, package.version)

    return StepOutcome(tree)


def add_prettier_files(tree: ProjectTree, ctx: SetupContext) -> StepOutcome:
    """Copy the Prettier template files into the project root."""
    merge_template_files(tree, generate_prettier_files())
    return StepOutcome(tree)


def install_packages(tree: ProjectTree, ctx: SetupContext) -> StepOutcome:
    """Request a package install once the tree is committed."""
    task = PendingTask(package_manager=ctx.settings.package_manager)
    return StepOutcome(tree, tasks=[task])


def modify_tslint(tree: ProjectTree, ctx: SetupContext) -> StepOutcome:
    return StepOutcome(patch_lint_extends(tree))


def add_lint_staged_config(tree: ProjectTree, ctx: SetupContext) -> StepOutcome:
    merge_property(tree, "husky", HUSKY_CONFIG)
    merge_property(tree, "lint-staged", LINT_STAGED_CONFIG)
    return StepOutcome(tree)


def add_gitignore_entry(tree: ProjectTree, ctx: SetupContext) -> StepOutcome:
    return StepOutcome(update_gitignore(tree))


def add_scripts(tree: ProjectTree, ctx: SetupContext) -> StepOutcome:
    return StepOutcome(merge_property(tree, "scripts", SCRIPTS))


def merge_template_files(tree: ProjectTree, files: list[TemplateFile]) -> list[str]:
    """Add each template the project does not have yet.

    Returns:
        Paths added.
    """
    added: list[str] = []
    for template in files:
        if not tree.exists(template.path):
            tree.create(template.path, template.content)
            logger.debug("Adding %s (%s)", template.path, template.description)
            added.append(template.path)
        elif not template.matches(tree.read_text(template.path)):
            logger.info("%s already exists, keeping the project's version", template.path)
    return added


# ═══════════════════════════════════════════════════════════════════
#  Chain
# ═══════════════════════════════════════════════════════════════════


def build_steps() -> list[tuple[str, Step]]:
    """The setup steps, in execution order."""
    return [
        ("add-dependencies", add_dependencies),
        ("add-prettier-files", add_prettier_files),
        ("install-packages", install_packages),
        ("modify-tslint", modify_tslint),
        ("add-lint-staged-config", add_lint_staged_config),
        ("update-gitignore", add_gitignore_entry),
        ("add-scripts", add_scripts),
    ]


def run_pipeline(
    tree: ProjectTree,
    ctx: SetupContext,
    steps: list[tuple[str, Step]] | None = None,
) -> PipelineResult:
    """Run ``steps`` (default: the full setup) over ``tree`` in order.

    Raises:
        SetupError: From the first failing step; later steps do not run.
    """
    if steps is None:
        steps = build_steps()

    result = PipelineResult(tree=tree)
    for name, step in steps:
        logger.debug("Running step %s", name)
        start = time.monotonic()

        outcome = step(result.tree, ctx)

        result.tree = outcome.tree
        result.tasks.extend(outcome.tasks)
        result.steps.append(
            StepRecord(name=name, duration_ms=int((time.monotonic() - start) * 1000))
        )

    logger.info(
        "Pipeline finished: %d steps, %d file changes, %d pending tasks",
        len(result.steps), len(result.tree.changes), len(result.tasks),
    )
    return result
