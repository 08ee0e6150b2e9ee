"""
package.json patches — add dependencies, merge top-level properties.

Both operations are idempotent:

    add_dependency   first write wins; an existing entry is never touched
    merge_property   shallow merge into an existing object, else create
"""

from __future__ import annotations

import logging
from typing import Any

from prettier_setup.adapters.tree import ProjectTree
from prettier_setup.core.errors import InvalidDocumentError
from prettier_setup.core.services.json_document import MANIFEST_PATH, read_json, write_json

logger = logging.getLogger(__name__)


def _read_manifest(tree: ProjectTree) -> dict[str, Any]:
    manifest = read_json(tree, MANIFEST_PATH)
    if not isinstance(manifest, dict):
        raise InvalidDocumentError(MANIFEST_PATH, "expected a JSON object")
    return manifest


def add_dependency(tree: ProjectTree, section: str, name: str, version: str) -> ProjectTree:
    """Add ``name@version`` under ``section`` unless ``name`` is already there.

    Args:
        tree: Project tree holding package.json.
        section: Dependency section, e.g. ``devDependencies``.
        name: Package name.
        version: Version (or range) to record verbatim.

    Raises:
        DocumentNotFoundError: If package.json is missing.
    """
    logger.debug("adding %s version %s", name, version)

    manifest = _read_manifest(tree)
    if not isinstance(manifest.get(section), dict):
        manifest[section] = {}

    if name not in manifest[section]:
        manifest[section][name] = version

    write_json(tree, MANIFEST_PATH, manifest)
    return tree


def merge_property(tree: ProjectTree, name: str, value: dict[str, Any]) -> ProjectTree:
    """Shallow-merge ``value`` into the top-level property ``name``.

    Keys in ``value`` win on conflict; sibling keys are preserved.  A
    missing (or non-object) property is set to ``value`` outright.

    Raises:
        DocumentNotFoundError: If package.json is missing.
    """
    manifest = _read_manifest(tree)
    existing = manifest.get(name)
    if isinstance(existing, dict):
        logger.debug("overwriting %s with %s", name, value)
        manifest[name] = {**existing, **value}
    else:
        logger.debug("creating %s with %s", name, value)
        manifest[name] = value

    write_json(tree, MANIFEST_PATH, manifest)
    return tree
