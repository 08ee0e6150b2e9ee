"""
tslint.json patch — make the Prettier compatibility preset the last ``extends``.

Shapes of ``extends`` before → after:

    absent            → "tslint-config-prettier"
    "foo"             → ["foo", "tslint-config-prettier"]
    [...]             → ["tslint-config-prettier"]

The list case drops every other preset (the filter keeps only entries
*equal* to the preset), then the preset goes last, exactly once.
"""

from __future__ import annotations

import logging

from prettier_setup.adapters.tree import ProjectTree
from prettier_setup.core.services.json_document import read_json, write_json

logger = logging.getLogger(__name__)

TSLINT_PATH = "tslint.json"
TSLINT_CONFIG_PACKAGE = "tslint-config-prettier"


def normalize_extends(extends: object, entry: str = TSLINT_CONFIG_PACKAGE) -> str | list:
    """Return the new value of ``extends`` for its current value."""
    if isinstance(extends, list):
        # should be added last https://github.com/prettier/tslint-config-prettier
        kept = [key for key in extends if key == entry][:1]
        return kept or [entry]
    if isinstance(extends, str):
        return [extends, entry]
    return entry


def patch_lint_extends(tree: ProjectTree, path: str = TSLINT_PATH) -> ProjectTree:
    """Rewrite ``extends`` in the lint config at ``path``, if there is one.

    A missing config is not an error; neither is an empty one (or one
    that does not hold a JSON object).  Both are logged and skipped.
    """
    if not tree.exists(path):
        logger.info("unable to locate tslint file at %s, conflicting styles may exists", path)
        return tree

    text = tree.read_text(path)
    if text is not None and not text.strip():
        logger.info("tslint file at %s is empty, skipping", path)
        return tree

    config = read_json(tree, path)
    if not isinstance(config, dict):
        logger.info("tslint file at %s does not hold an object, skipping", path)
        return tree

    config["extends"] = normalize_extends(config.get("extends"))
    write_json(tree, path, config)
    return tree
