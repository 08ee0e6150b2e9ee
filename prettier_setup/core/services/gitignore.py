"""
.gitignore patch — ignore the husky hooks directory.
"""

from __future__ import annotations

import logging

from prettier_setup.adapters.tree import ProjectTree

logger = logging.getLogger(__name__)

GITIGNORE_PATH = ".gitignore"
HUSKY_ENTRY = "/.husky"
HUSKY_COMMENT = "# Husky hooks"


def update_gitignore(
    tree: ProjectTree,
    path: str = GITIGNORE_PATH,
    entry: str = HUSKY_ENTRY,
    comment: str = HUSKY_COMMENT,
) -> ProjectTree:
    """Append ``comment`` and ``entry`` to the ignore file unless ``entry`` is listed.

    The file is never created; existing lines and their order are kept.
    """
    if not tree.exists(path):
        return tree

    text = tree.read_text(path)
    if text is None:
        logger.info("Could not modify .gitignore at %s. Please add a new entry for %s", path, entry)
        return tree

    lines = text.split("\n")
    if entry in lines:
        return tree

    lines.append(comment)
    lines.append(entry)
    tree.overwrite(path, "\n".join(lines))
    return tree
