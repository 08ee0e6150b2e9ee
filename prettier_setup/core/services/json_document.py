"""
JSON documents in the project tree — read, parse, serialize, overwrite.

Every patch does its own read-modify-write cycle; nothing is cached
between steps.
"""

from __future__ import annotations

import json
from typing import Any

from prettier_setup.adapters.tree import ProjectTree
from prettier_setup.core.errors import DocumentNotFoundError, InvalidDocumentError

MANIFEST_PATH = "package.json"


def read_json(tree: ProjectTree, path: str) -> Any:
    """Read and parse the JSON document at ``path``.

    Raises:
        DocumentNotFoundError: If ``path`` is not in the tree.
        InvalidDocumentError: If the content is not valid UTF-8 JSON.
    """
    raw = tree.read(path) if tree.exists(path) else None
    if raw is None:
        raise DocumentNotFoundError(path)
    try:
        return json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise InvalidDocumentError(path, f"not UTF-8 ({e})") from e
    except json.JSONDecodeError as e:
        raise InvalidDocumentError(path, str(e)) from e


def write_json(tree: ProjectTree, path: str, data: Any) -> None:
    """Serialize ``data`` with 2-space indentation and overwrite ``path``."""
    tree.overwrite(path, json.dumps(data, indent=2, ensure_ascii=False))
