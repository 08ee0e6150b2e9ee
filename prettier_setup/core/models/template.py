"""
Template file model — a static file the setup copies into the project.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class TemplateFile(BaseModel):
    """A file added to the project root when the project lacks it.

    Templates never replace a file the project already has: an
    existing ``.prettierrc`` wins over ours.

    Attributes:
        path:        Root-relative destination, e.g. ``.prettierrc``.
        content:     Full file content.
        description: Shown in the debug log when the file is added.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    content: str
    description: str = ""

    def matches(self, existing: str | None) -> bool:
        """Whether ``existing`` content is already this template."""
        return existing == self.content
