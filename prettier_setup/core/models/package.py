"""
Registry package descriptor — the result of a version lookup.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Recorded verbatim when the registry cannot give us a concrete version
DEFAULT_VERSION = "latest"


class RegistryPackage(BaseModel):
    """A resolved ``{name, version}`` pair for a dependency.

    ``version`` is either a concrete version string from the registry's
    ``dist-tags.latest`` or the literal fallback ``"latest"``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    version: str = DEFAULT_VERSION

    @property
    def is_fallback(self) -> bool:
        """Whether the lookup failed and the sentinel version was used."""
        return self.version == DEFAULT_VERSION
