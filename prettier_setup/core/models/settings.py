"""
Setup settings — loaded from .prettier-setup.yml (all keys optional).
"""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

from prettier_setup.core.models.task import PackageManager

DEFAULT_REGISTRY_URL = "http://registry.npmjs.org"
DEFAULT_HUSKY_VERSION = "^4.3.0"


class SetupSettings(BaseModel):
    """Tunables for a setup run.

    Every field has a default, so an absent config file is the same
    as an empty one.
    """

    model_config = ConfigDict(extra="forbid")

    registry_url: str = DEFAULT_REGISTRY_URL
    registry_timeout: float | None = Field(default=None, gt=0)   # None = no explicit timeout

    husky_version: str = DEFAULT_HUSKY_VERSION

    install: bool = True
    package_manager: PackageManager | None = None
    install_timeout: int = Field(default=600, gt=0)

    @field_validator("registry_url")
    @classmethod
    def _check_registry_url(cls, value: str) -> str:
        parts = urlsplit(value.strip())
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"registry_url must be an http(s) URL, got {value!r}")
        return value.strip()
