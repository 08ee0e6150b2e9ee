"""
Shared test fixtures and configuration.
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from prettier_setup.core.models.package import RegistryPackage
from prettier_setup.core.observability.logging_config import PACKAGE_LOGGER

FAKE_VERSIONS = {
    "tslint-config-prettier": "1.18.0",
    "prettier": "3.3.3",
    "lint-staged": "15.2.10",
}


class FakeResolver:
    """Offline stand-in for the registry client; records lookup order."""

    def __init__(self, versions: dict[str, str]):
        self.versions = dict(versions)
        self.calls: list[str] = []

    def __call__(self, name: str) -> RegistryPackage:
        self.calls.append(name)
        if name in self.versions:
            return RegistryPackage(name=name, version=self.versions[name])
        return RegistryPackage(name=name)


@pytest.fixture
def fake_versions() -> dict[str, str]:
    return dict(FAKE_VERSIONS)


@pytest.fixture
def resolver(fake_versions: dict[str, str]) -> FakeResolver:
    """Resolver that knows the three tooling packages."""
    return FakeResolver(fake_versions)


@pytest.fixture
def offline_resolver() -> FakeResolver:
    """Resolver that behaves like an unreachable registry."""
    return FakeResolver({})


@pytest.fixture
def node_project(tmp_path: Path) -> Path:
    """A minimal on-disk Node project: empty manifest and a .gitignore."""
    (tmp_path / "package.json").write_text("{}", encoding="utf-8")
    (tmp_path / ".gitignore").write_text("node_modules\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def read_manifest() -> Callable[[Path], dict]:
    """Parse package.json under a project root."""

    def _read(root: Path) -> dict:
        return json.loads((root / "package.json").read_text(encoding="utf-8"))

    return _read


@pytest.fixture(autouse=True)
def package_logger():
    """The prettier_setup logger, reset after each test (the CLI configures it)."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
