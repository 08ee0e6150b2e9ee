"""
npm registry client — resolve a package name to its latest version.

One GET per package against ``<registry>/<name>``, reading
``dist-tags.latest`` from the packument.  The lookup NEVER raises:
connection errors, HTTP errors, malformed bodies and missing tags all
resolve to the sentinel version ``"latest"``.  There is no retry.
"""

from __future__ import annotations

import http.client
import json
import logging
import urllib.request
from collections.abc import Iterable, Iterator

from prettier_setup import __version__
from prettier_setup.core.models.package import RegistryPackage
from prettier_setup.core.models.settings import DEFAULT_REGISTRY_URL

logger = logging.getLogger(__name__)


class NpmRegistryClient:
    """Latest-version lookups against an npm-compatible registry.

    Args:
        base_url: Registry root (default: the public npm registry).
        timeout: Socket timeout in seconds.  None means no explicit
            timeout; a stalled registry is only released by the
            transport reporting an error.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_REGISTRY_URL,
        timeout: float | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def package_url(self, package_name: str) -> str:
        """Registry URL for ``package_name`` (scoped names are kept verbatim)."""
        return f"{self._base_url}/{package_name}"

    def resolve_latest_version(self, package_name: str) -> RegistryPackage:
        """Look up the latest published version of ``package_name``.

        Returns:
            RegistryPackage with the resolved version, or with the
            fallback ``"latest"`` if anything goes wrong.
        """
        url = self.package_url(package_name)
        try:
            # Request() rejects malformed URLs with ValueError
            req = urllib.request.Request(
                url,
                headers={
                    "Accept": "application/json",
                    "User-Agent": f"prettier-setup/{__version__}",
                },
            )
            kwargs = {} if self._timeout is None else {"timeout": self._timeout}
            with urllib.request.urlopen(req, **kwargs) as resp:
                raw = resp.read()
            body = json.loads(raw)
        except (OSError, http.client.HTTPException, ValueError) as e:
            logger.debug("Registry lookup for %s failed (%s) — using fallback", package_name, e)
            return RegistryPackage(name=package_name)

        version = _latest_tag(body)
        if version is None:
            logger.debug("No dist-tags.latest for %s — using fallback", package_name)
            return RegistryPackage(name=package_name)

        logger.debug("Resolved %s → %s", package_name, version)
        return RegistryPackage(name=package_name, version=version)

    def iter_latest_versions(self, package_names: Iterable[str]) -> Iterator[RegistryPackage]:
        """Resolve ``package_names`` one at a time, in order.

        Lazy: the next request is only sent once the caller has
        consumed the previous descriptor.
        """
        for name in package_names:
            yield self.resolve_latest_version(name)


def _latest_tag(body: object) -> str | None:
    """Extract ``dist-tags.latest`` from a packument, if well-formed."""
    if not isinstance(body, dict):
        return None
    tags = body.get("dist-tags") or {}
    if not isinstance(tags, dict):
        return None
    latest = tags.get("latest")
    if not isinstance(latest, str) or not latest:
        return None
    return latest


def resolve_latest_version(package_name: str) -> RegistryPackage:
    """Resolve ``package_name`` against the public npm registry."""
    return NpmRegistryClient().resolve_latest_version(package_name)
