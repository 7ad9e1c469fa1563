"""BundleService — identify exploded bundles without raising.

Wraps :func:`read_manifest` / :func:`read_exploded_bundle` and reports
every expected failure as a ServiceResult error code:

- ``NOT_FOUND`` — folder has no META-INF directory
- ``MISSING_HEADER`` — Bundle-SymbolicName or Bundle-Version absent
- ``INVALID_VERSION`` — Bundle-Version does not parse
- ``INVALID_MANIFEST`` — manifest syntax error
- ``IO_ERROR`` — the manifest file could not be read
- ``NO_BUNDLES`` — ``identify_all`` found nothing identifiable
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from bundlekit.domain.errors import BundleError
from bundlekit.domain.identity import ComponentIdentity, is_bundle
from bundlekit.domain.manifest import BUNDLE_SYMBOLICNAME, BUNDLE_VERSION
from bundlekit.infrastructure.filesystem import read_exploded_bundle, read_manifest
from bundlekit.services.base import BaseService
from bundlekit.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


def _identity_payload(identity: ComponentIdentity[Any], folder: Path) -> dict[str, Any]:
    return {
        "name": identity.name,
        "version": str(identity.version),
        "folder": str(folder),
        "context": None if identity.context is None else str(identity.context),
    }


class BundleService(BaseService):
    """Reads bundle identity out of exploded bundle folders."""

    def identify(self, folder: Path, context: Any = None) -> ServiceResult:
        """Identify the bundle in *folder*."""
        op = "identify"

        def run() -> ServiceResult:
            try:
                identity = read_exploded_bundle(folder, context, self._settings.manifest)
            except (BundleError, OSError) as exc:
                return self._error_result(op, exc)
            logger.debug("Identified %s in %s", identity, folder)
            return ServiceResult(ok=True, op=op, data=_identity_payload(identity, folder))

        return self._timed(run)

    def inspect(self, folder: Path) -> ServiceResult:
        """Report whether *folder*'s manifest declares a bundle.

        Succeeds for any readable manifest; ``data["is_bundle"]`` says
        whether both identity headers are present.
        """
        op = "inspect"

        def run() -> ServiceResult:
            try:
                manifest = read_manifest(folder, self._settings.manifest)
            except (BundleError, OSError) as exc:
                return self._error_result(op, exc)
            attrs = manifest.main_attributes
            warnings: list[str] = []
            for header in (BUNDLE_SYMBOLICNAME, BUNDLE_VERSION):
                if header not in attrs:
                    warnings.append(f"Missing header {header}")
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "folder": str(folder),
                    "is_bundle": is_bundle(manifest),
                    "symbolic_name": attrs.get(BUNDLE_SYMBOLICNAME),
                    "version": attrs.get(BUNDLE_VERSION),
                    "entries": len(manifest.entries),
                },
                warnings=warnings,
            )

        return self._timed(run)

    def identify_all(self, folders: Iterable[Path]) -> ServiceResult:
        """Identify every folder; report identities in natural order.

        Folders that fail are reported as warnings. The result fails with
        ``NO_BUNDLES`` only when nothing could be identified.
        """
        op = "identify_all"

        def run() -> ServiceResult:
            found: list[tuple[ComponentIdentity[Path], Path]] = []
            warnings: list[str] = []
            for folder in folders:
                try:
                    identity = read_exploded_bundle(folder, folder, self._settings.manifest)
                except (BundleError, OSError) as exc:
                    error = self._error_result(op, exc).error
                    assert error is not None
                    warnings.append(f"{folder}: [{error.code}] {error.message}")
                    continue
                found.append((identity, folder))

            if not found:
                return ServiceResult(
                    ok=False,
                    op=op,
                    warnings=warnings,
                    error=ServiceError(code="NO_BUNDLES", message="No bundles identified"),
                )

            found.sort(key=lambda pair: pair[0])
            return ServiceResult(
                ok=True,
                op=op,
                data={
                    "count": len(found),
                    "bundles": [_identity_payload(ident, folder) for ident, folder in found],
                },
                warnings=warnings,
            )

        return self._timed(run)
