"""BaseService — shared foundation for bundlekit services.

Every service receives :class:`BundleSettings` at construction time, applies
its ``[logging]`` section, and maps the domain's exceptions onto
ServiceError codes.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from bundlekit.config.logging import configure_from_settings
from bundlekit.config.settings import BundleSettings
from bundlekit.domain.errors import (
    ManifestFormatError,
    MissingHeaderError,
    NotFoundError,
    VersionFormatError,
)
from bundlekit.services.result import ServiceResult

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class BundleService(BaseService):
            def identify(self, folder: Path) -> ServiceResult:
                return self._timed(lambda: ...)
    """

    def __init__(self, settings: BundleSettings | None = None) -> None:
        self._settings = settings or BundleSettings()
        configure_from_settings(self._settings)

    @property
    def settings(self) -> BundleSettings:
        return self._settings

    @staticmethod
    def _timed(run: Callable[[], ServiceResult]) -> ServiceResult:
        """Run *run* and attach ``meta.duration_ms`` to its result."""
        start = time.perf_counter()
        result = run()
        elapsed = round((time.perf_counter() - start) * 1000, 2)
        meta = dict(result.meta or {})
        meta["duration_ms"] = elapsed
        return result.model_copy(update={"meta": meta})

    @staticmethod
    def _error_result(op: str, exc: Exception) -> ServiceResult:
        """Translate a bundle-reading exception into a failed ServiceResult.

        Exceptions outside the known set are re-raised.
        """
        logger.debug("%s failed: %s", op, exc)
        if isinstance(exc, NotFoundError):
            return ServiceResult.failure(op, "NOT_FOUND", str(exc), path=str(exc.path))
        if isinstance(exc, MissingHeaderError):
            return ServiceResult.failure(op, "MISSING_HEADER", str(exc), header=exc.header)
        if isinstance(exc, VersionFormatError):
            return ServiceResult.failure(op, "INVALID_VERSION", str(exc), version=exc.text)
        if isinstance(exc, ManifestFormatError):
            return ServiceResult.failure(op, "INVALID_MANIFEST", str(exc), line=exc.line)
        if isinstance(exc, OSError):
            path = str(exc.filename) if exc.filename is not None else None
            return ServiceResult.failure(
                op, "IO_ERROR", f"Failed to read manifest: {exc}", path=path
            )
        raise exc
