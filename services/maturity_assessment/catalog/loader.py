"""
Catalog Loading
===============

Reads reference catalogs from JSON documents and keeps a resolved snapshot
in a time-bounded cache. Scoring code never touches the cache: callers
resolve a Catalog first and pass it in.

Version: 0.1.0
"""

import threading
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

from services.maturity_assessment.catalog.catalog import Catalog
from shared.logging import get_logger


logger = get_logger(__name__)


CatalogLoader = Callable[[], Catalog]


def load_catalog(path: str | Path) -> Catalog:
    """
    Load and validate a catalog from a JSON file.

    Raises:
        FileNotFoundError: The file does not exist
        pydantic.ValidationError: The document is malformed or inconsistent
    """
    path = Path(path)
    catalog = Catalog.model_validate_json(path.read_bytes())

    logger.info(
        "catalog_loaded",
        path=str(path),
        domains=len(catalog.domains),
        subcategories=len(catalog.subcategories),
        questions=len(catalog.questions),
    )
    return catalog


def catalog_from_dict(data: dict[str, Any]) -> Catalog:
    """Validate an already-parsed catalog document."""
    return Catalog.model_validate(data)


class CatalogCache:
    """
    Holds one resolved catalog snapshot for `ttl_seconds`.

    A ttl of 0 disables expiry; the snapshot then lives until `refresh()`
    or `invalidate()` is called.
    """

    def __init__(
        self,
        loader: CatalogLoader,
        ttl_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._loader = loader
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._catalog: Catalog | None = None
        self._loaded_at = 0.0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def is_stale(self) -> bool:
        if self._catalog is None:
            return True
        if self._ttl <= 0:
            return False
        return self._clock() - self._loaded_at >= self._ttl

    def get(self) -> Catalog:
        """Return the cached catalog, reloading it when stale."""
        with self._lock:
            if self.is_stale():
                self._reload()
            assert self._catalog is not None
            return self._catalog

    def refresh(self) -> Catalog:
        """Force a reload regardless of age."""
        with self._lock:
            self._reload()
            assert self._catalog is not None
            return self._catalog

    def invalidate(self) -> None:
        with self._lock:
            self._catalog = None
            logger.debug("catalog_cache_invalidated")

    def _reload(self) -> None:
        try:
            catalog = self._loader()
        except Exception as e:
            if self._catalog is None:
                raise
            # Serve the previous snapshot until the next expiry
            logger.warning("catalog_reload_failed", error=str(e), error_type=type(e).__name__)
            self._loaded_at = self._clock()
            return

        self._catalog = catalog
        self._loaded_at = self._clock()
        logger.info("catalog_cache_refreshed", ttl_seconds=self._ttl)
