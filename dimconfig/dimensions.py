"""Selection of the authoritative dimensions file."""

from dimconfig.observability.logging import get_logger

logger = get_logger(__name__)

DIMENSIONS_CONFIG = "dimensions"


class DimensionPathSelector:
    """Decide which registered ``dimensions`` config describes the dimensions.

    Rules, in order:
    1. An explicit path given at construction is final.
    2. With a dimensions bundle, only that bundle's ``dimensions`` config counts.
    3. Otherwise the shortest path seen so far wins; ties keep the first.
    """

    def __init__(
        self,
        dimensions_path: str | None = None,
        dimensions_bundle: str | None = None,
    ) -> None:
        self._explicit = dimensions_path is not None
        self._bundle = dimensions_bundle
        self._path = dimensions_path

    @property
    def path(self) -> str | None:
        return self._path

    def consider(self, bundle: str, config: str, path: str) -> bool:
        """Offer a newly registered config; returns True if it became authoritative."""
        if config != DIMENSIONS_CONFIG or self._explicit:
            return False

        if self._bundle is not None:
            if bundle != self._bundle:
                return False
        elif self._path is not None and len(path) >= len(self._path):
            return False

        if path != self._path:
            logger.info("dimensions_path_selected", bundle=bundle, path=path, previous=self._path)
        self._path = path
        return True
