"""Exceptions raised by the farm calculator."""


class MageFarmError(Exception):
    """Base class for all calculator errors."""


class CatalogNotLoadedError(MageFarmError):
    """An engine query was made before the monster/item catalogs were available."""


class CatalogLoadError(MageFarmError):
    """A catalog file could not be read or parsed."""
