class MultidimError(Exception):
    """Base class for errors raised while allocating a multidimensional value."""


class BadTarget(MultidimError, TypeError):
    """The target is not a reference, or its type does not nest deep enough."""


class BadDimension(MultidimError, ValueError):
    """A requested dimension size is not a positive integer."""


class BadInitializer(MultidimError, TypeError):
    """The initializer matches none of the recognised forms for the requested rank."""
