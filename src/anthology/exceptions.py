"""Error types raised while building an anthology."""


class AnthologyError(Exception):
    """Base class for anthology errors."""


class ConversionError(AnthologyError):
    """An uploaded document could not be converted to markup."""


class EmptyContentError(AnthologyError):
    """A converted document has no usable text."""
