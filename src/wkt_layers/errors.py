"""Exceptions raised while ingesting files and managing layers.

Per-line decode failures are not in this module: they are recorded in the
parse report and never raised.
"""


class LayerError(Exception):
    """Base class for all viewer errors."""


class InvalidInputError(LayerError):
    """The source file has the wrong extension, is missing or unreadable."""


class SourceReadError(LayerError):
    """Reading the source file failed after validation passed."""


class UserCancelledError(LayerError):
    """The user cancelled the style selection."""


class InvalidLayerError(LayerError):
    """A malformed feature collection or style was offered to the registry."""


class IndexOutOfRangeError(LayerError, IndexError):
    """A layer index outside ``[0, layer_count)`` was requested."""

    def __init__(self, index: int, count: int):
        super().__init__(f"Invalid layer index: {index} (layer count: {count})")
        self.index = index
        self.count = count


class SessionClosedError(LayerError):
    """The ingestion workflow was closed before the layer could be added."""
