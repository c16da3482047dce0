"""LayerRegistry: the ordered set of layers currently on display."""

from __future__ import annotations

import logging
import threading

from .errors import IndexOutOfRangeError, InvalidLayerError
from .models import FeatureCollection, Layer, Style

logger = logging.getLogger(__name__)


class LayerRegistry:
    """Ordered, lock-guarded layer sequence.

    Indices are always ``0..layer_count()-1``. Removing index ``i`` shifts
    every later layer down by one, so callers must re-read indices after any
    mutation. The underlying list is never handed out.
    """

    def __init__(self) -> None:
        self._layers: list[Layer] = []
        self._lock = threading.Lock()

    def layer_count(self) -> int:
        with self._lock:
            return len(self._layers)

    def add_layer(self, features: FeatureCollection, style: Style) -> int:
        """Append a layer and return its index.

        Raises:
            InvalidLayerError: If ``features`` or ``style`` is malformed.
        """
        if not isinstance(features, FeatureCollection) or not features.feature_type.geometry_field:
            raise InvalidLayerError("Could not add layer; feature collection invalid")
        if not isinstance(style, Style) or not style.rules:
            raise InvalidLayerError("Could not add layer; style invalid")

        layer = Layer(features=features, style=style)
        with self._lock:
            self._layers.append(layer)
            index = len(self._layers) - 1
        logger.info(f"Added layer {index} ({features.name}, {len(features)} features)")
        return index

    def remove_layer(self, index: int) -> None:
        """Remove the layer at ``index``.

        Raises:
            IndexOutOfRangeError: If ``index`` is not in ``[0, layer_count())``.
        """
        with self._lock:
            self._check_index(index)
            removed = self._layers.pop(index)
        logger.info(f"Removed layer {index} ({removed.name})")

    def layer(self, index: int) -> Layer:
        with self._lock:
            self._check_index(index)
            return self._layers[index]

    def layers(self) -> tuple[Layer, ...]:
        """Snapshot of the current layers in display order."""
        with self._lock:
            return tuple(self._layers)

    def _check_index(self, index: int) -> None:
        # Negative indices are rejected rather than counted from the end.
        if not 0 <= index < len(self._layers):
            raise IndexOutOfRangeError(index, len(self._layers))
