"""Add-layer workflow: validate, parse in the background, choose colors, register."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from .errors import SessionClosedError, UserCancelledError
from .models import Color, Outcome
from .reader import LineGeometryParser
from .registry import LayerRegistry
from .styles import StyleBuilder

logger = logging.getLogger(__name__)

ColorChooser = Callable[[], tuple[Color, Color] | None]


class IngestionWorkflow:
    """Turns a source file into a registered layer.

    The parse runs on a thread pool so the event loop stays responsive; the
    color choice and the registry mutation happen back on the loop. Closing
    the workflow lets in-flight reads finish but drops their results.
    """

    def __init__(
        self,
        parser: LineGeometryParser,
        style_builder: StyleBuilder,
        registry: LayerRegistry,
        max_workers: int = 4,
    ):
        self._parser = parser
        self._style_builder = style_builder
        self._registry = registry
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="wkt-parse")
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def add_layer_from_file(
        self,
        path: str | Path,
        choose_colors: ColorChooser,
        name: str | None = None,
    ) -> Outcome:
        """Parse ``path`` and add it as a layer styled with the chosen colors.

        Invalid lines do not fail the operation; their count is reported in
        the returned :class:`Outcome`. A file without a single valid geometry
        still produces an (empty) layer.

        Raises:
            InvalidInputError: Wrong extension, missing or unreadable file.
            SourceReadError: The file could not be read to the end.
            UserCancelledError: ``choose_colors`` returned None.
            SessionClosedError: The workflow was closed before registration.
        """
        if self._closed:
            raise SessionClosedError("Workflow is closed")

        path = self._parser.validate(path)
        loop = asyncio.get_running_loop()
        report = await loop.run_in_executor(self._executor, self._parser.parse, path)

        if self._closed:
            logger.info(f"Discarding parse result for {path.name}: workflow closed")
            raise SessionClosedError("Workflow closed while parsing")

        if report.failure_count:
            logger.warning(f"Number of invalid lines in {path.name}: {report.failure_count}")

        colors = choose_colors()
        if colors is None:
            raise UserCancelledError("Style selection cancelled")
        stroke_color, fill_color = colors

        style = self._style_builder.build_style(stroke_color, fill_color)
        features = report.to_feature_collection(name or path.stem)
        index = self._registry.add_layer(features, style)

        return Outcome(
            source=report.source,
            layer_index=index,
            success_count=report.success_count,
            failure_count=report.failure_count,
        )

    def close(self) -> None:
        """Stop accepting work; reads already running finish and are discarded."""
        self._closed = True
        self._executor.shutdown(wait=False)
