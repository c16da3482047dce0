"""Application context built once at startup and passed to every consumer."""

from dataclasses import dataclass

from .config import ViewerConfig
from .models import Color
from .reader import LineGeometryParser
from .registry import LayerRegistry
from .styles import StyleBuilder
from .workflow import IngestionWorkflow


@dataclass
class AppContext:
    config: ViewerConfig
    registry: LayerRegistry
    parser: LineGeometryParser
    style_builder: StyleBuilder
    workflow: IngestionWorkflow

    def default_colors(self) -> tuple[Color, Color]:
        return (
            Color.from_hex(self.config.default_stroke_color),
            Color.from_hex(self.config.default_fill_color),
        )

    def close(self) -> None:
        self.workflow.close()


def create_context(config: ViewerConfig | None = None) -> AppContext:
    config = config or ViewerConfig()
    registry = LayerRegistry()
    parser = LineGeometryParser(config)
    style_builder = StyleBuilder()
    workflow = IngestionWorkflow(parser, style_builder, registry, max_workers=config.parse_workers)
    return AppContext(
        config=config,
        registry=registry,
        parser=parser,
        style_builder=style_builder,
        workflow=workflow,
    )
