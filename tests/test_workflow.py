"""Tests for the add-layer workflow."""

import asyncio
import threading

import pytest

from wkt_layers import (
    BLACK,
    GRAY,
    GeometryKind,
    IngestionWorkflow,
    InvalidInputError,
    LayerRegistry,
    LineGeometryParser,
    SessionClosedError,
    SourceReadError,
    StyleBuilder,
    UserCancelledError,
)
from wkt_layers.models import PointRule


@pytest.fixture
def registry():
    return LayerRegistry()


@pytest.fixture
def workflow(registry):
    wf = IngestionWorkflow(LineGeometryParser(), StyleBuilder(), registry, max_workers=2)
    yield wf
    wf.close()


@pytest.mark.asyncio
class TestAddLayerFromFile:
    async def test_mixed_file_scenario(self, workflow, registry, mixed_path, default_colors):
        outcome = await workflow.add_layer_from_file(mixed_path, default_colors)

        assert outcome.layer_index == 0
        assert outcome.success_count == 2
        assert outcome.failure_count == 1
        assert outcome.has_failures is True
        assert registry.layer_count() == 1

        layer = registry.layer(0)
        assert layer.name == "mixed"
        assert [r.kind for r in layer.features.records] == [GeometryKind.POINT, GeometryKind.LINE]
        assert [rule.kind for rule in layer.style.rules] == list(GeometryKind)
        point = layer.style.rules[0]
        assert isinstance(point, PointRule)
        assert point.fill.opacity == 1.0
        assert point.marker.size == 1.0
        assert point.marker.rotation == 1.0
        assert point.stroke.color == BLACK
        assert point.fill.color == GRAY

    async def test_clean_file_has_no_failures(self, workflow, polygon_path, default_colors):
        outcome = await workflow.add_layer_from_file(polygon_path, default_colors)
        assert outcome.has_failures is False
        assert outcome.success_count == 2

    async def test_all_invalid_still_adds_empty_layer(
        self, workflow, registry, tmp_path, write_lines, default_colors
    ):
        path = write_lines(tmp_path / "junk.txt", ["nope", "still nope"])
        outcome = await workflow.add_layer_from_file(path, default_colors)
        assert outcome.success_count == 0
        assert outcome.failure_count == 2
        assert registry.layer_count() == 1
        assert len(registry.layer(0).features) == 0

    async def test_layers_append_in_call_order(self, workflow, registry, mixed_path, polygon_path, default_colors):
        await workflow.add_layer_from_file(mixed_path, default_colors)
        outcome = await workflow.add_layer_from_file(polygon_path, default_colors, name="parcels-2024")
        assert outcome.layer_index == 1
        assert [layer.name for layer in registry.layers()] == ["mixed", "parcels-2024"]

    async def test_each_layer_gets_its_own_style(self, workflow, registry, mixed_path, default_colors):
        await workflow.add_layer_from_file(mixed_path, default_colors)
        await workflow.add_layer_from_file(mixed_path, default_colors)
        first, second = registry.layers()
        assert first.style == second.style
        assert first.style is not second.style


@pytest.mark.asyncio
class TestCancellation:
    async def test_cancelled_style_choice(self, workflow, registry, mixed_path):
        with pytest.raises(UserCancelledError):
            await workflow.add_layer_from_file(mixed_path, lambda: None)
        assert registry.layer_count() == 0

    async def test_chooser_may_raise(self, workflow, registry, mixed_path):
        def chooser():
            raise UserCancelledError("closed the dialog")

        with pytest.raises(UserCancelledError):
            await workflow.add_layer_from_file(mixed_path, chooser)
        assert registry.layer_count() == 0

    async def test_cancel_keeps_existing_layers(self, workflow, registry, mixed_path, default_colors):
        await workflow.add_layer_from_file(mixed_path, default_colors)
        with pytest.raises(UserCancelledError):
            await workflow.add_layer_from_file(mixed_path, lambda: None)
        assert registry.layer_count() == 1


@pytest.mark.asyncio
class TestFailures:
    async def test_wrong_extension_skips_parse_and_style(self, workflow, registry, tmp_path, write_lines):
        path = write_lines(tmp_path / "points.csv", ["POINT (1 2)"])
        asked = []
        with pytest.raises(InvalidInputError):
            await workflow.add_layer_from_file(path, lambda: asked.append(True))
        assert asked == []
        assert registry.layer_count() == 0

    async def test_read_error_surfaces_on_caller(self, workflow, registry, tmp_path, default_colors):
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\xfa\n")
        with pytest.raises(SourceReadError):
            await workflow.add_layer_from_file(path, default_colors)
        assert registry.layer_count() == 0


@pytest.mark.asyncio
class TestConcurrency:
    async def test_parse_runs_off_the_event_loop(self, registry, mixed_path, default_colors):
        loop_thread = threading.get_ident()
        parse_threads = []

        class RecordingParser(LineGeometryParser):
            def parse(self, source_path):
                parse_threads.append(threading.get_ident())
                return super().parse(source_path)

        workflow = IngestionWorkflow(RecordingParser(), StyleBuilder(), registry)
        try:
            await workflow.add_layer_from_file(mixed_path, default_colors)
        finally:
            workflow.close()
        assert parse_threads and parse_threads[0] != loop_thread

    async def test_concurrent_calls_all_register(self, workflow, registry, mixed_path, polygon_path, default_colors):
        outcomes = await asyncio.gather(
            *(
                workflow.add_layer_from_file(path, default_colors)
                for path in (mixed_path, polygon_path, mixed_path, polygon_path)
            )
        )
        assert registry.layer_count() == 4
        assert sorted(o.layer_index for o in outcomes) == [0, 1, 2, 3]


@pytest.mark.asyncio
class TestClose:
    async def test_closed_workflow_refuses_work(self, workflow, registry, mixed_path, default_colors):
        workflow.close()
        assert workflow.closed
        with pytest.raises(SessionClosedError):
            await workflow.add_layer_from_file(mixed_path, default_colors)
        assert registry.layer_count() == 0

    async def test_result_discarded_when_closed_mid_parse(self, registry, mixed_path, default_colors):
        started = threading.Event()
        release = threading.Event()

        class SlowParser(LineGeometryParser):
            def parse(self, source_path):
                started.set()
                release.wait(timeout=5)
                return super().parse(source_path)

        workflow = IngestionWorkflow(SlowParser(), StyleBuilder(), registry)
        task = asyncio.create_task(workflow.add_layer_from_file(mixed_path, default_colors))
        await asyncio.to_thread(started.wait, 5)
        workflow.close()
        release.set()

        with pytest.raises(SessionClosedError):
            await task
        assert registry.layer_count() == 0
