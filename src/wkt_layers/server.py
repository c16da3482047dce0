"""FastAPI server exposing the layer registry over HTTP."""

from __future__ import annotations

import logging
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import APIRouter, Depends, FastAPI, Query, Request, Response, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from .config import HEX_COLOR
from .context import AppContext, create_context
from .errors import (
    IndexOutOfRangeError,
    InvalidInputError,
    InvalidLayerError,
    LayerError,
    SessionClosedError,
    SourceReadError,
)
from .models import Color, Layer, LayerDetail, LayerSummary, Outcome, ParseSummary
from .reader import file_extension

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidInputError: 400,
    SourceReadError: 400,
    IndexOutOfRangeError: 404,
    InvalidLayerError: 422,
    SessionClosedError: 503,
}

router = APIRouter()


def get_context(request: Request) -> AppContext:
    return request.app.state.context


@router.post("/layers", status_code=201)
async def add_layer(
    file: UploadFile,
    stroke: str | None = Query(None, pattern=HEX_COLOR),
    fill: str | None = Query(None, pattern=HEX_COLOR),
    context: AppContext = Depends(get_context),
) -> Outcome:
    """Add an uploaded WKT text file as a new layer.

    Colors default to the configured stroke and fill colors.
    """
    default_stroke, default_fill = context.default_colors()
    colors = (
        Color.from_hex(stroke) if stroke else default_stroke,
        Color.from_hex(fill) if fill else default_fill,
    )
    filename = file.filename or ""

    tmp_path = await _save_upload(file)
    try:
        outcome = await context.workflow.add_layer_from_file(
            tmp_path, lambda: colors, name=Path(filename).stem
        )
    finally:
        tmp_path.unlink(missing_ok=True)

    return outcome.model_copy(update={"source": filename})


@router.get("/layers")
async def list_layers(context: AppContext = Depends(get_context)) -> list[LayerSummary]:
    """List layers in display order."""
    return [_summarize(index, layer) for index, layer in enumerate(context.registry.layers())]


@router.get("/layers/{index}")
async def get_layer(index: int, context: AppContext = Depends(get_context)) -> LayerDetail:
    layer = context.registry.layer(index)
    summary = _summarize(index, layer)
    return LayerDetail(
        **dict(summary),
        geometries=[record.geometry.wkt for record in layer.features.records],
    )


@router.delete("/layers/{index}", status_code=204)
async def remove_layer(index: int, context: AppContext = Depends(get_context)) -> Response:
    context.registry.remove_layer(index)
    return Response(status_code=204)


@router.post("/parse")
async def parse_file(file: UploadFile, context: AppContext = Depends(get_context)) -> ParseSummary:
    """Parse an uploaded file without adding a layer."""
    filename = file.filename or ""
    tmp_path = await _save_upload(file)
    try:
        report = await run_in_threadpool(context.parser.parse, tmp_path)
    finally:
        tmp_path.unlink(missing_ok=True)

    return ParseSummary(
        source=filename,
        success_count=report.success_count,
        failure_count=report.failure_count,
        kind_counts=report.kind_counts(),
        failed_lines=list(report.failed_lines),
    )


async def _save_upload(upload: UploadFile) -> Path:
    """Write an upload to a temp file that keeps the original extension."""
    content = await upload.read()
    extension = file_extension(Path(upload.filename or "").name)
    suffix = f".{extension}" if extension else ""
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
        tmp.write(content)
        return Path(tmp.name)


def _summarize(index: int, layer: Layer) -> LayerSummary:
    return LayerSummary(
        index=index,
        name=layer.name,
        feature_count=len(layer.features),
        kind_counts=layer.features.kind_counts(),
        style=layer.style,
    )


async def _layer_error_handler(request: Request, exc: LayerError) -> JSONResponse:
    status = ERROR_STATUS.get(type(exc), 400)
    logger.warning(f"{request.method} {request.url.path} failed ({status}): {exc}")
    return JSONResponse(status_code=status, content={"detail": str(exc)})


def create_app(context: AppContext | None = None) -> FastAPI:
    context = context or create_context()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        context.close()

    app = FastAPI(title="WKT Layer Viewer", version="0.1.0", lifespan=lifespan)
    app.state.context = context
    app.add_exception_handler(LayerError, _layer_error_handler)
    app.include_router(router)
    return app


app = create_app()
