from pathlib import Path

import pytest

from wkt_layers import BLACK, GRAY, create_context

MIXED_LINES = [
    "POINT (1 2)",
    "garbage",
    "LINESTRING (0 0, 1 1)",
]


def _write_lines(path: Path, lines: list[str]) -> Path:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def write_lines():
    return _write_lines


@pytest.fixture
def mixed_path(tmp_path):
    return _write_lines(tmp_path / "mixed.txt", MIXED_LINES)


@pytest.fixture
def polygon_path(tmp_path):
    return _write_lines(
        tmp_path / "parcels.txt",
        [
            "POLYGON ((0 0, 1 0, 1 1, 0 1, 0 0))",
            "MULTIPOLYGON (((10 10, 11 10, 11 11, 10 10)))",
        ],
    )


@pytest.fixture
def context():
    ctx = create_context()
    yield ctx
    ctx.close()


@pytest.fixture
def default_colors():
    return lambda: (BLACK, GRAY)
