"""Launch the WKT layer viewer FastAPI server."""

import logging

import uvicorn

from wkt_layers.config import ViewerConfig


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )


def main():
    config = ViewerConfig()
    configure_logging(config.log_level)
    uvicorn.run("wkt_layers.server:app", host=config.host, port=config.port)


if __name__ == "__main__":
    main()
