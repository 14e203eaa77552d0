"""API server entry point."""

from __future__ import annotations

import argparse
from pathlib import Path

import uvicorn
from renrakun_config import load
from renrakun_telemetry import new_logger

from .bootstrap import build_app


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="renrakun-api")
    parser.add_argument("--config", type=Path, required=True)
    parser.add_argument("--env-config", type=Path, default=None)
    args = parser.parse_args(argv)

    config = load(args.config, args.env_config)
    log = new_logger(
        level=config.observability.log.level,
        format=config.observability.log.format,
        name="renrakun_api",
    )
    log.info(
        "api_starting",
        host=config.server.host,
        port=config.server.port,
        gate_url=config.quota.gate_url,
        daily_write_limit=config.quota.daily_write_limit,
    )
    uvicorn.run(
        build_app(config),
        host=config.server.host,
        port=config.server.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
