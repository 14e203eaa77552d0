"""Gate server entry point."""

from __future__ import annotations

import argparse
from pathlib import Path

import uvicorn
from renrakun_config import AppConfig, load
from renrakun_telemetry import new_logger

from .gate import QuotaGate
from .namespace import QuotaGateNamespace
from .server import create_app
from .sqlite import SqliteStorage


def build_gate(config: AppConfig) -> QuotaGate:
    """Resolve the configured instance over SQLite-backed storage."""
    namespace = QuotaGateNamespace(SqliteStorage.factory(config.storage.path))
    return namespace.get(namespace.id_from_name(config.quota.instance_name))


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="renrakun-quota-gate")
    parser.add_argument("--config", type=Path, required=True)
    parser.add_argument("--env-config", type=Path, default=None)
    args = parser.parse_args(argv)

    config = load(args.config, args.env_config)
    log = new_logger(
        level=config.observability.log.level,
        format=config.observability.log.format,
        name="renrakun_quota_gate",
    )
    gate = build_gate(config)
    log.info(
        "quota_gate_starting",
        gate=gate.name,
        host=config.server.host,
        port=config.server.port,
        storage=config.storage.path,
    )
    # Single worker: this process is the only owner of the gate instance.
    uvicorn.run(
        create_app(gate),
        host=config.server.host,
        port=config.server.port,
        workers=1,
        log_config=None,
    )


if __name__ == "__main__":
    main()
