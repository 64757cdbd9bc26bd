"""Entry point: ``python -m statecraft``.

Supports two modes:
  - ``python -m statecraft``       → Launch the FastAPI command server
  - ``python -m statecraft cli``   → Headless run of N ticks, no pacing
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Statecraft tick simulation")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI command server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--interval-ms", type=int, default=1000)
    srv.add_argument("--viewer", type=str, default="player")
    srv.add_argument("--no-autostart", action="store_true", help="Wait for POST /control/start")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless simulation")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--ticks", type=int, default=200)
    cli.add_argument("--viewer", type=str, default="player")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from statecraft.api.app import create_app
    from statecraft.config import SimulationConfig

    config = SimulationConfig(
        world_seed=args.seed,
        tick_interval_ms=args.interval_ms,
        diplomacy_viewer=args.viewer,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )
    app = create_app(config, autostart=not args.no_autostart)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from statecraft.config import SimulationConfig
    from statecraft.engine.tick_loop import TickLoop
    from statecraft.scenario import build_default_scenario
    from statecraft.utils.logging import setup_logging

    config = SimulationConfig(
        world_seed=args.seed,
        max_ticks=args.ticks,
        diplomacy_viewer=args.viewer,
        log_level=args.log_level,
    )
    setup_logging(config)

    loop = TickLoop(config)
    if config.seed_default_scenario:
        build_default_scenario(loop, config.world_seed, viewer=config.diplomacy_viewer)

    faults = loop.run()

    snapshot = loop.create_snapshot()
    for project in snapshot.active_projects:
        logger.info("Project %-20s progress %6.2f", project.id, project.progress)
    for name, value in snapshot.global_metrics.items():
        logger.info("Metric  %-20s %6.2f", name, value)
    if faults:
        logger.warning("%d tick(s) faulted; first: %s", len(faults), faults[0].error)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
