"""CLI entry points."""

from typing import Optional, Sequence
import argparse
import asyncio
import json
import logging

from edgeboard.config import Config
from edgeboard.exceptions import ConfigurationError, NotificationError
from edgeboard.notifications import NotificationChannel
from edgeboard.ops import get_metrics_recorder
from edgeboard.ops.logging import configure_logging
from edgeboard.reporting import band_breakdown, predictions_frame, write_predictions_csv
from edgeboard.runtime.orchestrator import DashboardSnapshot, RefreshOrchestrator
from edgeboard.status import check_system_status

logger = logging.getLogger(__name__)


def _build_orchestrator(config: Config, on_update=None) -> Optional[RefreshOrchestrator]:
    try:
        return RefreshOrchestrator.from_config(config, on_update=on_update)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return None


def run_snapshot(
    config_path: Optional[str] = None,
    output_format: str = "json",
    csv_path: Optional[str] = None,
) -> int:
    config = Config.load(config_path)
    orchestrator = _build_orchestrator(config)
    if orchestrator is None:
        return 2

    snapshot = asyncio.run(orchestrator.refresh())
    if snapshot is None:
        print(json.dumps(orchestrator.view(), indent=2))
        return 1

    if csv_path:
        written = write_predictions_csv(snapshot.predictions, csv_path)
        logger.info("Wrote %d predictions to %s", len(snapshot.predictions), written)

    if output_format == "table":
        performance = snapshot.performance
        print(
            f"Source: {snapshot.source} (real-time: {snapshot.real_time})  "
            f"Last updated: {snapshot.last_updated}"
        )
        print(
            f"Record: {performance.wins}-{performance.losses} "
            f"({performance.win_rate:.1f}% over {performance.total_bets} bets)  "
            f"Opportunities: {performance.current_week_opportunities}"
        )
        print()
        print(band_breakdown(
            snapshot.predictions,
            orchestrator.bands,
            value_bet_threshold=config.value_bet_threshold,
        ).to_string(index=False))
        print()
        frame = predictions_frame(snapshot.predictions)
        print(frame.to_string(index=False) if not frame.empty else "No predictions.")
    else:
        print(json.dumps(orchestrator.view(), indent=2))
    return 0


def run_watch(config_path: Optional[str] = None, duration: Optional[float] = None) -> int:
    config = Config.load(config_path)

    def _log_update(snapshot: DashboardSnapshot) -> None:
        top = snapshot.predictions[0] if snapshot.predictions else None
        logger.info(
            "Snapshot %s: %d games, top edge %s",
            snapshot.last_updated,
            len(snapshot.predictions),
            f"{top.edge:.1f} ({top.matchup})" if top else "n/a",
        )

    orchestrator = _build_orchestrator(config, on_update=_log_update)
    if orchestrator is None:
        return 2

    async def _watch() -> None:
        stop_event = asyncio.Event()
        if duration:
            asyncio.get_running_loop().call_later(duration, stop_event.set)
        await orchestrator.run(stop_event)

    try:
        asyncio.run(_watch())
    except KeyboardInterrupt:
        logger.info("Stopped.")

    logger.info("Metrics: %s", json.dumps(get_metrics_recorder().snapshot(), sort_keys=True))
    return 0 if orchestrator.current() is not None else 1


def run_status(config_path: Optional[str] = None) -> int:
    config = Config.load(config_path)
    status = check_system_status(config.api_server_url, timeout=config.status_timeout)
    print(json.dumps({"success": True, "status": status.to_dict()}, indent=2))
    return 0


def run_notifications(config_path: Optional[str] = None, acknowledge: bool = False) -> int:
    config = Config.load(config_path)
    channel = NotificationChannel(config.notifications_dir)
    try:
        if acknowledge:
            channel.acknowledge()
            print(json.dumps({"success": True, "message": "Notification cleared"}))
            return 0
        record = channel.poll()
    except NotificationError as exc:
        logger.error("%s", exc)
        print(json.dumps({"success": False, "error": str(exc)}))
        return 1

    print(json.dumps({
        "success": True,
        "notification": record.to_dict() if record else None,
        "hasNotification": record is not None,
    }, indent=2))
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Edgeboard prediction dashboard core")
    parser.add_argument("--log-level", dest="log_level", help="Override EDGEBOARD_LOG_LEVEL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    snapshot = subparsers.add_parser("snapshot", help="Run one refresh cycle and print the result")
    snapshot.add_argument("--config", dest="config_path", help="Path to config file")
    snapshot.add_argument(
        "--format",
        dest="output_format",
        choices=("json", "table"),
        default="json",
        help="Output format",
    )
    snapshot.add_argument("--csv", dest="csv_path", help="Also write predictions to this CSV")

    watch = subparsers.add_parser("watch", help="Poll data and notifications on their timers")
    watch.add_argument("--config", dest="config_path", help="Path to config file")
    watch.add_argument("--duration", dest="duration", type=float, help="Stop after N seconds")

    status = subparsers.add_parser("status", help="Probe the live feed")
    status.add_argument("--config", dest="config_path", help="Path to config file")

    notifications = subparsers.add_parser("notifications", help="Show or clear the pending notification")
    notifications.add_argument("--config", dest="config_path", help="Path to config file")
    notifications.add_argument("--ack", dest="acknowledge", action="store_true", help="Clear the notification")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=getattr(args, "log_level", None))

    if args.command == "snapshot":
        return run_snapshot(
            config_path=args.config_path,
            output_format=args.output_format,
            csv_path=args.csv_path,
        )
    if args.command == "watch":
        return run_watch(config_path=args.config_path, duration=args.duration)
    if args.command == "status":
        return run_status(config_path=args.config_path)
    if args.command == "notifications":
        return run_notifications(config_path=args.config_path, acknowledge=args.acknowledge)

    parser.error("Unknown command")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
