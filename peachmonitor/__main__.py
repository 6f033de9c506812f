"""진입점: python -m peachmonitor"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

import yaml

logger = logging.getLogger("peachmonitor.main")


def build_parser() -> argparse.ArgumentParser:
    """CLI 인자 파서를 생성한다."""
    parser = argparse.ArgumentParser(
        prog="peach-monitor",
        description="Monitor data usage and set alert flags",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        "-u", "--update", action="store_true",
        help="Update totals and alert flags once",
    )
    mode.add_argument(
        "-s", "--save", action="store_true",
        help="Save latest usage totals to file (run before shutdown)",
    )
    mode.add_argument(
        "-d", "--daemon", action="store_true",
        help="Run daemon, updating totals and alert flags periodically",
    )
    mode.add_argument(
        "-l", "--list", action="store_true",
        help="Print stored totals, thresholds and alert flags",
    )
    parser.add_argument(
        "-i", "--iface",
        default=None,
        help="Network interface to monitor (default: wlan0)",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Daemon update interval in seconds (default: 60)",
    )
    parser.add_argument(
        "--store-dir",
        default=None,
        help="Directory holding traffic.json, thresholds.json and alerts.json",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to configuration YAML file (default: config/default.yaml)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """PeachMonitor CLI 진입점. 설정을 로드하고 선택한 모드를 실행한다."""
    args = build_parser().parse_args(argv)

    from peachmonitor.app import PeachMonitor
    from peachmonitor.errors import PeachMonitorError
    from peachmonitor.utils.config import Config
    from peachmonitor.utils.logging_setup import setup_logging

    try:
        config = Config.load(args.config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        print(f"peach-monitor: {exc}", file=sys.stderr)
        return 1

    if args.iface:
        config.set("monitor.iface", args.iface)
    if args.interval is not None:
        config.set("monitor.interval_seconds", args.interval)
    if args.store_dir:
        config.set("store.directory", args.store_dir)

    try:
        setup_logging(config)
    except OSError as exc:
        print(f"peach-monitor: cannot set up logging: {exc}", file=sys.stderr)
        return 1

    try:
        app = PeachMonitor(config)
    except ValueError as exc:
        print(f"peach-monitor: {exc}", file=sys.stderr)
        return 1

    try:
        if args.list:
            print(json.dumps(app.snapshot(), indent=2))
        elif args.save:
            app.save()
        elif args.update:
            app.update()
        else:
            try:
                asyncio.run(app.run_daemon())
            except KeyboardInterrupt:
                pass
    except PeachMonitorError as exc:
        logger.error("%s", exc)
        print(f"peach-monitor: {exc}", file=sys.stderr)
        return exc.exit_code

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
