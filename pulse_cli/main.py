"""Command line front end for triggering configured events."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

from pulse_core.app import PulseApp
from pulse_core.errors import PulseError

CLI_VERSION = "0.1.0"


def main(
    argv: Sequence[str] | None = None,
    *,
    config_path: Path | str | None = None,
) -> int:
    """Parse ``argv`` and run the selected command."""

    parser = _build_parser()
    tokens = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        args = parser.parse_args(tokens)
    except SystemExit as exc:
        return exc.code or 0

    if args.version:
        print(f"pulse v{CLI_VERSION}")
        return 0
    if args.command is None:
        parser.print_help()
        return 0

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        app = PulseApp(config_path=args.config or config_path).bootstrap()
        if args.command == "trigger":
            return _run_trigger(app, args)
        return _run_listeners(app, args)
    except PulseError as exc:
        print(f"error: {exc}")
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pulse",
        description="Trigger events against listeners declared in a TOML config.",
    )
    parser.add_argument("--version", action="store_true", help="print the version and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--config", type=Path, help="listener config file (default: $PULSE_CONFIG)")
    subparsers = parser.add_subparsers(dest="command")

    trigger = subparsers.add_parser("trigger", help="dispatch an event to its listeners")
    trigger.add_argument("event", help="event name")
    trigger.add_argument(
        "-p",
        "--param",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="event parameter; VALUE is parsed as JSON when possible",
    )
    trigger.add_argument("--json", action="store_true", help="print the result as JSON")

    listeners = subparsers.add_parser("listeners", help="show listeners in dispatch order")
    listeners.add_argument("event", help="event name")
    return parser


def _run_trigger(app: PulseApp, args: argparse.Namespace) -> int:
    params = parse_params(args.param)
    event = app.events.trigger(args.event, params)
    result = {
        "event": event.get_name(),
        "params": event.get_params(),
        "stopped": event.is_propagation_stopped(),
    }
    if args.json:
        print(json.dumps(result, indent=2, default=str))
        return 0

    print(f"[pulse:trigger] {result['event']}")
    for key, value in result["params"].items():
        print(f"  {key} = {value!r}")
    if result["stopped"]:
        print("  propagation stopped")
    return 0


def _run_listeners(app: PulseApp, args: argparse.Namespace) -> int:
    listeners = list(app.events.get_listeners_for_event(args.event))
    if not listeners:
        print(f"No listeners attached to {args.event}.")
        return 0
    for position, listener in enumerate(listeners, start=1):
        print(f"{position:>3}. {describe_listener(listener)}")
    return 0


def parse_params(pairs: Sequence[str]) -> dict[str, Any]:
    """Turn ``KEY=VALUE`` tokens into a params mapping."""

    params: dict[str, Any] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise PulseError(f"parameter {pair!r} is not in KEY=VALUE form")
        try:
            params[key] = json.loads(raw)
        except json.JSONDecodeError:
            params[key] = raw
    return params


def describe_listener(listener: Any) -> str:
    module = getattr(listener, "__module__", None) or "?"
    name = getattr(listener, "__qualname__", None) or repr(listener)
    return f"{module}.{name}"
