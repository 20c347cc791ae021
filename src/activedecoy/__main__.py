"""Active decoy CLI entry point.

Runs the scripted engagement from the config against the countermeasure
engine and prints a summary.

Usage:
    python -m activedecoy                           # Default config
    python -m activedecoy --config custom.yaml      # Custom config
    python -m activedecoy --disable                 # Kill switch off: no decoys
    python -m activedecoy --penalty 1.0             # No behavioral penalty
"""

from __future__ import annotations

import argparse
import json
import sys

from activedecoy.core.clock import SimClock
from activedecoy.core.config import ActiveDecoyConfig
from activedecoy.sim.scenario import EngagementScenario
from activedecoy.utils.logging import setup_logging


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="activedecoy",
        description="Active decoy countermeasure engagement simulator",
    )
    parser.add_argument(
        "--config",
        "-c",
        default="config/default.yaml",
        help="Path to configuration YAML file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=None,
        help="Override engagement duration in seconds",
    )
    parser.add_argument(
        "--dt",
        type=float,
        default=None,
        help="Override simulation step in seconds",
    )
    parser.add_argument(
        "--penalty",
        type=float,
        default=None,
        help="Override combined behavioral penalty (0.0-1.0)",
    )
    parser.add_argument(
        "--disable",
        action="store_true",
        default=False,
        help="Disable the countermeasure system (master kill switch)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level",
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        default=False,
        help="Validate config against Pydantic schema before starting",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Path to log file (default: no file logging)",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=False,
        help="Output logs as JSON instead of human-readable",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the engagement result as JSON",
    )
    args = parser.parse_args(argv)

    config = ActiveDecoyConfig(args.config)
    try:
        cfg = config.load(validate=args.validate_config)
    except FileNotFoundError:
        print(f"Error: Config file not found: {args.config}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: Config validation failed:\n{e}", file=sys.stderr)
        return 1

    if args.duration is not None:
        config.override("active_decoy.scenario.duration_s", args.duration)
    if args.dt is not None:
        config.override("active_decoy.scenario.dt", args.dt)
    if args.penalty is not None:
        config.override("active_decoy.countermeasures.combined_penalty", args.penalty)
    if args.disable:
        config.override("active_decoy.countermeasures.enabled", False)

    root = cfg.active_decoy
    clock = SimClock(start_epoch=root.get("time", {}).get("start_epoch", 1_000_000.0))

    system_cfg = root.get("system", {})
    log_level = args.log_level or system_cfg.get("log_level", "INFO")
    log_file = args.log_file or system_cfg.get("log_file", None)
    log_json = args.log_json or system_cfg.get("log_json", False)
    setup_logging(log_level, log_file=log_file, log_json=log_json, clock=clock)

    try:
        scenario = EngagementScenario.from_config(root, clock=clock)
    except ValueError as e:
        print(f"Error: Invalid scenario: {e}", file=sys.stderr)
        return 1
    result = scenario.run()

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        print(_format_summary(result.to_dict()))
    return 0


def _format_summary(res: dict) -> str:
    lines = [
        "Engagement summary",
        f"  decoys launched     : {res['decoys_launched']} "
        f"({res['rounds_remaining']} rounds left)",
        f"  redirected at       : {_fmt_time(res['redirected_at'])}",
        f"  intercepted at      : {_fmt_time(res['intercepted_at'])}",
        f"  closest approach    : {res['min_miss_distance_m']:.1f} m",
        f"  outcome             : {'DEFEATED' if res['defeated'] else 'NOT DEFEATED'}",
    ]
    return "\n".join(lines)


def _fmt_time(t: float | None) -> str:
    return "-" if t is None else f"{t:.2f} s"


if __name__ == "__main__":
    sys.exit(main())
