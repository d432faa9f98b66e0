#!/usr/bin/env python3
"""Live MQTT probe for gauge telemetry.

Connects to the broker from ``LAXR_*`` environment variables, attaches one
gauge consumer to a topic filter and prints the dial angle as it settles.

Use this to check a sensor's topic and calibration before wiring it into
a scene.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path

# Allow running from repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pylaxr import (  # noqa: E402
    Axis,
    ConsumerConfig,
    GaugeConsumer,
    LaxrClient,
    LaxrConfig,
    wrap_degrees,
)

_LOG = logging.getLogger("gauge_probe")


@dataclass
class PrintingDial:
    """Actuator stand-in that remembers the last Euler angles written."""

    euler_angles: tuple[float, float, float] = (0.0, 0.0, 0.0)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Passive MQTT probe for gauge telemetry.")
    parser.add_argument("topic_filter", help="Substring the topic must contain (case sensitive).")
    parser.add_argument("--axis", choices=[a.value for a in Axis], default=Axis.Z.value)
    parser.add_argument("--counter-clockwise", action="store_true", help="Rotate counter-clockwise.")
    parser.add_argument("--domain-min", type=float, default=30.0)
    parser.add_argument("--domain-max", type=float, default=90.0)
    parser.add_argument("--sweep", type=float, default=270.0, help="Full sweep in degrees.")
    parser.add_argument("--offset", type=float, default=135.0, help="Base offset in degrees.")
    parser.add_argument(
        "--duration",
        type=int,
        default=0,
        help="Maximum runtime in seconds (0 = run until Ctrl+C).",
    )
    parser.add_argument(
        "--report-seconds",
        type=float,
        default=1.0,
        help="Print the dial angle every N seconds.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logs.")
    return parser.parse_args()


async def _run(args: argparse.Namespace) -> None:
    dial = PrintingDial()
    consumer = GaugeConsumer(
        "probe",
        ConsumerConfig(
            topic_filter=args.topic_filter,
            axis=Axis(args.axis),
            clockwise=not args.counter_clockwise,
            domain_min=args.domain_min,
            domain_max=args.domain_max,
            full_sweep_degrees=args.sweep,
            base_offset_degrees=args.offset,
        ),
        actuator=dial,
    )

    started_at = time.monotonic()
    async with LaxrClient(LaxrConfig.from_env()) as client:
        client.add_router()
        client.attach(consumer)
        print(f"[probe] Listening on {client.config.broker_host} for topics containing {args.topic_filter!r}")
        while args.duration <= 0 or (time.monotonic() - started_at) < args.duration:
            await asyncio.sleep(args.report_seconds)
            state = consumer.state
            print(
                f"[probe] value={state.last_observed_value} target={state.target_angle} "
                f"current={state.current_angle:.2f} wrapped={wrap_degrees(state.current_angle):.2f} "
                f"euler={dial.euler_angles}"
            )


def _main() -> int:
    args = _parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        asyncio.run(_run(args))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(_main())
