"""Fight simulation -- opener followed by the steady-state rotation.

Demonstrates:
- Wiring a Rotation to a SimulatedHost on a ManualClock
- Driving it at a fixed rate with TickLoop
- Printing every execution with the modelled Heat/Battery gauges
- Toggling categories through RotationSettings

Run: python examples/simulate.py --seconds 60 --no-wildfire
"""

import argparse

from tick_rotation import (
    ManualClock,
    Rotation,
    RotationSettings,
    SimulatedHost,
    TickLoop,
    configure_logging,
)
from tick_rotation.catalog import CATEGORIES, ability_name


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--seconds", type=float, default=60.0, help="fight length")
    parser.add_argument("--tps", type=int, default=20, help="ticks per second")
    parser.add_argument("--gcd", type=float, default=2.5, help="slow-action recast")
    parser.add_argument("--skip-opener", action="store_true")
    parser.add_argument("--log-level", default="WARNING")
    for category in CATEGORIES:
        parser.add_argument(
            f"--no-{category.replace('_', '-')}",
            dest=f"use_{category}",
            action="store_false",
        )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    configure_logging(args.log_level)

    toggles = {f"use_{category}": getattr(args, f"use_{category}") for category in CATEGORIES}
    toggles["use_opener"] = not args.skip_opener
    settings = RotationSettings.from_dict(toggles)
    clock = ManualClock()
    host = SimulatedHost(clock, settings=settings, gcd=args.gcd)

    def show(ability_id: int, label: str) -> None:
        print(
            f"  t={clock.now():7.2f}s  {label:<20} "
            f"heat={rotation.gauges.heat:3d}  battery={rotation.gauges.battery:3d}"
        )

    rotation = Rotation(host, on_execute=show)
    loop = TickLoop(rotation, clock, tps=args.tps)

    print(f"=== Simulating {args.seconds:.0f}s at {args.tps} tps ===\n")
    rotation.on_primary_button_pressed()
    loop.run(int(args.seconds * args.tps))

    counts: dict[int, int] = {}
    for execution in host.history:
        counts[execution.ability_id] = counts.get(execution.ability_id, 0) + 1
    print(f"\n{len(host.history)} executions, status: {rotation.snapshot().status}")
    for ability_id, n in sorted(counts.items(), key=lambda item: -item[1]):
        print(f"  {ability_name(ability_id):<20} x{n}")


if __name__ == "__main__":
    main()
