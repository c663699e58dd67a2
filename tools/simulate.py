"""
Headless Boids Runner
=====================

Steps a flock without opening a window and prints how it organizes.

Usage:
    python -m tools.simulate                          # Defaults from config/boids.py
    python -m tools.simulate --ticks 2000 --seed 7    # Reproducible run
    python -m tools.simulate --count 200 --bounds 250 --report-every 50
"""

import argparse
import sys
import time

from boids import FlockConfigError, FlockSettings, create_flock, step_flock
from boids.flock import warmup
from boids.metrics import summarize


def format_stats(stats: dict) -> str:
    return (
        f"tick {stats['tick']:>6} | order {stats['order']:.3f} | "
        f"spread {stats['spread']:8.1f} | neighbors {stats['mean_neighbors']:5.2f}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run the boids simulation headless",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--count", type=int, help="Number of boids")
    parser.add_argument("--bounds", type=float, help="Half-extent of the wrap-around cube")
    parser.add_argument("--ticks", type=int, default=1000, help="Ticks to simulate (default: 1000)")
    parser.add_argument("--seed", type=int, help="Seed for the initial state")
    parser.add_argument("--report-every", type=int, default=100, metavar="N",
                        help="Print statistics every N ticks (default: 100, 0 = only at the end)")
    parser.add_argument("--alignment-radius", type=float)
    parser.add_argument("--cohesion-radius", type=float)
    parser.add_argument("--separation-radius", type=float)
    return parser


def run(settings: FlockSettings, ticks: int, report_every: int = 100, out=None) -> dict:
    """Simulate ``ticks`` ticks, printing a line every ``report_every``. Returns final stats."""
    flock = create_flock(settings.count, settings)
    print(f"[sim] {flock.num_boids} boids, bounds ±{settings.bounds:g}, seed {settings.seed}", file=out)
    print(f"[sim] {format_stats(summarize(flock))}", file=out)

    start = time.perf_counter()
    for _ in range(ticks):
        step_flock(flock)
        if report_every and flock.tick % report_every == 0:
            print(f"[sim] {format_stats(summarize(flock))}", file=out)
    elapsed = time.perf_counter() - start

    stats = summarize(flock)
    if not report_every or flock.tick % report_every:
        print(f"[sim] {format_stats(stats)}", file=out)
    if ticks:
        print(f"[sim] {ticks} ticks in {elapsed:.2f}s ({elapsed / ticks * 1000:.2f} ms/tick)", file=out)
    return stats


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.ticks < 0:
        print(f"[error] --ticks must not be negative, got {args.ticks}")
        return 2
    if args.report_every < 0:
        print(f"[error] --report-every must not be negative, got {args.report_every}")
        return 2

    try:
        settings = FlockSettings.from_config(
            count=args.count,
            bounds=args.bounds,
            seed=args.seed,
            alignment_radius=args.alignment_radius,
            cohesion_radius=args.cohesion_radius,
            separation_radius=args.separation_radius,
        )
    except FlockConfigError as e:
        print(f"[error] {e}")
        return 2

    warmup()
    try:
        run(settings, args.ticks, args.report_every)
    except KeyboardInterrupt:
        print("\n[exit] Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
