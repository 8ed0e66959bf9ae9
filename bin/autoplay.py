"""Play headless rounds and report results and timing.

The human seat is scripted (see dojo.session.autoplay). A fixed seed
replays the same wall and therefore the same round.

Usage:
    uv run python bin/autoplay.py
    uv run python bin/autoplay.py --seed <192 hex chars>
    uv run python bin/autoplay.py --rounds 50 --quiet
"""

from __future__ import annotations

import argparse
import logging
import statistics
import sys
import time
from collections import Counter

from dojo.logic.rng import generate_seed, validate_seed_hex
from dojo.session.autoplay import play_round
from dojo.session.settings import TableSettings
from shared.logging import setup_logging


def run_rounds(seed: str | None, rounds: int, table_settings: TableSettings) -> None:
    """Play `rounds` rounds and print per-round and summary lines."""
    outcomes: Counter[str] = Counter()
    elapsed_times = []
    for number in range(rounds):
        round_seed = seed or generate_seed()
        start = time.perf_counter()
        view = play_round(round_seed, table_settings)
        elapsed_times.append(time.perf_counter() - start)
        outcomes[view.result.type.value if view.result else "unfinished"] += 1
        print(f"#{number + 1} seed={round_seed[:16]}... {view.status_message}")

    print()
    print("=" * 60)
    print("RESULTS")
    print("=" * 60)
    for outcome, count in outcomes.most_common():
        print(f"{outcome}: {count}")
    print(f"Median time: {statistics.median(elapsed_times):.3f}s")


def main() -> None:
    parser = argparse.ArgumentParser(description="Play headless rounds with a scripted human seat")
    parser.add_argument("--seed", help="wall seed (default: DOJO_SEED or random per round)")
    parser.add_argument("-n", "--rounds", type=int, default=1, help="number of rounds (default: 1)")
    parser.add_argument("--quiet", action="store_true", help="only log warnings and errors")
    args = parser.parse_args()

    table_settings = TableSettings()
    seed = args.seed or table_settings.seed
    if seed is not None:
        try:
            validate_seed_hex(seed)
        except ValueError as e:
            print(f"Invalid seed: {e}", file=sys.stderr)
            sys.exit(1)

    if args.rounds < 1:
        print("Rounds must be at least 1", file=sys.stderr)
        sys.exit(1)

    setup_logging(log_dir=table_settings.log_dir, level=logging.WARNING if args.quiet else logging.INFO)
    run_rounds(seed, args.rounds, table_settings)


if __name__ == "__main__":
    main()
