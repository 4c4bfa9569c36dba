#!/usr/bin/env python
"""Time charsniff over every file below a directory.

Prints a per-label tally and timing summary, or one JSON line per file with
``--json-only``.
"""

from __future__ import annotations

import argparse
import collections
import json
import statistics
import sys
import time
from pathlib import Path


def format_bytes(n: int) -> str:
    """Format byte count as human-readable string."""
    if n >= 1 << 20:
        return f"{n / (1 << 20):.1f} MiB"
    if n >= 1 << 10:
        return f"{n / (1 << 10):.1f} KiB"
    return f"{n} B"


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Benchmark charsniff detection over a directory of files.",
    )
    parser.add_argument("data_dir", type=Path, help="Directory to scan recursively")
    parser.add_argument(
        "--strategy",
        choices=["full", "minimal"],
        default=None,
        help="Detection strategy (default: the installation default)",
    )
    parser.add_argument(
        "--json-only",
        action="store_true",
        default=False,
        help="Print only JSON output (for consumption by other scripts)",
    )
    args = parser.parse_args()

    data_dir: Path = args.data_dir.resolve()
    if not data_dir.is_dir():
        print(f"ERROR: data directory not found: {data_dir}", file=sys.stderr)
        sys.exit(1)

    files = sorted(p for p in data_dir.rglob("*") if p.is_file())
    if not files:
        print("ERROR: no files found!", file=sys.stderr)
        sys.exit(1)

    t0 = time.perf_counter()
    import charsniff

    import_time = time.perf_counter() - t0
    strategy = charsniff.get_strategy(args.strategy)

    file_times: list[float] = []
    labels: collections.Counter[str] = collections.Counter()
    total_bytes = 0
    for fp in files:
        ft0 = time.perf_counter()
        try:
            label = charsniff.detect_file(fp, strategy)
        except OSError as e:
            print(f"WARNING: {fp}: {e}", file=sys.stderr)
            continue
        elapsed = time.perf_counter() - ft0
        file_times.append(elapsed)
        labels[str(label)] += 1
        size = fp.stat().st_size
        total_bytes += size
        if args.json_only:
            print(
                json.dumps(
                    {"path": str(fp), "size": size, "label": label, "elapsed": elapsed}
                )
            )

    if args.json_only:
        print(json.dumps({"__timing__": sum(file_times), "import_time": import_time}))
        return

    total_ms = sum(file_times) * 1000
    mean_ms = statistics.mean(file_times) * 1000 if file_times else 0.0
    median_ms = statistics.median(file_times) * 1000 if file_times else 0.0

    print(f"Strategy:     {strategy.name}")
    print(f"  Files:      {len(file_times)} ({format_bytes(total_bytes)})")
    print()
    print("Labels:")
    for label, count in labels.most_common():
        print(f"  {label:<16} {count}")
    print()
    print("Timing:")
    print(f"  Import:     {import_time:.3f}s")
    print(f"  Detection:  {total_ms:.0f}ms total")
    print(f"  Per-file:   mean={mean_ms:.2f}ms  median={median_ms:.2f}ms")


if __name__ == "__main__":
    main()
