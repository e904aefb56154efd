"""
Benchmark: where the time goes in a levtrace computation.

The matrix build is O(m·n) and dominates; the backtrace is O(m+n) and
grouping is linear in the path length.  The two-row distance skips the
full grid and is the one to use when only the number matters.
"""

import random
import sys
import os
import time

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from levtrace.core import (
    Levenshtein, backtrace, build_matrix, distance, group, levenshtein_words,
)
from levtrace.formats import wdiff


STRING_PAIRS = [
    ("kitten", "sitting"),
    ("Saturday", "Sunday"),
    ("intention", "execution"),
    ("pneumonoultramicroscopicsilicovolcanoconiosis",
     "pseudopseudohypoparathyroidism"),
    ("abcdefghijklmnopqrstuvwxyz", "zyxwvutsrqponmlkjihgfedcba"),
]

SENTENCE_PAIRS = [
    ("One fine day in spring, ...", "One fine man said May day ..."),
    ("One fine day in spring, ...", "One fine man said mayday ..."),
    ("One fine day in spring, ...", "One fine man said Spring ..."),
]


def _timed(fn, *args):
    t0 = time.perf_counter()
    result = fn(*args)
    return result, time.perf_counter() - t0


# ═══════════════════════════════════════════════════════════════════
#  BENCHMARKS
# ═══════════════════════════════════════════════════════════════════

def benchmark_known_pairs():
    """Distance and rendering for a few classic pairs."""
    print("=" * 70)
    print("  §1  KNOWN PAIRS")
    print("=" * 70)
    print()

    for s1, s2 in STRING_PAIRS:
        lev, dt = _timed(Levenshtein, s1, s2)
        match = "✓" if lev.distance() == distance(s1, s2) else "✗"
        print(f"  {match} d(\"{s1[:30]}\", \"{s2[:30]}\") = {lev.distance()}  "
              f"[{dt*1000:.2f}ms]")
        print(f"      {lev.render(wdiff)[:60]}")
    print()


def benchmark_words():
    """Word-level rendering, one substitution per changed word."""
    print("=" * 70)
    print("  §2  WORD GRANULARITY")
    print("=" * 70)
    print()

    for s1, s2 in SENTENCE_PAIRS:
        rendered = levenshtein_words(s1, s2).render(wdiff)
        print(f"  '{s1}' -> '{s2}': '{rendered}'")
    print()


def benchmark_stages():
    """Break one computation down into matrix, backtrace and grouping."""
    print("=" * 70)
    print("  §3  STAGES")
    print("=" * 70)
    print()

    random.seed(7)
    for n in [100, 250, 500, 1000]:
        a = "".join(random.choice("acgt") for _ in range(n))
        b = "".join(random.choice("acgt") for _ in range(n))

        dp, t_matrix = _timed(build_matrix, a, b)
        raw, t_back = _timed(backtrace, dp, a, b)
        grouped, t_group = _timed(group, raw, "".join)
        _, t_two_row = _timed(distance, a, b)

        print(f"  n={n:>5}: matrix={t_matrix*1000:>8.2f}ms  "
              f"backtrace={t_back*1000:>6.2f}ms  group={t_group*1000:>6.2f}ms  "
              f"two-row={t_two_row*1000:>8.2f}ms  "
              f"steps={len(raw)} groups={len(grouped)}")
    print()


def main():
    print()
    print("╔══════════════════════════════════════════════════════════════════════╗")
    print("║          LEVTRACE — BENCHMARK SUITE                                 ║")
    print("║          levtrace v0.1.0                                            ║")
    print("╚══════════════════════════════════════════════════════════════════════╝")
    print()

    benchmark_known_pairs()
    benchmark_words()
    benchmark_stages()


if __name__ == "__main__":
    main()
