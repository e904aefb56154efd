"""
Stress tests / adversarial evaluation of levtrace.

This script attempts to BREAK the claimed properties:
  1. Matrix distance == two-row distance
  2. Metric bounds and symmetry
  3. Edit path reconstructs both inputs and costs exactly the distance
  4. Grouping is maximal
  5. Patch round-trip at every granularity
"""

import sys, os, random, time, itertools
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from levtrace.core import (
    EditOp, compute, levenshtein, levenshtein_words,
    distance, patch, source_of, target_of,
)


def test(name, condition, detail=""):
    status = "PASS" if condition else "FAIL"
    print(f"  [{status}] {name}" + (f"  ({detail})" if detail else ""))
    return condition


# ═══════════════════════════════════════════════════════════════
#  §1  MATRIX vs TWO-ROW DISTANCE — exhaustive small cases
# ═══════════════════════════════════════════════════════════════

print("=" * 70)
print("  §1  MATRIX vs TWO-ROW DISTANCE — exhaustive check")
print("=" * 70)

# Generate all strings of length ≤ 4 over alphabet {a, b, c}
alphabet = "abc"
all_strings = [""]
for length in range(1, 5):
    for combo in itertools.product(alphabet, repeat=length):
        all_strings.append("".join(combo))

random.seed(42)
sample_pairs = random.sample(
    [(s1, s2) for s1 in all_strings for s2 in all_strings],
    min(2000, len(all_strings)**2)
)

mismatches = 0
for s1, s2 in sample_pairs:
    expected = distance(s1, s2)
    got = levenshtein(s1, s2).distance()
    if got != expected:
        mismatches += 1
        if mismatches <= 5:
            print(f"    MISMATCH: matrix d(\"{s1}\", \"{s2}\") = {got}, two-row = {expected}")

test("Matrix == two-row (2000 random pairs, len≤4)",
     mismatches == 0,
     f"{mismatches} mismatches")

# ═══════════════════════════════════════════════════════════════
#  §2  BOUNDS AND SYMMETRY
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §2  BOUNDS AND SYMMETRY")
print("=" * 70)

bound_violations = 0
sym_violations = 0
for s1, s2 in sample_pairs:
    d = distance(s1, s2)
    if not abs(len(s1) - len(s2)) <= d <= max(len(s1), len(s2)):
        bound_violations += 1
    if d != distance(s2, s1):
        sym_violations += 1

test("|len(a) - len(b)| <= d <= max(len(a), len(b))",
     bound_violations == 0,
     f"{bound_violations} violations")
test("Symmetry", sym_violations == 0, f"{sym_violations} violations")

# ═══════════════════════════════════════════════════════════════
#  §3  EDIT PATH
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §3  EDIT PATH — reconstruction and cost")
print("=" * 70)

recon_failures = 0
cost_failures = 0
group_failures = 0
for s1, s2 in sample_pairs:
    lev = levenshtein(s1, s2)
    raw = lev.raw_edits()
    edits = lev.grouped_edits()

    if source_of(edits, s1[:0]) != s1 or target_of(edits, s2[:0]) != s2:
        recon_failures += 1
        if recon_failures <= 3:
            print(f"    FAIL: {s1!r} → {s2!r} reconstructs {source_of(edits)!r} → {target_of(edits)!r}")

    if sum(1 for step in raw if step.op != EditOp.EQUALITY) != lev.distance():
        cost_failures += 1

    if any(left.op == right.op for left, right in zip(edits, edits[1:])):
        group_failures += 1

test("Grouped payloads rebuild both inputs", recon_failures == 0,
     f"{recon_failures} failures")
test("Non-equal steps == distance", cost_failures == 0,
     f"{cost_failures} failures")
test("No adjacent groups share an op", group_failures == 0,
     f"{group_failures} failures")

# ═══════════════════════════════════════════════════════════════
#  §4  PATCH ROUND-TRIP — random text, words, bytes, lists
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §4  PATCH ROUND-TRIP")
print("=" * 70)

WORDS = ["one", "fine", "day", "in", "spring", "man", "said", "May", ",", "..."]


def random_text(n):
    return "".join(random.choice("abcde ") for _ in range(n))


def random_sentence(n):
    return " ".join(random.choice(WORDS) for _ in range(n))


random.seed(456)
roundtrip_failures = 0
roundtrip_tests = 0
for _ in range(200):
    cases = [
        (random_text(random.randint(0, 12)), random_text(random.randint(0, 12)), "char"),
        (random_sentence(random.randint(0, 6)), random_sentence(random.randint(0, 6)), "word"),
        (random_text(random.randint(0, 12)).encode(), random_text(random.randint(0, 12)).encode(), "char"),
        ([random.randint(0, 3) for _ in range(random.randint(0, 8))],
         [random.randint(0, 3) for _ in range(random.randint(0, 8))], "char"),
    ]
    for a, b, granularity in cases:
        roundtrip_tests += 1
        result = patch(a, compute(a, b, granularity).grouped_edits())
        expected = b if isinstance(b, (str, bytes)) else tuple(b)
        if result != expected:
            roundtrip_failures += 1
            if roundtrip_failures <= 3:
                print(f"    FAIL: patch({a!r}, ...) = {result!r}, expected {expected!r}")

test(f"Patch round-trip ({roundtrip_tests} random pairs)",
     roundtrip_failures == 0,
     f"{roundtrip_failures} failures")

# ═══════════════════════════════════════════════════════════════
#  §5  PERFORMANCE / COMPLEXITY
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  §5  PERFORMANCE (wall-clock)")
print("=" * 70)

# Full matrix is O(m*n) in time and memory
for n in [100, 200, 500, 1000]:
    a = random_text(n)
    b = random_text(n)
    t0 = time.perf_counter()
    lev = levenshtein(a, b)
    edits = lev.grouped_edits()
    dt = time.perf_counter() - t0
    print(f"  {n} chars vs {n} chars: {dt*1000:.1f}ms  d={lev.distance()}  groups={len(edits)}")

text_a = random_sentence(300)
text_b = random_sentence(300)
t0 = time.perf_counter()
lev = levenshtein_words(text_a, text_b)
dt = time.perf_counter() - t0
print(f"  300 words vs 300 words: {dt*1000:.1f}ms  d={lev.distance()}")


# ═══════════════════════════════════════════════════════════════
#  SUMMARY
# ═══════════════════════════════════════════════════════════════

print()
print("=" * 70)
print("  STRESS TEST SUMMARY")
print("=" * 70)
print("  If you see FAIL above, there's a bug.")
print("  If everything is PASS, the implementation is correct")
print("  for the tested cases (not a proof, but high confidence).")
