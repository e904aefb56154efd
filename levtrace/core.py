"""
levtrace.core — Levenshtein distance with a reconstructed edit path
====================================================================

§1  THE COST MATRIX
───────────────────

For a source a₁..aₘ and a target b₁..bₙ the cost matrix D holds, in
cell (i, j), the minimum number of unit-cost edits that turn a₁..aᵢ
into b₁..bⱼ:

    D[0][0] = 0
    D[i][0] = i                              (delete everything)
    D[0][j] = j                              (insert everything)
    D[i][j] = D[i-1][j-1]                    if aᵢ == bⱼ
            = 1 + min(D[i-1][j],             # delete aᵢ
                      D[i][j-1],             # insert bⱼ
                      D[i-1][j-1])           # substitute aᵢ → bⱼ

The distance is D[m][n].  The whole (m+1)×(n+1) grid is kept because
the backtrace reads every cell it passes through.


§2  THE BACKTRACE
─────────────────

Starting at (m, n) and walking to (0, 0), every step emits exactly one
raw Transformation and moves to one predecessor cell.  At (i, j):

    1.  aᵢ == bⱼ and D[i][j] == D[i-1][j-1]     → EQUALITY,      (i-1, j-1)
    2.  D[i][j] == D[i-1][j-1] + 1              → SUBSTITUTION,  (i-1, j-1)
    3.  D[i][j] == D[i-1][j] + 1                → DELETION,      (i-1, j)
    4.  otherwise                               → INSERTION,     (i, j-1)

On the border only one move exists: row 0 inserts, column 0 deletes.

The priority EQUALITY > SUBSTITUTION > DELETION > INSERTION is a fixed
policy.  Other orders give different, equally minimal, scripts; this
one keeps scripts reproducible.

The walk visits the path back to front, so the collected steps are
reversed before they are returned.


§3  GROUPING
────────────

Maximal runs of consecutive raw steps with the same op collapse into
one Edit whose payloads are the joined units of each side:

    S(k→s) E(i) E(t) E(t) S(e→i) E(n) I(g)
        → Substitution("k", "s"), Equality("itt"), Substitution("e", "i"),
          Equality("n"), Insertion("g")

Every step consumes one unit per side it touches, so a substitution run
of length k pairs k source units with k target units.  Joining all
source-side payloads in order gives the source back; joining all
target-side payloads gives the target.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Iterable, Optional, Union

from .tokens import Granularity, byte_units, tokenize

log = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
#  SEQUENCE VIEWS
# ═══════════════════════════════════════════════════════════════════

class UnitKind(Enum):
    """How a run of units is joined back together."""
    TEXT = auto()       # str units, "".join
    BYTES = auto()      # single-byte bytes units, b"".join
    ITEMS = auto()      # arbitrary hashable-or-not elements, tuple(...)


@dataclass(frozen=True, slots=True)
class SequenceView:
    """
    One side of a computation: its atomic units, frozen, plus how to
    join a run of them into a payload of the input's own type.
    """
    units: tuple
    kind: UnitKind

    @classmethod
    def of(cls, seq: Any,
           granularity: Union[Granularity, str] = Granularity.CHAR) -> "SequenceView":
        """
        Wrap an input sequence.

        Strings are tokenized at `granularity`; bytes and bytearrays
        always split into single bytes; any other Sequence is taken
        element by element.  Anything else raises TypeError; an unknown
        granularity raises ValueError whatever the input.
        """
        granularity = Granularity(granularity)
        if isinstance(seq, str):
            units = tokenize(seq, granularity)
            if granularity is Granularity.BYTE:
                return cls(units, UnitKind.BYTES)
            return cls(units, UnitKind.TEXT)
        if isinstance(seq, (bytes, bytearray)):
            return cls(byte_units(bytes(seq)), UnitKind.BYTES)
        if isinstance(seq, Sequence):
            return cls(tuple(seq), UnitKind.ITEMS)
        raise TypeError(
            f"Cannot compare {type(seq).__name__}: expected str, bytes or a sequence"
        )

    def join(self, units: Iterable) -> Any:
        if self.kind is UnitKind.TEXT:
            return "".join(units)
        if self.kind is UnitKind.BYTES:
            return b"".join(units)
        return tuple(units)

    def __len__(self) -> int:
        return len(self.units)

    def __getitem__(self, index: int) -> Any:
        return self.units[index]


# ═══════════════════════════════════════════════════════════════════
#  EDIT TYPES
# ═══════════════════════════════════════════════════════════════════

class EditOp(Enum):
    """Kinds of edit operation."""
    EQUALITY = auto()       # unit kept
    DELETION = auto()       # source unit dropped
    INSERTION = auto()      # target unit added
    SUBSTITUTION = auto()   # source unit replaced by target unit


@dataclass(frozen=True, slots=True)
class Transformation:
    """
    One raw, single-unit step of the edit path.

    `index` is the source position for EQUALITY, DELETION and
    SUBSTITUTION, and the target position for INSERTION.  `old` is the
    source unit and `new` the target unit; the side an op does not
    touch is None.
    """
    op: EditOp
    index: int
    old: Any = None
    new: Any = None

    @classmethod
    def equality(cls, index: int, unit: Any) -> "Transformation":
        return cls(EditOp.EQUALITY, index, unit, unit)

    @classmethod
    def deletion(cls, index: int, unit: Any) -> "Transformation":
        return cls(EditOp.DELETION, index, old=unit)

    @classmethod
    def insertion(cls, index: int, unit: Any) -> "Transformation":
        return cls(EditOp.INSERTION, index, new=unit)

    @classmethod
    def substitution(cls, index: int, old: Any, new: Any) -> "Transformation":
        return cls(EditOp.SUBSTITUTION, index, old, new)

    def __repr__(self) -> str:
        if self.op == EditOp.EQUALITY:
            return f"Equality({self.index}, {self.old!r})"
        if self.op == EditOp.DELETION:
            return f"Deletion({self.index}, {self.old!r})"
        if self.op == EditOp.INSERTION:
            return f"Insertion({self.index}, {self.new!r})"
        return f"Substitution({self.index}, {self.old!r} → {self.new!r})"


@dataclass(frozen=True, slots=True)
class Edit:
    """
    A run of same-op Transformations merged into one edit.

    `old` is the joined source-side run (None for INSERTION) and `new`
    the joined target-side run (None for DELETION).  For EQUALITY both
    carry the same run.
    """
    op: EditOp
    old: Any = None
    new: Any = None

    @classmethod
    def equality(cls, run: Any) -> "Edit":
        return cls(EditOp.EQUALITY, run, run)

    @classmethod
    def deletion(cls, run: Any) -> "Edit":
        return cls(EditOp.DELETION, old=run)

    @classmethod
    def insertion(cls, run: Any) -> "Edit":
        return cls(EditOp.INSERTION, new=run)

    @classmethod
    def substitution(cls, old: Any, new: Any) -> "Edit":
        return cls(EditOp.SUBSTITUTION, old, new)

    def __repr__(self) -> str:
        if self.op == EditOp.EQUALITY:
            return f"Equality({self.old!r})"
        if self.op == EditOp.DELETION:
            return f"Deletion({self.old!r})"
        if self.op == EditOp.INSERTION:
            return f"Insertion({self.new!r})"
        return f"Substitution({self.old!r} → {self.new!r})"


# ═══════════════════════════════════════════════════════════════════
#  COST MATRIX
# ═══════════════════════════════════════════════════════════════════

def build_matrix(a: Sequence, b: Sequence) -> list[list[int]]:
    """Full (len(a)+1) × (len(b)+1) cost matrix, see §1."""
    m, n = len(a), len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for j in range(1, n + 1):
        dp[0][j] = j
    for i in range(1, m + 1):
        dp[i][0] = i

    for i in range(1, m + 1):
        prev, curr = dp[i - 1], dp[i]
        ai = a[i - 1]
        for j in range(1, n + 1):
            if ai == b[j - 1]:
                curr[j] = prev[j - 1]
            else:
                curr[j] = 1 + min(
                    prev[j],        # deletion
                    curr[j - 1],    # insertion
                    prev[j - 1],    # substitution
                )
    return dp


def _two_row_distance(a: Sequence, b: Sequence) -> int:
    """Same recurrence as build_matrix, keeping only two rows."""
    # Iterate over the longer side so the rows span the shorter one.
    if len(a) < len(b):
        a, b = b, a
    m, n = len(a), len(b)
    if n == 0:
        return m

    prev = list(range(n + 1))
    curr = [0] * (n + 1)

    for i in range(1, m + 1):
        curr[0] = i
        ai = a[i - 1]
        for j in range(1, n + 1):
            if ai == b[j - 1]:
                curr[j] = prev[j - 1]
            else:
                curr[j] = 1 + min(prev[j], curr[j - 1], prev[j - 1])
        prev, curr = curr, prev

    return prev[n]


# ═══════════════════════════════════════════════════════════════════
#  BACKTRACE
# ═══════════════════════════════════════════════════════════════════

def backtrace(dp: list[list[int]], a: Sequence, b: Sequence) -> list[Transformation]:
    """
    Walk the matrix from (len(a), len(b)) back to (0, 0) and return the
    raw steps in source order.  Tie-break policy in §2.
    """
    ops: list[Transformation] = []
    i, j = len(a), len(b)
    while i > 0 or j > 0:
        if i > 0 and j > 0:
            here = dp[i][j]
            diag = dp[i - 1][j - 1]
            if a[i - 1] == b[j - 1] and here == diag:
                ops.append(Transformation(EditOp.EQUALITY, i - 1, a[i - 1], b[j - 1]))
                i -= 1
                j -= 1
                continue
            if here == diag + 1:
                ops.append(Transformation(EditOp.SUBSTITUTION, i - 1, a[i - 1], b[j - 1]))
                i -= 1
                j -= 1
                continue
            if here == dp[i - 1][j] + 1:
                ops.append(Transformation(EditOp.DELETION, i - 1, old=a[i - 1]))
                i -= 1
                continue
            ops.append(Transformation(EditOp.INSERTION, j - 1, new=b[j - 1]))
            j -= 1
            continue

        if i > 0:
            ops.append(Transformation(EditOp.DELETION, i - 1, old=a[i - 1]))
            i -= 1
        else:
            ops.append(Transformation(EditOp.INSERTION, j - 1, new=b[j - 1]))
            j -= 1

    ops.reverse()
    return ops


# ═══════════════════════════════════════════════════════════════════
#  GROUPING
# ═══════════════════════════════════════════════════════════════════

def group(raw: Iterable[Transformation], join: Callable[[list], Any]) -> list[Edit]:
    """
    Merge maximal runs of same-op Transformations into Edits.

    `join` turns a list of units into one payload, e.g. "".join for
    text.  Runs only ever merge when adjacent and of the same op.
    """
    grouped: list[Edit] = []
    run: list[Transformation] = []
    for step in raw:
        if run and step.op != run[-1].op:
            grouped.append(_close_run(run, join))
            run = []
        run.append(step)
    if run:
        grouped.append(_close_run(run, join))
    return grouped


def _close_run(run: list[Transformation], join: Callable[[list], Any]) -> Edit:
    op = run[0].op
    old = None if op == EditOp.INSERTION else join([step.old for step in run])
    new = None if op == EditOp.DELETION else join([step.new for step in run])
    return Edit(op, old, new)


# ═══════════════════════════════════════════════════════════════════
#  RENDERING
# ═══════════════════════════════════════════════════════════════════

def render(edits: Iterable[Edit], encoder: Callable[[Edit], str]) -> str:
    """
    Encode each edit with the caller's `encoder` and concatenate.

    Whatever the encoder raises propagates unchanged.
    """
    return "".join(encoder(edit) for edit in edits)


# ═══════════════════════════════════════════════════════════════════
#  COMPUTATION
# ═══════════════════════════════════════════════════════════════════

class Levenshtein:
    """
    A single distance computation between a source and a target.

    Construction builds the cost matrix; the backtrace and the grouping
    run on first request and are cached.  Every accessor returns a
    fresh list, so callers may mutate what they get.

        >>> lev = compute("kitten", "sitting")
        >>> lev.distance()
        3
        >>> lev.grouped_edits()[0]
        Substitution('k' → 's')
    """

    def __init__(self, source: Any, target: Any,
                 granularity: Union[Granularity, str] = Granularity.CHAR):
        self.source = SequenceView.of(source, granularity)
        self.target = SequenceView.of(target, granularity)
        if self.source.kind != self.target.kind:
            raise TypeError(
                f"Cannot compare {type(source).__name__} with {type(target).__name__}"
            )
        self._matrix = build_matrix(self.source.units, self.target.units)
        self._raw: Optional[tuple[Transformation, ...]] = None
        self._grouped: Optional[tuple[Edit, ...]] = None
        log.debug("Built %dx%d cost matrix, distance %d",
                  len(self.source) + 1, len(self.target) + 1, self.distance())

    def __repr__(self) -> str:
        return f"Levenshtein(source={len(self.source)} units, target={len(self.target)} units)"

    def distance(self) -> int:
        return self._matrix[len(self.source)][len(self.target)]

    def similarity(self) -> float:
        """1.0 for identical inputs, 0.0 when nothing could be kept."""
        longest = max(len(self.source), len(self.target))
        if longest == 0:
            return 1.0
        return 1.0 - self.distance() / longest

    def matrix(self) -> list[list[int]]:
        return [row[:] for row in self._matrix]

    def raw_edits(self) -> list[Transformation]:
        if self._raw is None:
            self._raw = tuple(backtrace(self._matrix, self.source.units, self.target.units))
            log.debug("Backtrace produced %d raw steps", len(self._raw))
        return list(self._raw)

    def grouped_edits(self) -> list[Edit]:
        if self._grouped is None:
            self._grouped = tuple(group(self.raw_edits(), self.source.join))
            log.debug("Grouped into %d edits", len(self._grouped))
        return list(self._grouped)

    def render(self, encoder: Callable[[Edit], str]) -> str:
        return render(self.grouped_edits(), encoder)


def compute(source: Any, target: Any,
            granularity: Union[Granularity, str] = Granularity.CHAR) -> Levenshtein:
    """
    Build the computation that turns `source` into `target`.

    Both inputs must be of the same kind: two strings, two byte
    strings, or two other sequences.  Mixing kinds raises TypeError.
    """
    return Levenshtein(source, target, granularity)


def levenshtein(origin: str, dest: str) -> Levenshtein:
    """Character-level computation between two strings."""
    return Levenshtein(origin, dest, Granularity.CHAR)


def levenshtein_words(origin: str, dest: str) -> Levenshtein:
    """
    Word-level computation between two strings.

    Units are word runs, whitespace runs and single punctuation marks,
    so a changed word is one substitution rather than several.
    """
    return Levenshtein(origin, dest, Granularity.WORD)


# ═══════════════════════════════════════════════════════════════════
#  SCALAR DISTANCE
# ═══════════════════════════════════════════════════════════════════

def distance(source: Any, target: Any,
             granularity: Union[Granularity, str] = Granularity.CHAR) -> int:
    """
    Levenshtein distance without an edit path.

    Uses two rows the width of the shorter input instead of the full
    matrix.  Always equal to compute(source, target).distance().
    """
    a = SequenceView.of(source, granularity)
    b = SequenceView.of(target, granularity)
    if a.kind != b.kind:
        raise TypeError(
            f"Cannot compare {type(source).__name__} with {type(target).__name__}"
        )
    return _two_row_distance(a.units, b.units)


def normalized_distance(source: Any, target: Any,
                        granularity: Union[Granularity, str] = Granularity.CHAR) -> float:
    """
    Distance divided by the length of the longer input, in [0, 1].

    Two empty inputs are 0.0 apart.
    """
    d = distance(source, target, granularity)
    if d == 0:
        return 0.0
    longest = max(len(SequenceView.of(source, granularity)),
                  len(SequenceView.of(target, granularity)))
    return d / longest


# ═══════════════════════════════════════════════════════════════════
#  SCRIPTS
# ═══════════════════════════════════════════════════════════════════

def _concat(parts: Iterable[Any], start: Any = None) -> Any:
    parts = [part for part in parts if part is not None]
    if start is None:
        if not parts:
            return None
        first = parts[0]
        start = first[:0] if isinstance(first, (str, bytes)) else ()
    result = start
    for part in parts:
        result = result + part
    return result


def source_of(edits: Iterable[Edit], start: Any = None) -> Any:
    """
    Concatenate the source-side payloads of a grouped script.

    The result has the payloads' own type.  `start` is only needed for
    a script with no source-side payload at all: "" for text, b"" for
    bytes, () for generic sequences.  Without it such a script gives None.
    """
    return _concat((edit.old for edit in edits), start)


def target_of(edits: Iterable[Edit], start: Any = None) -> Any:
    """Concatenate the target-side payloads of a grouped script."""
    return _concat((edit.new for edit in edits), start)


def patch(source: Sequence, edits: Iterable[Edit],
          granularity: Union[Granularity, str] = Granularity.CHAR) -> Any:
    """
    Apply a grouped script to `source` and return the target.

    `source` is read the way compute() reads it at `granularity`, so a
    bytearray is patched as bytes and text computed at BYTE granularity
    is patched as its UTF-8 encoding.  Payloads of another type than
    the source raise TypeError.  Every source-side payload must match
    the source at the current offset, and the script must consume the
    whole source; otherwise ValueError is raised.

        patch(a, compute(a, b, g).grouped_edits(), g) == b
    """
    view = SequenceView.of(source, granularity)
    whole = view.join(view.units)
    parts = []
    offset = 0
    for edit in edits:
        for payload in (edit.old, edit.new):
            if payload is not None and type(payload) is not type(whole):
                raise TypeError(
                    f"Script payload is {type(payload).__name__} but the source reads as "
                    f"{type(whole).__name__}; pass the granularity the script was computed with"
                )
        if edit.old is not None:
            end = offset + len(edit.old)
            if end > len(whole):
                raise ValueError(
                    f"Script overruns source at offset {offset}: "
                    f"{len(edit.old)} units requested, {len(whole) - offset} left"
                )
            window = whole[offset:end]
            if window != edit.old:
                raise ValueError(f"Mismatch at offset {offset}: {window!r} != {edit.old!r}")
            offset = end
        if edit.new is not None:
            parts.append(edit.new)
    if offset != len(whole):
        raise ValueError(f"Script incomplete: consumed {offset} of {len(whole)}")
    return _concat(parts, whole[:0])
