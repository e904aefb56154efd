"""
levtrace — Levenshtein distance that shows its work
===================================================

    levenshtein("kitten", "sitting").distance()      → 3
    levenshtein("cats", "cup").raw_edits()           → [Equality(0, 'c'),
                                                        Deletion(1, 'a'),
                                                        Substitution(2, 't' → 'u'),
                                                        Substitution(3, 's' → 'p')]
    levenshtein("Saturday", "Sunday").render(wdiff)  → "S[-at-]u[-r-]{+n+}day"

One computation gives three views of the same minimal alignment:
  • the distance (unit cost insert / delete / substitute)
  • the raw, one-unit-at-a-time edit path
  • the path grouped into runs, ready to render with any encoder

Inputs are strings (split into characters, words or bytes), byte
strings, or any other finite sequence of comparable elements.
"""

from levtrace.core import (
    # Types
    EditOp,
    Transformation,
    Edit,
    SequenceView,
    UnitKind,
    # Computation
    Levenshtein,
    compute,
    levenshtein,
    levenshtein_words,
    render,
    # Scalar distance
    distance,
    normalized_distance,
    # Scripts
    patch,
    source_of,
    target_of,
)
from levtrace.tokens import Granularity, tokenize, chars, words, byte_units
from levtrace.formats import wdiff, html

__version__ = "0.1.0"
__all__ = [
    "EditOp", "Transformation", "Edit", "SequenceView", "UnitKind",
    "Levenshtein", "compute", "levenshtein", "levenshtein_words", "render",
    "distance", "normalized_distance",
    "patch", "source_of", "target_of",
    "Granularity", "tokenize", "chars", "words", "byte_units",
    "wdiff", "html",
]
