"""
levtrace.tokens — Turn raw input into sequences of atomic units.

The core compares units with ``==`` and never looks inside them, so the
choice of unit is made here, before a computation starts:

    • CHAR  — one code point per unit               "cat"  → ('c', 'a', 't')
    • WORD  — word runs, whitespace runs, and single
              punctuation marks                     "a b!" → ('a', ' ', 'b', '!')
    • BYTE  — one single-byte ``bytes`` per unit    b"hi"  → (b'h', b'i')

Every tokenizer is lossless: joining the units gives back the input.
"""

import re
from enum import Enum
from typing import Union


# A word is a run of word characters and the combining marks that follow
# them, with inner apostrophes and points kept ("can't", "3.14").  Then
# whitespace runs, then one character of anything else.
_WORD = r"\w[\w\u0300-\u036f]*"
WORD_PATTERN = re.compile(rf"{_WORD}(?:['.\u2019]{_WORD})*|\s+|[^\w\s]")


class Granularity(Enum):
    """What one atomic unit of a string input is."""
    CHAR = "char"
    WORD = "word"
    BYTE = "byte"


def chars(text: str) -> tuple[str, ...]:
    return tuple(text)


def words(text: str) -> tuple[str, ...]:
    """
    Split text on word boundaries, keeping the separators as units.

        words("One fine day, ...") == ("One", " ", "fine", " ", "day",
                                       ",", " ", ".", ".", ".")
    """
    return tuple(WORD_PATTERN.findall(text))


def byte_units(data: bytes) -> tuple[bytes, ...]:
    # Slicing keeps each unit a bytes object; indexing would give ints.
    return tuple(data[i:i + 1] for i in range(len(data)))


def tokenize(text: str, granularity: Union[Granularity, str] = Granularity.CHAR) -> tuple:
    """
    Tokenize a string at the requested granularity.

    BYTE granularity encodes the text as UTF-8 first, so the units are
    ``bytes`` and runs of them join back into ``bytes``.

    Raises ValueError for an unknown granularity name.
    """
    granularity = Granularity(granularity)
    if granularity is Granularity.WORD:
        return words(text)
    if granularity is Granularity.BYTE:
        return byte_units(text.encode("utf-8"))
    return chars(text)
