"""
levtrace.formats — Ready-made encoders for Levenshtein.render.

An encoder maps one grouped Edit to a string.  Two markups ship here:

    • wdiff — GNU wdiff style:   S[-at-]u[-r-]{+n+}day
    • html  — <del>/<ins> tags:  S<del>at</del>u<del>r</del><ins>n</ins>day

Any callable with the same shape can be passed instead.
"""

from html import escape
from typing import Any

from .core import Edit, EditOp


def _text(payload: Any) -> str:
    """Display form of a payload: text as is, bytes decoded, items space-joined."""
    if isinstance(payload, str):
        return payload
    if isinstance(payload, bytes):
        return payload.decode("utf-8", errors="backslashreplace")
    return " ".join(str(unit) for unit in payload)


def wdiff(edit: Edit) -> str:
    if edit.op == EditOp.EQUALITY:
        return _text(edit.new)
    if edit.op == EditOp.DELETION:
        return f"[-{_text(edit.old)}-]"
    if edit.op == EditOp.INSERTION:
        return f"{{+{_text(edit.new)}+}}"
    if edit.op == EditOp.SUBSTITUTION:
        return f"[-{_text(edit.old)}-]{{+{_text(edit.new)}+}}"
    raise ValueError(f"Unknown edit op: {edit.op!r}")


def html(edit: Edit) -> str:
    """
    Encode an edit as HTML.  Payloads are escaped, so the output can be
    dropped into a page as is.
    """
    if edit.op == EditOp.EQUALITY:
        return escape(_text(edit.new))
    if edit.op == EditOp.DELETION:
        return f"<del>{escape(_text(edit.old))}</del>"
    if edit.op == EditOp.INSERTION:
        return f"<ins>{escape(_text(edit.new))}</ins>"
    if edit.op == EditOp.SUBSTITUTION:
        return f"<del>{escape(_text(edit.old))}</del><ins>{escape(_text(edit.new))}</ins>"
    raise ValueError(f"Unknown edit op: {edit.op!r}")
