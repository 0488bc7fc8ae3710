"""
Types for inline snapshots: snapshots written as literals in test source.
"""
from __future__ import annotations

import enum
import inspect
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

InlineSnapshotValue = Union[bool, int, float, str, None]


class _Missing:
    """Marks an inline snapshot whose expected value was never written."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


class MatchStatus(enum.Enum):
    MATCH = "MATCH"
    NO_MATCH = "NO_MATCH"
    UPDATE = "UPDATE"


@dataclass(frozen=True)
class CallSite:
    """Source position of an inline snapshot assertion."""

    line: Optional[int]  # 1-based
    column: Optional[int]  # 0-based
    path: Optional[Path] = None

    def is_valid(self) -> bool:
        return (
            isinstance(self.line, int)
            and isinstance(self.column, int)
            and self.line >= 1
            and self.column >= 0
        )


@dataclass(frozen=True)
class InlineSnapshotUpdate:
    """A pending rewrite of the literal found at ``line``/``column``."""

    line: int
    column: int
    snapshot: InlineSnapshotValue


def capture_call_site(depth: int = 1) -> CallSite:
    """
    Return the call site ``depth`` frames above the caller.

    With ``depth=1`` this is the line that called the function calling
    ``capture_call_site``. The column is ``None`` when the interpreter does
    not record column positions for that frame.
    """
    frame = inspect.currentframe()
    try:
        for _ in range(depth + 1):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            return CallSite(line=None, column=None)

        info = inspect.getframeinfo(frame, context=0)
        positions = getattr(info, "positions", None)
        column = positions.col_offset if positions is not None else None
        return CallSite(line=info.lineno, column=column, path=Path(info.filename))
    finally:
        del frame
