"""
Parser for the snapshot file format.

Snapshot files are a restricted Markdown subset: ATX headings and fenced
code blocks. Everything else (blank lines, paragraphs) is ignored. The
parser is pure; it only turns text into an ordered list of nodes.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .errors import SnapshotParseError

_HEADING_RE = re.compile(r"^(#{1,6})(?:[ \t]+(.*?))?[ \t]*$")
_FENCE_RE = re.compile(r"^(`{3,})[ \t]*([^`]*?)[ \t]*$")


@dataclass(frozen=True)
class SourceLocation:
    """Position of a node in the snapshot text."""

    line: int  # 1-based
    column: int  # 0-based
    index: int  # offset into the text


@dataclass(frozen=True)
class Heading:
    level: int
    text: str
    location: SourceLocation


@dataclass(frozen=True)
class CodeBlock:
    language: Optional[str]
    text: str
    location: SourceLocation


SnapshotNode = Union[Heading, CodeBlock]


def clean_heading(text: str) -> str:
    """Strip one pair of wrapping backticks and surrounding whitespace."""
    if text.startswith("`"):
        text = text[1:]
    if text.endswith("`"):
        text = text[:-1]
    return text.strip()


def _is_closing_fence(line: str, fence: str) -> bool:
    stripped = line.strip()
    return len(stripped) >= len(fence) and stripped == "`" * len(stripped)


def parse_snapshot(text: str, path: Optional[Path] = None) -> list[SnapshotNode]:
    """
    Parse snapshot text into headings and code blocks.

    Raises:
        SnapshotParseError: if a code block is never closed.
    """
    nodes: list[SnapshotNode] = []
    lines = text.split("\n")
    offsets = []
    offset = 0
    for line in lines:
        offsets.append(offset)
        offset += len(line) + 1

    i = 0
    while i < len(lines):
        line = lines[i].rstrip("\r")
        location = SourceLocation(line=i + 1, column=0, index=offsets[i])

        fence_match = _FENCE_RE.match(line)
        if fence_match:
            fence = fence_match.group(1)
            language = fence_match.group(2) or None
            body: list[str] = []
            i += 1
            while i < len(lines) and not _is_closing_fence(lines[i].rstrip("\r"), fence):
                # Body lines are kept verbatim, including any "\r"
                body.append(lines[i])
                i += 1
            if i >= len(lines):
                raise SnapshotParseError("Unclosed code block", path, location)
            nodes.append(CodeBlock(language=language, text="\n".join(body), location=location))
            i += 1
            continue

        heading_match = _HEADING_RE.match(line)
        if heading_match:
            level = len(heading_match.group(1))
            nodes.append(Heading(level=level, text=heading_match.group(2) or "", location=location))

        i += 1

    return nodes
