# -*- coding: utf-8 -*-
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List

COMMENT_MARKER = "//"
_NEWLINES_RE = re.compile(r"\r\n?")


@dataclass(frozen=True)
class Block:
    """One question's worth of lines; comment lines moved to `comments`."""
    lines: List[str]
    comments: List[str]
    line: int  # 1-based line number of the first line

    @property
    def body(self) -> str:
        return "\n".join(self.lines).strip()

    @property
    def comment_text(self) -> str:
        return "\n".join(self.comments)


def _make_block(raw_lines: List[str], first_line: int) -> Block:
    lines: List[str] = []
    comments: List[str] = []
    for ln in raw_lines:
        s = ln.strip()
        if s.startswith(COMMENT_MARKER):
            comments.append(s[len(COMMENT_MARKER):].strip())
            lines.append(" ")  # keep line positions
        else:
            lines.append(ln)
    return Block(lines, comments, first_line)


def split_blocks(text: str) -> Iterator[Block]:
    """
    Split GIFT source into question blocks:
    - whitespace-only lines separate blocks
    - blocks made only of comments are dropped
    """
    buf: List[str] = []
    start = 1
    lines = _NEWLINES_RE.sub("\n", text or "").split("\n")
    for no, line in enumerate(lines, 1):
        if line.strip():
            if not buf:
                start = no
            buf.append(line)
            continue
        if buf:
            block = _make_block(buf, start)
            buf = []
            if block.body:
                yield block
    if buf:
        block = _make_block(buf, start)
        if block.body:
            yield block
