# -*- coding: utf-8 -*-
"""
Backslash escapes of GIFT.

Parse direction: `tokenize()` scans raw text once and yields tagged tokens
(literal run | escaped char); `GiftText` is built from those tokens and keeps,
per character, whether it was escaped. Searching and splitting on a GiftText
only ever matches unescaped characters, so reserved characters written as
``\\:`` ``\\#`` ``\\=`` ``\\{`` ``\\}`` ``\\~`` stay content.

Export direction: `escape_literal()` writes the same escapes back.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, NamedTuple, Tuple, Union

RESERVED = ":#={}~"
TEXT = "text"
ESCAPED = "escaped"


class Token(NamedTuple):
    kind: str   # TEXT | ESCAPED
    value: str


def tokenize(raw: str) -> Iterator[Token]:
    r"""
    One forward pass over `raw`:
      - ``\\`` -> escaped backslash
      - ``\:`` ``\#`` ``\=`` ``\{`` ``\}`` ``\~`` -> escaped reserved char
      - ``\n`` -> escaped newline
      - any other backslash is literal
    """
    run: List[str] = []
    i, n = 0, len(raw or "")
    while i < n:
        ch = raw[i]
        nxt = raw[i + 1] if i + 1 < n else ""
        if ch == "\\" and (nxt == "\\" or nxt == "n" or (nxt and nxt in RESERVED)):
            if run:
                yield Token(TEXT, "".join(run))
                run = []
            yield Token(ESCAPED, "\n" if nxt == "n" else nxt)
            i += 2
            continue
        run.append(ch)
        i += 1
    if run:
        yield Token(TEXT, "".join(run))


TextLike = Union["GiftText", str]


class GiftText:
    """Immutable, escape-aware string."""

    __slots__ = ("_text", "_escaped")

    def __init__(self, text: str = "", escaped: Tuple[bool, ...] = ()):
        self._text = text
        self._escaped = escaped or (False,) * len(text)

    # --- construction ---
    @classmethod
    def from_tokens(cls, tokens: Iterable[Token]) -> "GiftText":
        chars: List[str] = []
        flags: List[bool] = []
        for tok in tokens:
            chars.append(tok.value)
            flags.extend([tok.kind == ESCAPED] * len(tok.value))
        return cls("".join(chars), tuple(flags))

    @classmethod
    def parse(cls, raw: str) -> "GiftText":
        return cls.from_tokens(tokenize(raw))

    @staticmethod
    def _coerce(other: TextLike) -> "GiftText":
        return other if isinstance(other, GiftText) else GiftText(other)

    # --- plain-string views ---
    @property
    def text(self) -> str:
        return self._text

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"GiftText({self.raw()!r})"

    def raw(self) -> str:
        """Render back to source form, escapes included."""
        out = []
        for ch, esc in zip(self._text, self._escaped):
            if esc:
                out.append("\\n" if ch == "\n" else "\\" + ch)
            else:
                out.append(ch)
        return "".join(out)

    def __len__(self) -> int:
        return len(self._text)

    def __bool__(self) -> bool:
        return bool(self._text)

    def __eq__(self, other) -> bool:
        if isinstance(other, GiftText):
            return self._text == other._text and self._escaped == other._escaped
        if isinstance(other, str):
            return self._text == other and not any(self._escaped)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self._text, self._escaped))

    def __getitem__(self, key) -> "GiftText":
        if not isinstance(key, slice):
            key = slice(key, key + 1 if key != -1 else None)
        return GiftText(self._text[key], self._escaped[key])

    def __add__(self, other: TextLike) -> "GiftText":
        other = self._coerce(other)
        return GiftText(self._text + other._text, self._escaped + other._escaped)

    def __radd__(self, other: TextLike) -> "GiftText":
        return self._coerce(other) + self

    # --- syntax-aware search ---
    def _is_syntax(self, pos: int, length: int) -> bool:
        return not any(self._escaped[pos:pos + length])

    def find(self, sub: str, start: int = 0) -> int:
        pos = self._text.find(sub, start)
        while pos != -1 and not self._is_syntax(pos, len(sub)):
            pos = self._text.find(sub, pos + 1)
        return pos

    def rfind(self, sub: str) -> int:
        end = len(self._text)
        pos = self._text.rfind(sub, 0, end)
        while pos != -1 and not self._is_syntax(pos, len(sub)):
            end = pos + len(sub) - 1
            pos = self._text.rfind(sub, 0, end)
        return pos

    def __contains__(self, sub: str) -> bool:
        return self.find(sub) != -1

    def startswith(self, prefix: str) -> bool:
        return self._text.startswith(prefix) and self._is_syntax(0, len(prefix))

    def endswith(self, suffix: str) -> bool:
        start = len(self._text) - len(suffix)
        return start >= 0 and self._text.endswith(suffix) and self._is_syntax(start, len(suffix))

    def split(self, sep: str, maxsplit: int = -1) -> List["GiftText"]:
        parts: List[GiftText] = []
        start = 0
        while maxsplit < 0 or len(parts) < maxsplit:
            pos = self.find(sep, start)
            if pos == -1:
                break
            parts.append(self[start:pos])
            start = pos + len(sep)
        parts.append(self[start:])
        return parts

    def replace(self, old: str, new: str) -> "GiftText":
        pieces = self.split(old)
        out = pieces[0]
        for piece in pieces[1:]:
            out = out + new + piece
        return out

    def strip(self) -> "GiftText":
        start, end = 0, len(self._text)
        while start < end and self._text[start].isspace() and not self._escaped[start]:
            start += 1
        while end > start and self._text[end - 1].isspace() and not self._escaped[end - 1]:
            end -= 1
        return self[start:end]


def mask(text: str) -> GiftText:
    """Raw GIFT text -> escape-aware text."""
    return GiftText.parse(text)


def unmask(text: TextLike) -> str:
    """Escape-aware text -> literal content."""
    return str(text)


def escape_literal(text) -> str:
    """Escape reserved characters for writing; carriage returns are dropped."""
    if text is None:
        return ""
    s = str(text)
    s = s.replace("\\", "\\\\")
    for ch in "#=~{}:":
        s = s.replace(ch, "\\" + ch)
    return s.replace("\n", "\\n").replace("\r", "")
