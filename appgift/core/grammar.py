# -*- coding: utf-8 -*-
from __future__ import annotations

import math
import re
from typing import List, Optional, Tuple, Union

from appgift.core.errors import MalformedNumeric
from appgift.core.escaper import GiftText
from appgift.core.models import FORMATS, MOODLE, TextWithFormat

# %50%  %-33.3333%  %100%
_WEIGHT_RE = re.compile(r"^%(-?\d{1,3}(?:\.\d*)?)%")

# [id:...] / [tag:...], "\]" allowed inside; a backslash always pairs with the next char
_ID_RE = re.compile(r"\[id:((?:\\.|[^\]\\\x00-\x1F\x7F])+)\]")
_TAG_RE = re.compile(r"\[tag:((?:\\.|[^\]\\<>`\x00-\x1F\x7F])+)\]")

# plain decimal: 3, -2.5, .5, 1e-05
_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

_HTML_TAG_RE = re.compile(r"<[^>]*>")

WILDCARD = "*"


# ========= Format tag =========
def parse_text_with_format(text: GiftText, default: str = MOODLE) -> TextWithFormat:
    """
    "[html]<b>x</b>" -> TextWithFormat("<b>x</b>", "html").
    Unknown tags are left in the text.
    """
    s = text.strip()
    fmt = default if default in FORMATS else MOODLE
    if s.startswith("["):
        close = s.find("]")
        if close > 0:
            tag = s[1:close].text.strip().lower()
            if tag in FORMATS:
                fmt = tag
                s = s[close + 1:].strip()
    return TextWithFormat(s.text, fmt)


def split_weight(part: GiftText) -> Tuple[Optional[float], GiftText]:
    """Leading %w% -> (w/100, rest). No prefix -> (None, part)."""
    m = _WEIGHT_RE.match(part.text)
    if not m:
        return None, part
    return float(m.group(1)) / 100, part[m.end():]


def split_feedback(part: GiftText, default: str = MOODLE) -> Tuple[TextWithFormat, TextWithFormat]:
    """"answer#feedback" -> (answer, feedback); split on the first '#'."""
    bits = part.split("#", 1)
    answer = parse_text_with_format(bits[0], default)
    feedback = parse_text_with_format(bits[1], default) if len(bits) > 1 else TextWithFormat("", default)
    return answer, feedback


# ========= Numerical =========
def _to_number(token: GiftText, what: str) -> float:
    s = token.strip().text
    if not _NUMBER_RE.match(s):
        raise MalformedNumeric(f"{what} must be a number, got {s!r}")
    value = float(s)
    if not math.isfinite(value):
        raise MalformedNumeric(f"{what} must be finite, got {s!r}")
    return value


def parse_numeric_answer(spec: GiftText) -> Tuple[Union[float, str], float]:
    """
    Numerical answer spec -> (answer, tolerance):
      - "a..b" -> ((a+b)/2, (b-a)/2)
      - "a:t"  -> (a, t)
      - "a"    -> (a, 0)
      - "*"    -> ("*", 0)
    """
    spec = spec.strip()
    if ".." in spec:
        low, high = spec.split("..", 1)
        lo = _to_number(low, "Numerical range start")
        hi = _to_number(high, "Numerical range end")
        answer = (lo + hi) / 2
        return answer, hi - answer
    if ":" in spec:
        value, tol = spec.split(":", 1)
        return _to_number(value, "Numerical answer"), _to_number(tol, "Numerical tolerance")
    if spec.text == WILDCARD:
        return WILDCARD, 0.0
    return _to_number(spec, "Numerical answer"), 0.0


# ========= Metadata =========
def _unescape_bracket(s: str) -> str:
    return s.replace("\\]", "]").strip()


def extract_metadata(comments: str) -> Tuple[str, List[str]]:
    """Comment buffer -> (idnumber, tags). First [id:] wins, every [tag:] counts."""
    comments = comments or ""
    m = _ID_RE.search(comments)
    idnumber = _unescape_bracket(m.group(1)) if m else ""
    tags = [_unescape_bracket(t.group(1)) for t in _TAG_RE.finditer(comments)]
    return idnumber, tags


def default_name(questiontext: str, length: int = 30) -> str:
    return _HTML_TAG_RE.sub("", questiontext or "")[:length] or "Question"
