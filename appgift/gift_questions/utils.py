# -*- coding: utf-8 -*-
import re
from typing import Optional

from appgift.core.escaper import escape_literal
from appgift.core.models import MOODLE, Question, TextWithFormat


def write_text(text: Optional[str], fmt: Optional[str], default: str = MOODLE) -> str:
    """Escaped text, prefixed with [format] when it differs from `default`."""
    out = f"[{fmt}]" if text and fmt and fmt != default else ""
    return out + escape_literal(text or "")


def write_twf(value: TextWithFormat, default: str = MOODLE) -> str:
    return write_text(value.text, value.format, default)


def write_name(name: Optional[str]) -> str:
    return f"::{escape_literal(name or '')}::"


_CONTROL_RE = re.compile(r"[\x00-\x1F\x7F]+")


def _comment_safe(value) -> str:
    """One comment line: control characters become a space, "]" is escaped."""
    return _CONTROL_RE.sub(" ", str(value or "")).replace("]", "\\]")


def write_header(q: Question) -> str:
    """
    // question: <id>  name: <name>
    // [id:...] [tag:...] ...        (only when present)
    """
    out = f"// question: {_comment_safe(q.id)}  name: {_comment_safe(q.name)}\n"
    if q.qtype == "category":
        return out
    bits = []
    if q.idnumber:
        bits.append("[id:" + _comment_safe(q.idnumber) + "]")
    for tag in q.tags:
        bits.append("[tag:" + _comment_safe(tag) + "]")
    if bits:
        out += "// " + " ".join(bits) + "\n"
    return out


def write_general_feedback(q: Question, indent: str = "\t") -> str:
    gf = write_twf(q.generalfeedback, q.questiontext.format)
    if not gf:
        return ""
    line = "####" + gf
    return indent + line + "\n" if indent else line


def write_intro(q: Question) -> str:
    """Header, ::name:: and question text; the answer body follows."""
    return write_header(q) + write_name(q.name) + write_twf(q.questiontext)


def format_number(value) -> str:
    v = float(value)
    if v.is_integer():
        return str(int(v))
    return repr(v)


def format_weight(fraction) -> str:
    """0.5 -> "50", 1/3 -> "33.3333333333"."""
    pct = round(float(fraction) * 100, 10)
    if pct.is_integer():
        return str(int(pct))
    return f"{pct:.10f}".rstrip("0").rstrip(".")
