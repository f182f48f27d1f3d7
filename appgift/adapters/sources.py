# -*- coding: utf-8 -*-
from __future__ import annotations

from pathlib import Path
from typing import Iterator, Union

from docx import Document
from docx.document import Document as DocxDocument
from docx.text.paragraph import Paragraph

DOCX_SUFFIXES = {".docx"}


def iter_paragraphs(parent) -> Iterator[Paragraph]:
    """Top-level paragraphs in body order; tables are skipped."""
    from docx.oxml.ns import qn
    elm = parent.element.body if isinstance(parent, DocxDocument) else parent._element
    for child in elm.iterchildren():
        if child.tag == qn("w:p"):
            yield Paragraph(child, parent)


def read_docx_text(path: Union[str, Path]) -> str:
    """One GIFT line per Word paragraph; empty paragraphs become blank lines."""
    doc = Document(str(path))
    return "\n".join((p.text or "").rstrip() for p in iter_paragraphs(doc))


def read_source_text(path: Union[str, Path]) -> str:
    p = Path(path)
    if p.suffix.lower() in DOCX_SUFFIXES:
        return read_docx_text(p)
    return p.read_text(encoding="utf-8-sig")
