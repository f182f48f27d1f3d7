# -*- coding: utf-8 -*-
from appgift.core.escaper import GiftText

TRUEFALSE_TOKENS = {"T", "TRUE", "F", "FALSE"}


def classify(body: GiftText) -> str:
    """
    Answer span (general feedback already removed) -> qtype.
    Order matters: '=' is both the shortanswer/match separator and the
    multichoice correct marker, so '~' is checked first.
    """
    body = body.strip()
    if not body:
        return "essay"
    if body.startswith("#"):
        return "numerical"
    if "~" in body:
        return "multichoice"
    if "=" in body and "->" in body:
        return "match"
    verdict = body.split("#", 1)[0].strip().text.upper()
    if verdict in TRUEFALSE_TOKENS:
        return "truefalse"
    return "shortanswer"
