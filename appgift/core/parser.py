# -*- coding: utf-8 -*-
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from appgift.adapters.sources import read_source_text
from appgift.core.classifier import classify
from appgift.core.config import load_config
from appgift.core.errors import (
    BraceMismatch, InsufficientAlternatives, MalformedNumeric, MissingSeparator,
)
from appgift.core.escaper import GiftText, mask
from appgift.core.grammar import (
    WILDCARD, default_name, extract_metadata, parse_numeric_answer,
    parse_text_with_format, split_feedback, split_weight,
)
from appgift.core.models import (
    DESCRIPTION_DEFAULTS, ESSAY_DEFAULTS, ChoiceAnswer, Question, SubQuestion,
    TextWithFormat, ValueAnswer,
)
from appgift.core.segmenter import Block, split_blocks

CATEGORY_MARKER = "$CATEGORY:"
NAME_MARKER = "::"
FEEDBACK_MARKER = "####"


def _non_empty(parts: List[GiftText]) -> List[GiftText]:
    return [p for p in (x.strip() for x in parts) if p]


# ========= Type parsers =========
def _parse_multichoice(body: GiftText, fmt: str, line: int) -> Dict[str, Any]:
    single = "=" in body
    parts = _non_empty(body.replace("=", "~=").split("~"))
    if len(parts) < 2:
        raise InsufficientAlternatives("Multiple choice requires at least 2 answers", line)

    answers = []
    for part in parts:
        if part.startswith("="):
            weight, rest = 1.0, part[1:]
        else:
            weight, rest = split_weight(part)
        answer, feedback = split_feedback(rest, fmt)
        answers.append(ChoiceAnswer(answer, weight or 0.0, feedback))
    return {"single": single, "answernumbering": "abc", "answers": tuple(answers)}


def _parse_match(body: GiftText, fmt: str, line: int) -> Dict[str, Any]:
    parts = _non_empty(body.split("="))
    if len(parts) < 2:
        raise InsufficientAlternatives("Matching requires at least 2 pairs", line)

    subs = []
    for part in parts:
        marker = part.find("->")
        if marker == -1:
            raise MissingSeparator(f"Matching pair must contain '->': {part.text!r}", line)
        subs.append(SubQuestion(
            questiontext=parse_text_with_format(part[:marker], fmt),
            answertext=part[marker + 2:].strip().text,
        ))
    return {"subquestions": tuple(subs)}


def _parse_truefalse(body: GiftText, fmt: str, line: int) -> Dict[str, Any]:
    # verdict # feedback when wrong # feedback when right
    bits = body.split("#", 2)
    blank = TextWithFormat("", fmt)
    wrong = parse_text_with_format(bits[1], fmt) if len(bits) > 1 else blank
    right = parse_text_with_format(bits[2], fmt) if len(bits) > 2 else blank
    is_true = bits[0].strip().text.upper() in ("T", "TRUE")
    return {
        "correctanswer": is_true,
        "feedbacktrue": right if is_true else wrong,
        "feedbackfalse": wrong if is_true else right,
        "penalty": 1.0,
    }


def _parse_shortanswer(body: GiftText, fmt: str, line: int) -> Dict[str, Any]:
    parts = _non_empty(body.split("="))
    if not parts:
        raise InsufficientAlternatives("Short answer requires at least 1 answer", line)

    answers = []
    for part in parts:
        weight, rest = split_weight(part)
        answer, feedback = split_feedback(rest, fmt)
        answers.append(ValueAnswer(answer.text, 1.0 if weight is None else weight, feedback))
    return {"answers": tuple(answers)}


def _parse_numerical(body: GiftText, fmt: str, line: int) -> Dict[str, Any]:
    rest = body[1:]
    wildcard: Optional[GiftText] = None
    tpos = rest.find("~")
    if tpos != -1:
        rest, wildcard = rest[:tpos], rest[tpos:]

    parts = _non_empty(rest.split("="))
    if not parts:
        raise InsufficientAlternatives("Numerical requires at least 1 answer", line)

    answers = []
    for part in parts:
        weight, spec = split_weight(part)
        bits = spec.split("#", 1)
        feedback = parse_text_with_format(bits[1], fmt) if len(bits) > 1 else TextWithFormat("", fmt)
        try:
            value, tolerance = parse_numeric_answer(bits[0])
        except MalformedNumeric as e:
            raise MalformedNumeric(str(e), line) from None
        answers.append(ValueAnswer(value, 1.0 if weight is None else weight, feedback, tolerance))

    if wildcard is not None:
        _, feedback = split_feedback(wildcard, fmt)
        answers.append(ValueAnswer(WILDCARD, 0.0, feedback, 0.0))
    return {"answers": tuple(answers)}


_PARSERS = {
    "multichoice": _parse_multichoice,
    "match": _parse_match,
    "truefalse": _parse_truefalse,
    "shortanswer": _parse_shortanswer,
    "numerical": _parse_numerical,
}


# ========= Block -> Question =========
def parse_block(block: Block, config: Optional[Dict[str, Any]] = None) -> Question:
    cfg = config or load_config(None)
    line = block.line
    text = mask(block.body)

    if text.startswith(CATEGORY_MARKER):
        category = text[len(CATEGORY_MARKER):].split("\n", 1)[0].strip()
        return Question(qtype="category", category=category.text)

    name = ""
    if text.startswith(NAME_MARKER):
        pos = text.find(NAME_MARKER, len(NAME_MARKER))
        if pos != -1:
            name = text[len(NAME_MARKER):pos].strip().text
            text = text[pos + len(NAME_MARKER):].strip()

    start, finish = text.find("{"), text.rfind("}")
    description = start == -1 and finish == -1
    answer = GiftText()
    if description:
        qtext = text
    elif start == -1 or finish == -1 or finish < start:
        raise BraceMismatch(f"Brace error in question: {text.text}", line)
    else:
        answer = text[start + 1:finish].strip()
        if finish == len(text) - 1:
            qtext = text[:start] + text[finish + 1:]
        else:
            qtext = text[:start] + cfg["blank_fill"] + text[finish + 1:]

    generalfeedback = GiftText()
    pos = answer.rfind(FEEDBACK_MARKER)
    if pos != -1:
        generalfeedback = answer[pos + len(FEEDBACK_MARKER):]
        answer = answer[:pos].strip()

    questiontext = parse_text_with_format(qtext)
    idnumber, tags = extract_metadata(block.comment_text)
    common = dict(
        name=name or default_name(questiontext.text, cfg["name_length"]),
        questiontext=questiontext,
        generalfeedback=parse_text_with_format(generalfeedback, questiontext.format),
        idnumber=idnumber,
        tags=tuple(tags),
    )

    if description:
        return Question(qtype="description", settings=tuple(DESCRIPTION_DEFAULTS.items()), **common)
    qtype = classify(answer)
    if qtype == "essay":
        return Question(qtype="essay", settings=tuple(ESSAY_DEFAULTS.items()), **common)
    fields = _PARSERS[qtype](answer, questiontext.format, line)
    return Question(qtype=qtype, **common, **fields)


def parse_gift(text: str, config: Optional[Dict[str, Any]] = None) -> List[Question]:
    """Whole GIFT document -> questions. The first bad block aborts the parse."""
    cfg = {**load_config(None), **(config or {})}
    return [parse_block(block, cfg) for block in split_blocks(text)]


# ========= JSON =========
def questions_to_json(questions: List[Question], config: Optional[Dict[str, Any]] = None) -> str:
    cfg = {**load_config(None), **(config or {})}
    return json.dumps(
        [q.to_dict() for q in questions],
        ensure_ascii=cfg["ensure_ascii"],
        indent=cfg["json_indent"],
    )


def parse_gift_file(
    source: Union[str, Path],
    json_out: Optional[Union[str, Path]] = None,
    config: Optional[Dict[str, Any]] = None,
) -> str:
    """
    .gift / .txt / .docx -> JSON file.
    Default output: <source stem>.json next to the source.
    """
    cfg = {**load_config(None), **(config or {})}
    src = Path(source)
    questions = parse_gift(read_source_text(src), cfg)

    out = Path(json_out) if json_out else src.with_suffix(".json")
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(questions_to_json(questions, cfg) + "\n", encoding="utf-8")

    if cfg["verbose"]:
        print(f"[GIFT] Parsed {len(questions)} question(s) -> {out}")
    return str(out)
