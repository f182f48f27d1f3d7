# -*- coding: utf-8 -*-
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from appgift.core.config import load_config
from appgift.core.errors import UnsupportedVariant
from appgift.core.models import Question
from appgift.gift_questions import GiftQuiz


# ========= Helpers =========
def load_questions(json_file: Union[str, Path]) -> List[Question]:
    """JSON array (or a single object) of questions -> Question values."""
    with open(json_file, "r", encoding="utf-8") as f:
        data = json.load(f)
    return questions_from_data(data)


def questions_from_data(data: Any) -> List[Question]:
    # root can be a list or a single question
    items = data if isinstance(data, list) else [data]
    out = []
    for q in items:
        if isinstance(q, Question):
            out.append(q)
        elif isinstance(q, Mapping):
            out.append(Question.from_dict(q))
        else:
            raise UnsupportedVariant(f"Not a question object: {q!r}")
    return out


def export_gift(questions: Iterable[Union[Question, Mapping[str, Any]]]) -> str:
    """Questions -> GIFT text. Input objects are never modified."""
    quiz = GiftQuiz()
    for q in questions:
        quiz.add_question(q)
    return quiz.to_gift()


# ========= Main =========
def build_gift_from_json(
    json_file: Union[str, Path],
    gift_out: Optional[Union[str, Path]] = None,
    config: Optional[Dict[str, Any]] = None,
) -> str:
    cfg = {**load_config(None), **(config or {})}
    quiz = GiftQuiz()
    for q in load_questions(json_file):
        quiz.add_question(q)

    out = Path(gift_out) if gift_out else Path(json_file).with_suffix(".gift")
    out.parent.mkdir(parents=True, exist_ok=True)
    quiz.export(str(out))

    if cfg["verbose"]:
        count = quiz.counts()
        summary = " | ".join(f"{k}: {v}" for k, v in sorted(count.items()))
        print(f"[JSON] GIFT export: {out} | {summary or 'empty'}")
    return str(out)
