# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Any, List, Mapping, Union

from appgift.core.errors import UnsupportedVariant
from appgift.core.models import Question

from .MultiChoiceQuestion import MultiChoiceQuestion
from .ShortAnswerQuestion import ShortAnswerQuestion
from .category import CategoryQuestion
from .description import DescriptionQuestion
from .essay import EssayQuestion
from .matching import MatchingQuestion
from .numerical import NumericalQuestion
from .truefalse import TrueFalseQuestion

WRITERS = {
    "category": CategoryQuestion,
    "description": DescriptionQuestion,
    "essay": EssayQuestion,
    "multichoice": MultiChoiceQuestion,
    "match": MatchingQuestion,
    "truefalse": TrueFalseQuestion,
    "shortanswer": ShortAnswerQuestion,
    "numerical": NumericalQuestion,
}


def writer_for(question: Union[Question, Mapping[str, Any]]):
    """Question (or its dict form) -> writer object with .to_gift()."""
    if not isinstance(question, Question):
        question = Question.from_dict(question)
    cls = WRITERS.get(question.qtype)
    if cls is None:
        raise UnsupportedVariant(f"Unsupported qtype in exporter: {question.qtype!r}")
    return cls(question)


class GiftQuiz:
    """
    Ordered list of GIFT blocks.
    - add_category(path) inserts a $CATEGORY block right before the next question,
      skipping empty paths and repeats of the category just inserted
    - add_question(q) accepts a Question or its dict form
    """

    def __init__(self):
        self._items: List[object] = []
        self._last_category: str | None = None

    # --- Category API ---
    def add_category(self, cat: str) -> None:
        if not cat:
            return
        cat = str(cat).strip().strip("/")
        if not cat or cat == "0":
            return
        if self._last_category == cat:
            return
        self._items.append(CategoryQuestion(Question(qtype="category", category=cat)))
        self._last_category = cat

    # --- Question API ---
    def add_question(self, question: Union[Question, Mapping[str, Any]]) -> None:
        writer = writer_for(question)
        if writer.question.qtype == "category":
            self._last_category = writer.question.category
        self._items.append(writer)

    def __len__(self) -> int:
        return len(self._items)

    def counts(self) -> dict:
        out: dict = {}
        for w in self._items:
            out[w.question.qtype] = out.get(w.question.qtype, 0) + 1
        return out

    def to_gift(self) -> str:
        # every block is followed by one blank line
        return "".join(w.to_gift() + "\n" for w in self._items)

    def export(self, filepath: str) -> None:
        gift = self.to_gift()
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(gift)
