# -*- coding: utf-8 -*-
from appgift.core.escaper import escape_literal
from appgift.core.models import Question
from .utils import format_weight, write_general_feedback, write_intro, write_twf


class ShortAnswerQuestion:
    """
    SHORTANSWER
    - every answer is written as "=%w%answer#feedback"
    """
    def __init__(self, question: Question):
        self.question = question

    def to_gift(self) -> str:
        q = self.question
        fmt = q.questiontext.format
        lines = [write_intro(q) + "{"]
        for ans in q.answers:
            lines.append(
                f"\t=%{format_weight(ans.fraction)}%{escape_literal(ans.answer)}"
                f"#{write_twf(ans.feedback, fmt)}"
            )
        out = "\n".join(lines) + "\n"
        out += write_general_feedback(q)
        return out + "}\n"
