# -*- coding: utf-8 -*-
from appgift.core.models import Question
from .utils import format_weight, write_general_feedback, write_intro, write_twf


class MultiChoiceQuestion:
    """
    MULTICHOICE
    - "=" marks the fully correct answer of a single-answer question
    - "~" marks a zero-weight answer
    - "~%w%" carries any other weight (fraction * 100)
    """
    def __init__(self, question: Question):
        self.question = question

    def _lead(self, fraction: float) -> str:
        if fraction == 1 and self.question.single:
            return "="
        if not fraction:
            return "~"
        return f"~%{format_weight(fraction)}%"

    def to_gift(self) -> str:
        q = self.question
        fmt = q.questiontext.format
        lines = [write_intro(q) + "{"]
        for ans in q.answers:
            line = "\t" + self._lead(ans.fraction) + write_twf(ans.answer, fmt)
            if ans.feedback.text:
                line += "#" + write_twf(ans.feedback, fmt)
            lines.append(line)
        out = "\n".join(lines) + "\n"
        out += write_general_feedback(q)
        return out + "}\n"
