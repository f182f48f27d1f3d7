# class MatchingQuestion
from appgift.core.escaper import escape_literal
from appgift.core.models import Question
from .utils import write_general_feedback, write_intro, write_twf


class MatchingQuestion:
    def __init__(self, question: Question):
        self.question = question
        self.qtype = "match"

    def to_gift(self):
        q = self.question
        fmt = q.questiontext.format
        gift = write_intro(q) + "{\n"
        for sub in q.subquestions:
            gift += f"\t={write_twf(sub.questiontext, fmt)} -> {escape_literal(sub.answertext)}\n"
        gift += write_general_feedback(q)
        gift += "}\n"
        return gift
