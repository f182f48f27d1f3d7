# class CategoryQuestion
from appgift.core.escaper import escape_literal
from appgift.core.models import Question
from .utils import write_header


class CategoryQuestion:
    def __init__(self, question: Question):
        self.question = question
        self.qtype = "category"

    def to_gift(self):
        return write_header(self.question) + f"$CATEGORY: {escape_literal(self.question.category)}\n"
