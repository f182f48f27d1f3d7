# class EssayQuestion
from appgift.core.models import Question
from .utils import write_general_feedback, write_intro


class EssayQuestion:
    def __init__(self, question: Question):
        self.question = question
        self.qtype = "essay"

    def to_gift(self):
        # empty braces: no answers, only the general feedback
        return write_intro(self.question) + "{" + write_general_feedback(self.question, indent="") + "}\n"
