# class DescriptionQuestion
from appgift.core.models import Question
from .utils import write_intro


class DescriptionQuestion:
    def __init__(self, question: Question):
        self.question = question
        self.qtype = "description"

    def to_gift(self):
        return write_intro(self.question) + "\n"
