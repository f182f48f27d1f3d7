# class TrueFalseQuestion
from appgift.core.models import Question
from .utils import write_general_feedback, write_intro, write_twf


class TrueFalseQuestion:
    def __init__(self, question: Question):
        self.question = question

    def to_gift(self):
        q = self.question
        fmt = q.questiontext.format
        if q.correctanswer:
            right, wrong = q.feedbacktrue, q.feedbackfalse
        else:
            right, wrong = q.feedbackfalse, q.feedbacktrue
        right = write_twf(right, fmt)
        wrong = write_twf(wrong, fmt)

        gift = write_intro(q)
        gift += "{" + ("TRUE" if q.correctanswer else "FALSE")
        if wrong:
            gift += "#" + wrong
        elif right:
            gift += "#"
        if right:
            gift += "#" + right
        gift += write_general_feedback(q, indent="")
        gift += "}\n"
        return gift
