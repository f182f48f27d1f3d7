# gift_questions/numerical.py
from appgift.core.grammar import WILDCARD
from appgift.core.models import Question
from .utils import format_number, format_weight, write_general_feedback, write_intro, write_twf


class NumericalQuestion:
    def __init__(self, question: Question):
        self.question = question

    def to_gift(self):
        q = self.question
        fmt = q.questiontext.format
        gift = write_intro(q) + "{#\n"

        # "~" opens the catch-all entry and must come after every "=" answer
        catch_all = []
        for ans in q.answers:
            fb = write_twf(ans.feedback, fmt)
            is_wildcard = ans.answer == WILDCARD or ans.answer == ""
            if is_wildcard and not ans.fraction:
                catch_all.append(fb)
            elif is_wildcard:
                gift += f"\t=%{format_weight(ans.fraction)}%{WILDCARD}#{fb}\n"
            else:
                tol = format_number(ans.tolerance or 0)
                gift += f"\t=%{format_weight(ans.fraction)}%{format_number(ans.answer)}:{tol}#{fb}\n"
        # only one "~" entry is allowed; earlier catch-alls keep their place as "=%0%*"
        for fb in catch_all[:-1]:
            gift += f"\t=%0%{WILDCARD}#{fb}\n"
        for fb in catch_all[-1:]:
            gift += f"\t~#{fb}\n"

        gift += write_general_feedback(q)
        gift += "}\n"
        return gift
