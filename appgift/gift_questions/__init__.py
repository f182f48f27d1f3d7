# Re-export every GIFT writer from gift_questions

# -*- coding: utf-8 -*-

from .GiftQuiz import GiftQuiz, WRITERS, writer_for
from .MultiChoiceQuestion import MultiChoiceQuestion
from .ShortAnswerQuestion import ShortAnswerQuestion
from .category import CategoryQuestion
from .description import DescriptionQuestion
from .essay import EssayQuestion
from .matching import MatchingQuestion
from .numerical import NumericalQuestion
from .truefalse import TrueFalseQuestion

__all__ = [
    "GiftQuiz",
    "WRITERS",
    "writer_for",
    "CategoryQuestion",
    "DescriptionQuestion",
    "EssayQuestion",
    "MatchingQuestion",
    "MultiChoiceQuestion",
    "NumericalQuestion",
    "ShortAnswerQuestion",
    "TrueFalseQuestion",
]
