# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from appgift.core.errors import MalformedNumeric

MOODLE, HTML, PLAIN, MARKDOWN = "moodle", "html", "plain", "markdown"
FORMATS = (MOODLE, HTML, PLAIN, MARKDOWN)

QTYPES = ("category", "description", "essay", "multichoice", "match",
          "truefalse", "shortanswer", "numerical")

ESSAY_DEFAULTS: Dict[str, Any] = {
    "responseformat": "editor", "responserequired": 1, "responsefieldlines": 15,
    "attachments": 0, "attachmentsrequired": 0,
    "graderinfo": {"text": "", "format": HTML},
    "responsetemplate": {"text": "", "format": HTML},
}
DESCRIPTION_DEFAULTS: Dict[str, Any] = {"defaultmark": 0, "length": 0}


def _norm_format(fmt: Any, default: str = MOODLE) -> str:
    f = str(fmt or "").strip().lower()
    return f if f in FORMATS else default


@dataclass(frozen=True)
class TextWithFormat:
    text: str = ""
    format: str = MOODLE

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text, "format": self.format}

    @classmethod
    def from_value(cls, value: Any, fmt: Any = None, default: str = MOODLE) -> "TextWithFormat":
        """Accepts {"text", "format"}, a plain string (+ sibling format) or None."""
        if isinstance(value, TextWithFormat):
            return value
        if isinstance(value, Mapping):
            return cls(str(value.get("text") or ""), _norm_format(value.get("format") or fmt, default))
        if value is None:
            return cls("", _norm_format(fmt, default))
        return cls(str(value), _norm_format(fmt, default))


@dataclass(frozen=True)
class ChoiceAnswer:
    answer: TextWithFormat = field(default_factory=TextWithFormat)
    fraction: float = 0.0
    feedback: TextWithFormat = field(default_factory=TextWithFormat)

    def to_dict(self) -> Dict[str, Any]:
        return {"answer": self.answer.to_dict(), "fraction": self.fraction,
                "feedback": self.feedback.to_dict()}


@dataclass(frozen=True)
class ValueAnswer:
    """shortanswer / numerical answer. `answer` is a str, a float, or "*"."""
    answer: Union[float, str] = ""
    fraction: float = 1.0
    feedback: TextWithFormat = field(default_factory=TextWithFormat)
    tolerance: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {"answer": self.answer}
        if self.tolerance is not None:
            d["tolerance"] = self.tolerance
        d["fraction"] = self.fraction
        d["feedback"] = self.feedback.to_dict()
        return d


@dataclass(frozen=True)
class SubQuestion:
    questiontext: TextWithFormat = field(default_factory=TextWithFormat)
    answertext: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"questiontext": self.questiontext.to_dict(), "answertext": self.answertext}


@dataclass(frozen=True)
class Question:
    qtype: str = ""
    name: str = ""
    questiontext: TextWithFormat = field(default_factory=TextWithFormat)
    generalfeedback: TextWithFormat = field(default_factory=TextWithFormat)
    idnumber: str = ""
    tags: Tuple[str, ...] = ()
    id: Optional[str] = None
    # category
    category: str = ""
    # multichoice
    single: bool = False
    answernumbering: str = "abc"
    # multichoice / shortanswer / numerical
    answers: Tuple[Union[ChoiceAnswer, ValueAnswer], ...] = ()
    # match
    subquestions: Tuple[SubQuestion, ...] = ()
    # truefalse
    correctanswer: bool = False
    feedbacktrue: TextWithFormat = field(default_factory=TextWithFormat)
    feedbackfalse: TextWithFormat = field(default_factory=TextWithFormat)
    penalty: Optional[float] = None
    # essay / description fixed settings
    settings: Tuple[Tuple[str, Any], ...] = ()

    # ========= JSON interchange =========
    def to_dict(self) -> Dict[str, Any]:
        if self.qtype == "category":
            return {"qtype": "category", "category": self.category}

        d: Dict[str, Any] = {"qtype": self.qtype}
        if self.id is not None:
            d["id"] = self.id
        d.update({
            "name": self.name,
            "questiontext": self.questiontext.to_dict(),
            "generalfeedback": self.generalfeedback.to_dict(),
            "idnumber": self.idnumber,
            "tags": list(self.tags),
        })
        d.update({k: (dict(v) if isinstance(v, Mapping) else v) for k, v in self.settings})

        if self.qtype == "multichoice":
            d["single"] = self.single
            d["answernumbering"] = self.answernumbering
            d["answers"] = [a.to_dict() for a in self.answers]
        elif self.qtype == "match":
            d["subquestions"] = [s.to_dict() for s in self.subquestions]
        elif self.qtype == "truefalse":
            d["correctanswer"] = self.correctanswer
            d["feedbacktrue"] = self.feedbacktrue.to_dict()
            d["feedbackfalse"] = self.feedbackfalse.to_dict()
            d["penalty"] = 1 if self.penalty is None else self.penalty
        elif self.qtype in ("shortanswer", "numerical"):
            d["answers"] = [a.to_dict() for a in self.answers]
        return d

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Question":
        """
        Build from an interchange object, parser output or hand-authored:
        - missing fields fall back to the variant's defaults
        - flat shape ("questiontext": str + "questiontextformat") is accepted
        """
        qtype = str(d.get("qtype") or "").strip()
        if qtype == "category":
            return cls(qtype="category", category=str(d.get("category") or "").strip())

        qt = TextWithFormat.from_value(d.get("questiontext"), d.get("questiontextformat"))
        fmt = qt.format

        def _text(key: str, value: Any = None) -> TextWithFormat:
            raw = d.get(key) if value is None else value
            return TextWithFormat.from_value(raw, d.get(key + "format"), default=fmt)

        ident = d.get("id")
        common = dict(
            qtype=qtype,
            name=str(d.get("name") or ""),
            questiontext=qt,
            generalfeedback=_text("generalfeedback"),
            idnumber=str(d.get("idnumber") or ""),
            tags=tuple(str(t) for t in (d.get("tags") or [])),
            id=None if ident is None else str(ident),
        )

        if qtype == "essay":
            return cls(settings=_settings(ESSAY_DEFAULTS, d), **common)
        if qtype == "description":
            return cls(settings=_settings(DESCRIPTION_DEFAULTS, d), **common)
        if qtype == "multichoice":
            answers = tuple(
                ChoiceAnswer(
                    answer=TextWithFormat.from_value(a.get("answer"), a.get("answerformat"), fmt),
                    fraction=_as_fraction(a.get("fraction"), 0.0),
                    feedback=TextWithFormat.from_value(a.get("feedback"), a.get("feedbackformat"), fmt),
                )
                for a in (d.get("answers") or [])
            )
            return cls(single=bool(d.get("single", False)),
                       answernumbering=str(d.get("answernumbering") or "abc"),
                       answers=answers, **common)
        if qtype == "match":
            subs = tuple(
                SubQuestion(
                    questiontext=TextWithFormat.from_value(s.get("questiontext"), s.get("questiontextformat"), fmt),
                    answertext=str(s.get("answertext") or ""),
                )
                for s in (d.get("subquestions") or [])
            )
            return cls(subquestions=subs, **common)
        if qtype == "truefalse":
            return cls(correctanswer=bool(d.get("correctanswer", False)),
                       feedbacktrue=_text("feedbacktrue"),
                       feedbackfalse=_text("feedbackfalse"),
                       penalty=_as_fraction(d.get("penalty"), 1.0), **common)
        if qtype in ("shortanswer", "numerical"):
            answers = tuple(_value_answer(a, qtype, fmt) for a in (d.get("answers") or []))
            return cls(answers=answers, **common)
        return cls(**common)


def _value_answer(a: Mapping[str, Any], qtype: str, fmt: str) -> ValueAnswer:
    value = _as_value(a.get("answer"), qtype)
    # numerical "*" is the catch-all wrong answer: no credit unless a fraction is given
    catch_all = qtype == "numerical" and value == "*"
    fraction = _as_fraction(a.get("fraction"), 0.0 if catch_all else 1.0)
    return ValueAnswer(
        answer=value,
        fraction=fraction,
        feedback=TextWithFormat.from_value(a.get("feedback"), a.get("feedbackformat"), fmt),
        tolerance=(_as_fraction(a.get("tolerance"), 0.0) if qtype == "numerical" else None),
    )


def _settings(defaults: Mapping[str, Any], d: Mapping[str, Any]) -> Tuple[Tuple[str, Any], ...]:
    return tuple((k, d.get(k, v)) for k, v in defaults.items())


def _as_fraction(value: Any, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise MalformedNumeric(f"Expected a number, got {value!r}") from None


def _as_value(value: Any, qtype: str) -> Union[float, str]:
    if isinstance(value, Mapping):
        value = value.get("text")
    if qtype == "numerical":
        if value is None or str(value).strip() in ("", "*"):
            return "*"
        try:
            return float(value)
        except (TypeError, ValueError):
            raise MalformedNumeric(f"Numerical answer must be a number, got {value!r}") from None
    return "" if value is None else str(value)
