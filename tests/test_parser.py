import pytest

from appgift.core.errors import (
    BraceMismatch, InsufficientAlternatives, MalformedNumeric, MissingSeparator,
)
from appgift.core.models import TextWithFormat
from appgift.core.parser import parse_gift


def one(text, **config):
    questions = parse_gift(text, config or None)
    assert len(questions) == 1
    return questions[0]


# ---------- scenarios ----------
def test_named_shortanswer():
    q = one("::Q1::Capital of France {=Paris}")
    assert q.qtype == "shortanswer"
    assert q.name == "Q1"
    assert q.questiontext == TextWithFormat("Capital of France", "moodle")
    assert [(a.answer, a.fraction) for a in q.answers] == [("Paris", 1.0)]


def test_truefalse_without_feedback():
    q = one("Is the sky blue? {T}")
    assert q.qtype == "truefalse"
    assert q.correctanswer is True
    assert q.feedbacktrue.text == ""
    assert q.feedbackfalse.text == ""
    assert q.penalty == 1
    assert q.name == "Is the sky blue?"


def test_single_answer_multichoice():
    q = one("2+2? {=4 ~3 ~5}")
    assert q.qtype == "multichoice"
    assert q.single is True
    assert [(a.answer.text, a.fraction) for a in q.answers] == [("4", 1.0), ("3", 0.0), ("5", 0.0)]


def test_numerical_with_tolerance():
    q = one("Pi? {#3.14159:0.00001}")
    assert q.qtype == "numerical"
    (a,) = q.answers
    assert a.answer == pytest.approx(3.14159)
    assert a.tolerance == pytest.approx(0.00001)
    assert a.fraction == 1.0


def test_unclosed_brace_is_fatal():
    with pytest.raises(BraceMismatch):
        parse_gift("Q {")


@pytest.mark.parametrize("text", ["Q }", "Q } and {"])
def test_other_brace_mismatches(text):
    with pytest.raises(BraceMismatch):
        parse_gift(text)


# ---------- match ----------
def test_match_needs_two_pairs():
    with pytest.raises(InsufficientAlternatives):
        parse_gift("Match {=a -> b}")


def test_match_two_pairs():
    q = one("Match {=a -> 1 =b -> 2}")
    assert q.qtype == "match"
    assert [(s.questiontext.text, s.answertext) for s in q.subquestions] == [("a", "1"), ("b", "2")]


def test_match_pair_without_arrow():
    with pytest.raises(MissingSeparator):
        parse_gift("Match {=a -> 1 =b}")


# ---------- multichoice ----------
def test_multichoice_without_equals_is_multiple_answer():
    q = one("Pick {~%50%a ~%50%b ~c}")
    assert q.single is False
    assert [a.fraction for a in q.answers] == [0.5, 0.5, 0.0]


def test_multichoice_negative_and_full_weights():
    q = one("Pick {~%-50%bad ~%100%good}")
    assert q.single is False
    assert [a.fraction for a in q.answers] == [-0.5, 1.0]


def test_multichoice_answer_feedback():
    q = one("Q {=a#Right ~b#Wrong}")
    assert q.answers[0].feedback.text == "Right"
    assert q.answers[1].feedback.text == "Wrong"


def test_multichoice_needs_two_answers():
    with pytest.raises(InsufficientAlternatives):
        parse_gift("Q {~only}")


# ---------- truefalse ----------
def test_truefalse_feedback_order():
    q = one("Q {FALSE#wrong fb#right fb}")
    assert q.correctanswer is False
    assert q.feedbackfalse.text == "right fb"
    assert q.feedbacktrue.text == "wrong fb"


# ---------- shortanswer ----------
def test_shortanswer_weights():
    q = one("Colour? {=%50%colour =color}")
    assert [(a.answer, a.fraction) for a in q.answers] == [("colour", 0.5), ("color", 1.0)]


def test_shortanswer_with_only_separator_fails():
    with pytest.raises(InsufficientAlternatives):
        parse_gift("Q {=}")


# ---------- numerical ----------
def test_numerical_range():
    (a,) = one("Q {#1..3}").answers
    assert (a.answer, a.tolerance) == (2.0, 1.0)


def test_numerical_bare_number():
    (a,) = one("Q {#7}").answers
    assert (a.answer, a.tolerance) == (7.0, 0.0)


def test_numerical_weighted_answers():
    q = one("Q {#=%50%1..3 =5}")
    assert [(a.answer, a.tolerance, a.fraction) for a in q.answers] == [(2.0, 1.0, 0.5), (5.0, 0.0, 1.0)]


def test_numerical_wildcard_is_appended_last():
    q = one("Q {#2 ~#Nope}")
    assert [a.answer for a in q.answers] == [2.0, "*"]
    assert q.answers[-1].fraction == 0
    assert q.answers[-1].feedback.text == "Nope"


def test_numerical_malformed_reports_line():
    with pytest.raises(MalformedNumeric) as exc:
        parse_gift("Ok {T}\n\nBad {#abc}")
    assert exc.value.line == 3
    assert "line 3" in str(exc.value)


# ---------- other variants ----------
def test_essay():
    q = one("Write about it {}")
    assert q.qtype == "essay"
    assert q.to_dict()["responseformat"] == "editor"
    assert q.to_dict()["responsefieldlines"] == 15


def test_description():
    q = one("Just some text")
    assert q.qtype == "description"
    assert q.questiontext.text == "Just some text"


def test_category():
    q = one("// header\n$CATEGORY: $course$/Top/Algebra ")
    assert q.qtype == "category"
    assert q.category == "$course$/Top/Algebra"
    assert q.to_dict() == {"qtype": "category", "category": "$course$/Top/Algebra"}


# ---------- shared parts ----------
def test_general_feedback_last_marker_wins():
    q = one("Q {=a ~b ####first ####Well done}")
    assert q.generalfeedback.text == "Well done"
    assert [a.answer.text for a in q.answers] == ["a", "b"]
    assert q.answers[1].feedback.text == "###first"


def test_fill_in_the_blank():
    q = one("The {=cat} sat.")
    assert q.questiontext.text == "The _____ sat."


def test_blank_fill_is_configurable():
    q = one("The {=cat} sat.", blank_fill="[...]")
    assert q.questiontext.text == "The [...] sat."


def test_format_tag_on_question_text():
    q = one("[html]<b>Bold</b> {T}")
    assert q.questiontext == TextWithFormat("<b>Bold</b>", "html")
    assert q.generalfeedback.format == "html"
    assert q.name == "Bold"


def test_answer_format_inherits_question_format():
    q = one("[markdown]Pick {=*a* ~[plain]b}")
    assert [a.answer.format for a in q.answers] == ["markdown", "plain"]


def test_metadata_from_comments():
    q = one("// [id:ABC] [tag:t1]\n// [tag:t2]\nQ {T}")
    assert q.idnumber == "ABC"
    assert q.tags == ("t1", "t2")


def test_escaped_reserved_characters():
    q = one(r"Time 12\:30 \{x\} {=a\=b}")
    assert q.questiontext.text == "Time 12:30 {x}"
    assert q.qtype == "shortanswer"
    assert q.answers[0].answer == "a=b"


def test_escaped_name_separator():
    q = one(r"::a\:\:b::Text {T}")
    assert q.name == "a::b"


def test_multiline_question_text():
    q = one("Line one\nLine two {T}")
    assert q.questiontext.text == "Line one\nLine two"


def test_one_bad_block_aborts_the_batch():
    with pytest.raises(BraceMismatch) as exc:
        parse_gift("Q1 {T}\n\nQ2 {\n")
    assert exc.value.line == 3


def test_parses_every_variant(sample_gift):
    qtypes = [q.qtype for q in parse_gift(sample_gift)]
    assert qtypes == ["category", "shortanswer", "multichoice", "truefalse",
                      "numerical", "match", "essay", "description", "shortanswer"]


def test_numerical_rejects_underscore_digits():
    with pytest.raises(MalformedNumeric):
        parse_gift("Q {#1_000}")
