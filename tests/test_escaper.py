import pytest

from appgift.core.escaper import ESCAPED, TEXT, Token, escape_literal, mask, tokenize, unmask


@pytest.mark.parametrize("ch", [":", "#", "=", "{", "}", "~", "\n", "\\"])
def test_escape_then_unescape_restores_reserved_char(ch):
    text = f"a{ch}b{ch}"
    assert unmask(mask(escape_literal(text))) == text


@pytest.mark.parametrize("raw", [r"a\:b", r"\\{x}", "plain text", "trailing\\\\", r"\n and \t", "lone\\"])
def test_mask_raw_reproduces_source(raw):
    assert mask(raw).raw() == raw


def test_tokenize_splits_literal_runs_and_escapes():
    assert list(tokenize(r"12\:30\\x")) == [
        Token(TEXT, "12"),
        Token(ESCAPED, ":"),
        Token(TEXT, "30"),
        Token(ESCAPED, "\\"),
        Token(TEXT, "x"),
    ]


def test_tokenize_keeps_unknown_escape_literal():
    assert list(tokenize(r"\x")) == [Token(TEXT, "\\x")]


def test_escaped_newline_decodes_to_newline():
    assert unmask(mask(r"one\ntwo")) == "one\ntwo"


def test_find_and_split_ignore_escaped_chars():
    g = mask(r"a\{b{c")
    assert str(g) == "a{b{c"
    assert g.find("{") == 3
    assert [str(p) for p in mask(r"a=b\=c=d").split("=")] == ["a", "b=c", "d"]
    assert "~" not in mask(r"x\~y")


def test_rfind_skips_escaped_occurrence():
    assert mask(r"a####b\####c").rfind("####") == 1
    assert mask(r"x}y\}").rfind("}") == 1


def test_strip_keeps_escaped_whitespace():
    assert str(mask("\\n x ").strip()) == "\n x"


def test_replace_only_touches_syntax_chars():
    assert mask(r"=a \= b").replace("=", "~=").raw() == r"~=a \= b"


def test_escape_literal_drops_carriage_returns():
    assert escape_literal("a\r\nb") == "a\\nb"
    assert escape_literal(None) == ""
    assert escape_literal("1+1=2 {ok}") == r"1+1\=2 \{ok\}"
