from appgift.core.segmenter import split_blocks


def test_blank_lines_separate_blocks_and_comments_move_aside():
    blocks = list(split_blocks("Q1 {T}\n\n\n// c\nQ2 {F}\r\n"))
    assert len(blocks) == 2
    assert blocks[0].body == "Q1 {T}"
    assert blocks[0].line == 1
    assert blocks[1].comments == ["c"]
    assert blocks[1].lines == [" ", "Q2 {F}"]
    assert blocks[1].body == "Q2 {F}"
    assert blocks[1].line == 4


def test_whitespace_only_line_is_a_separator():
    assert [b.body for b in split_blocks("A {T}\n   \t\nB {F}")] == ["A {T}", "B {F}"]


def test_comment_only_block_produces_nothing():
    blocks = list(split_blocks("// only a comment\n\nQ {T}"))
    assert len(blocks) == 1
    assert blocks[0].line == 3
    assert blocks[0].comments == []


def test_trailing_block_is_flushed():
    blocks = list(split_blocks("first {T}\n\nlast {F}"))
    assert blocks[-1].body == "last {F}"


def test_indented_comment_marker_is_recognised():
    block = next(split_blocks("   // [id:x]\nQ {T}"))
    assert block.comment_text == "[id:x]"


def test_empty_input():
    assert list(split_blocks("")) == []
    assert list(split_blocks(None)) == []
