from seb.quoted import QuotedString


def wrap(text):
    return "{" + text + "}"


def test_plain_string_is_one_normal_part():
    qs = QuotedString("Hello")
    assert qs.parts == ((False, "Hello"),)
    assert str(qs) == "Hello"
    assert qs.map_quoted(wrap) == "Hello"
    assert not qs.is_verbatim


def test_adjacent_parts_are_merged():
    qs = QuotedString.from_parts([(False, "a"), (False, "b"), (True, "C"), (True, "D"), (False, "e")])
    assert qs.parts == ((False, "ab"), (True, "CD"), (False, "e"))


def test_equality_ignores_how_parts_were_split():
    split = QuotedString.from_parts([(True, "Foo"), (True, " Bar"), (False, " baz")])
    premerged = QuotedString.from_parts([(True, "Foo Bar"), (False, " baz")])
    assert split == premerged
    assert hash(split) == hash(premerged)
    assert QuotedString("x") == QuotedString.from_parts([(False, "x")])
    assert QuotedString("x") != QuotedString.verbatim("x")


def test_empty_parts_are_dropped():
    qs = QuotedString.from_parts([(True, ""), (False, "a"), (True, ""), (False, "b")])
    assert qs.parts == ((False, "ab"),)
    assert QuotedString("") == QuotedString.from_parts([])
    assert not QuotedString("")


def test_verbatim_chunk_escape_is_corrected():
    # a fully verbatim RFC title such as {(HTTP/1.1)} can come back from a
    # chunk parser split around '/' and '.'
    qs = QuotedString.from_parts([
        (True, "(HTTP/"),
        (False, "1"),
        (True, "."),
        (False, "1"),
        (True, ")"),
    ])
    assert qs.map_quoted(wrap) == "{(HTTP/1.1)}"
    assert qs.is_verbatim
    assert str(qs) == "(HTTP/1.1)"


def test_real_styling_change_is_kept():
    # the verbatim part does not end on a split delimiter
    qs = QuotedString.from_parts([(True, "DNA"), (False, " and "), (True, "RNA")])
    assert qs.map_quoted(wrap) == "{DNA} and {RNA}"


def test_normal_part_at_the_edge_is_not_folded():
    qs = QuotedString.from_parts([(True, "HTTP/"), (False, "2")])
    assert qs.parts == ((True, "HTTP/"), (False, "2"))


def test_map_quoted_inserts_no_separators():
    qs = QuotedString.from_parts([(False, "a "), (True, "B"), (False, " c")])
    assert qs.map_quoted(lambda s: s.upper() * 2) == "a BB c"


def test_styling_around_spaced_text_is_kept():
    qs = QuotedString.from_parts([(True, "U.S."), (False, " policy on "), (True, "NATO")])
    assert qs.parts == ((True, "U.S."), (False, " policy on "), (True, "NATO"))
    assert qs.map_quoted(wrap) == "{U.S.} policy on {NATO}"


def test_map_quoted_with_normal_escape():
    qs = QuotedString.from_parts([(False, "a "), (True, "B"), (False, " c")])
    assert qs.map_quoted(wrap, str.upper) == "A {B} C"
