import pytest

import sexpr_parser as sp

def test_words_split_on_whitespace():
    assert sp.parse("foo bar\tbaz\nqux\rquux\fend") == [
        "foo", "bar", "baz", "qux", "quux", "end",
    ]

def test_word_at_end_of_input_is_the_word_only():
    assert sp.parse("  (a) tail") == [["a"], "tail"]
    assert sp.parse("x") == ["x"]

def test_word_keeps_punctuation_and_backslashes():
    assert sp.parse("a-b.c 'q #t \\n 1.5e3") == [
        "a-b.c", "'q", "#t", "\\n", "1.5e3",
    ]

def test_quote_after_word_starts_a_sibling_atom():
    assert sp.parse('n"o"') == ["n", '"o"']
    assert sp.parse('"a"b') == ['"a"', "b"]
    assert sp.parse('"a""b"') == ['"a"', '"b"']

def test_quoted_atom_keeps_quotes_and_content_verbatim():
    atoms = sp.parse('"ghi jkl" "(x)" "a\\b" ""')
    assert atoms == ['"ghi jkl"', '"(x)"', '"a\\b"', '""']
    assert all(isinstance(a, sp.Atom) for a in atoms)

def test_quoted_atom_spans_lines():
    assert sp.parse('"line one\nline two"') == ['"line one\nline two"']

def test_atom_quoted_flag():
    word, quoted = sp.parse('w "q"')
    assert not word.quoted
    assert quoted.quoted

def test_non_ascii_words():
    assert sp.parse("λ (café ñ)") == ["λ", ["café", "ñ"]]

def test_unicode_whitespace_separates_words():
    # no-break space and ideographic space
    assert sp.parse("a\u00a0b\u3000c") == ["a", "b", "c"]

def test_no_atom_is_empty():
    for atom in sp.parse('a "" (b ("") c) d'):
        if isinstance(atom, str):
            assert atom

@pytest.mark.parametrize("text", ["a(b)", "a (b)", "a\n(b)"])
def test_open_paren_ends_word(text):
    assert sp.parse(text) == ["a", ["b"]]
