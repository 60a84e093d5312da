import enum

import pytest

from intexpr.grammar import GrammarError, compile
from intexpr.parser import ParseError

INTEGER_GRAMMAR = r"""
root ::= sum;
@skip whitespace {
    sum ::= primary ('+' primary)*;
    primary ::= number | '(' sum ')';
}
whitespace ::= [ \t\r\n]+;
number ::= [0-9]+;
"""


def test_compile_integer_grammar():
    parser = compile(INTEGER_GRAMMAR)
    assert parser.root == "root"
    assert sorted(parser.nonterminals) == ["number", "primary", "root", "sum", "whitespace"]


def test_root_defaults_to_first_rule():
    parser = compile("b ::= 'b'; a ::= 'a';")
    assert parser.root == "b"
    assert parser.parse("b").name == "b"


def test_root_from_enum():
    class Nonterminal(enum.Enum):
        A = "a"

    parser = compile("b ::= 'b'; a ::= 'a';", Nonterminal.A)
    assert parser.root == "a"
    assert parser.parse("a").text == "a"


@pytest.mark.parametrize("grammar_text", [
    "root ::= 'a'",
    "root ::= ;",
    "root := 'a';",
    "root ::= ('a' ;",
    "@skip ws root ::= 'a';",
    "root ::= 'a' | ;",
])
def test_syntax_errors(grammar_text):
    with pytest.raises(GrammarError, match="syntax error"):
        compile(grammar_text)


@pytest.mark.parametrize("grammar_text", ["", "  // nothing here\n", "/* empty */"])
def test_empty_grammar(grammar_text):
    with pytest.raises(GrammarError, match="no nonterminals"):
        compile(grammar_text)


def test_undefined_nonterminal():
    with pytest.raises(GrammarError, match="'sum' used in 'root'"):
        compile("root ::= sum;")


def test_undefined_skip_nonterminal():
    with pytest.raises(GrammarError, match="'ws'"):
        compile("@skip ws { root ::= 'a'; }")


def test_duplicate_definition():
    with pytest.raises(GrammarError, match="more than once"):
        compile("root ::= 'a'; root ::= 'b';")


def test_undefined_root():
    with pytest.raises(GrammarError, match="root nonterminal 'b'"):
        compile("a ::= 'a';", root="b")


def test_inverted_range():
    with pytest.raises(GrammarError, match="inverted"):
        compile("root ::= [z-a];")


def test_comments_are_ignored():
    parser = compile("""
        // line comment
        root ::= 'x'; /* block
        comment */
    """)
    assert parser.parse("x").text == "x"


def test_literal_escapes():
    parser = compile(r"root ::= 'it\'s' '\t';")
    assert parser.parse("it's\t").name == "root"


def test_double_quoted_literal():
    parser = compile('root ::= "+" "(";')
    parser.parse("+(")
    with pytest.raises(ParseError):
        parser.parse("+")


def test_negated_char_class():
    parser = compile("root ::= [^0-9]+;")
    assert parser.parse("abc").text == "abc"
    with pytest.raises(ParseError):
        parser.parse("a1")


def test_escaped_dash_in_char_class():
    parser = compile(r"root ::= [a\-z]+;")
    parser.parse("-az")
    with pytest.raises(ParseError):
        parser.parse("b")


@pytest.mark.parametrize("grammar_text, accepted, rejected", [
    ("root ::= 'a'*;", ["", "a", "aaaa"], ["b"]),
    ("root ::= 'a'+;", ["a", "aaa"], [""]),
    ("root ::= 'a' 'b'?;", ["a", "ab"], ["abb", "b"]),
    ("root ::= ('a' | 'b')* 'c';", ["c", "abbac"], ["ab", "cc"]),
])
def test_repetition_operators(grammar_text, accepted, rejected):
    parser = compile(grammar_text)
    for text in accepted:
        assert parser.parse(text).text == text
    for text in rejected:
        with pytest.raises(ParseError):
            parser.parse(text)


def test_skip_block():
    parser = compile("""
        @skip ws { root ::= 'a' item 'b'; }
        item ::= 'x';
        ws ::= ' '+;
    """)
    tree = parser.parse("  a x   b ")
    assert [child.name for child in tree.children] == ["item"]
    assert tree.children[0].text == "x"


def test_skip_does_not_apply_outside_block():
    parser = compile("""
        @skip ws { inner ::= 'a' 'b'; }
        root ::= 'x' inner;
        ws ::= ' '+;
    """, root="root")
    parser.parse("x a b ")
    with pytest.raises(ParseError):
        parser.parse(" xab")


def test_skip_nonterminal_cannot_skip_itself():
    with pytest.raises(GrammarError, match="outside @skip"):
        compile("@skip ws { ws ::= ' '+; root ::= 'a'; }")
