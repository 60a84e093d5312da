"""Read a grammar description and compile it into a :class:`Parser`.

The description format::

    root ::= sum;
    @skip whitespace {
        sum ::= primary ('+' primary)*;
        primary ::= number | '(' sum ')';
    }
    whitespace ::= [ \\t\\r\\n]+;
    number ::= [0-9]+;
"""
import enum
import logging
from collections import namedtuple

from lark import Lark, Transformer
from lark.exceptions import UnexpectedInput, VisitError

from .parser import CharClass, Choice, Literal, Parser, Reference, Repeat, Sequence, Skip

logger = logging.getLogger(__name__)

# Grammar of grammar descriptions
grammar_grammar = r"""
    start: (rule | skip_block)*
    skip_block: "@skip" NAME "{" rule* "}"
    rule: NAME "::=" alternation ";"

    ?alternation: concatenation ("|" concatenation)*
    ?concatenation: term+
    ?term: atom | repetition
    repetition: atom REPEAT_OP
    ?atom: reference | literal | charclass | "(" alternation ")"
    reference: NAME
    literal: STRING
    charclass: CHARCLASS

    REPEAT_OP: "*" | "+" | "?"
    STRING: /'(\\.|[^'\\])*'|"(\\.|[^"\\])*"/
    CHARCLASS: /\[(\\.|[^\\\]])+\]/

    %import common.CNAME -> NAME
    %import common.WS
    %import common.CPP_COMMENT
    %import common.C_COMMENT
    %ignore WS
    %ignore CPP_COMMENT
    %ignore C_COMMENT
"""

grammar_parser = Lark(grammar_grammar, parser="lalr")

ESCAPES = {"n": "\n", "t": "\t", "r": "\r"}

REPETITIONS = {"*": (0, None), "+": (1, None), "?": (0, 1)}

Rule = namedtuple("Rule", "name expression skip")


class GrammarError(ValueError):
    """The grammar description is malformed or inconsistent."""


def unescape(body):
    """Split ``body`` into ``(char, escaped)`` pairs, resolving backslashes."""
    chars = []
    i = 0
    while i < len(body):
        if body[i] == "\\" and i + 1 < len(body):
            chars.append((ESCAPES.get(body[i + 1], body[i + 1]), True))
            i += 2
        else:
            chars.append((body[i], False))
            i += 1
    return chars


def char_class(body):
    negated = body.startswith("^")
    if negated:
        body = body[1:]
    chars = unescape(body)
    ranges = []
    i = 0
    while i < len(chars):
        low = chars[i][0]
        if i + 2 < len(chars) and chars[i + 1] == ("-", False):
            high = chars[i + 2][0]
            if low > high:
                raise GrammarError("inverted character range %r-%r" % (low, high))
            ranges.append((low, high))
            i += 3
        else:
            ranges.append((low, low))
            i += 1
    return CharClass(ranges, negated)


class GrammarBuilder(Transformer):
    """Turns the lark tree of a grammar description into combinators."""

    def reference(self, items):
        return Reference(str(items[0]))

    def literal(self, items):
        return Literal("".join(char for char, _ in unescape(items[0][1:-1])))

    def charclass(self, items):
        return char_class(items[0][1:-1])

    def repetition(self, items):
        item, op = items
        minimum, maximum = REPETITIONS[str(op)]
        return Repeat(item, minimum, maximum)

    def concatenation(self, items):
        return Sequence(items)

    def alternation(self, items):
        return Choice(items)

    def rule(self, items):
        name, expression = items
        return Rule(str(name), expression, None)

    def skip_block(self, items):
        skip = str(items[0])
        return [rule._replace(skip=skip) for rule in items[1:]]

    def start(self, items):
        rules = []
        for item in items:
            if isinstance(item, Rule):
                rules.append(item)
            else:
                rules.extend(item)
        return rules


def read_rules(grammar_text):
    try:
        tree = grammar_parser.parse(grammar_text)
    except UnexpectedInput as e:
        raise GrammarError("the grammar has a syntax error at line %s, column %s"
                           % (e.line, e.column)) from e
    try:
        return GrammarBuilder().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, GrammarError):
            raise e.orig_exc from None
        raise


def compile(grammar_text, root=None):
    """Compile ``grammar_text`` into a reusable :class:`Parser`.

    ``root`` names the nonterminal every input must match; it may also be
    an enum member whose value is that name. It defaults to the first
    nonterminal defined.
    """
    rules = read_rules(grammar_text)
    if not rules:
        raise GrammarError("the grammar defines no nonterminals")

    expressions = {}
    for rule in rules:
        if rule.name in expressions:
            raise GrammarError("nonterminal %r is defined more than once" % rule.name)
        expression = rule.expression
        if rule.skip is not None:
            skip = Skip(rule.skip)
            expression = Sequence((expression.skipping(skip), skip))
        expressions[rule.name] = expression

    skips = {rule.name: rule.skip for rule in rules}
    for rule in rules:
        if rule.skip is not None and skips.get(rule.skip) is not None:
            raise GrammarError("skip nonterminal %r must be defined outside @skip blocks"
                               % rule.skip)

    for name, expression in expressions.items():
        for referenced in expression.references():
            if referenced not in expressions:
                raise GrammarError("nonterminal %r used in %r is not defined" % (referenced, name))

    if root is None:
        root = rules[0].name
    elif isinstance(root, enum.Enum):
        root = root.value
    if root not in expressions:
        raise GrammarError("root nonterminal %r is not defined" % root)

    logger.debug("compiled grammar with nonterminals %s, root %r", ", ".join(expressions), root)
    return Parser(expressions, root)
