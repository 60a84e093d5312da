import enum

from .expression import Number, Plus, parse_digits


class IntegerGrammar(enum.Enum):
    """The nonterminals of IntegerExpression.g."""

    ROOT = "root"
    SUM = "sum"
    PRIMARY = "primary"
    NUMBER = "number"
    WHITESPACE = "whitespace"


class ExpressionBuilder:
    """Convert a parse tree into an abstract syntax tree.

    One method per nonterminal, like a lark Transformer, except that the
    walk is top-down so each method decides how to use its children.
    A tree shape the grammar cannot produce raises AssertionError.
    """

    def build(self, tree):
        try:
            kind = IntegerGrammar(tree.name)
        except ValueError:
            raise AssertionError("unknown nonterminal %r in parse tree" % tree.name) from None
        handler = getattr(self, kind.value, None)
        if handler is None:
            raise AssertionError("%r never appears in a parse tree" % tree.name)
        return handler(tree)

    def _only_child(self, tree):
        if len(tree.children) != 1:
            raise AssertionError("%s node should have one child, has %d"
                                 % (tree.name, len(tree.children)))
        return tree.children[0]

    def root(self, tree):
        # root ::= sum;
        return self.build(self._only_child(tree))

    def sum(self, tree):
        # sum ::= primary ('+' primary)*;
        if not tree.children:
            raise AssertionError("sum node has no children")
        expression = self.build(tree.children[0])
        for child in tree.children[1:]:
            expression = Plus(expression, self.build(child))
        return expression

    def primary(self, tree):
        # primary ::= number | '(' sum ')';
        child = self._only_child(tree)
        if child.name not in (IntegerGrammar.NUMBER.value, IntegerGrammar.SUM.value):
            raise AssertionError("primary node has a %r child" % child.name)
        # same thing either way
        return self.build(child)

    def number(self, tree):
        # number ::= [0-9]+;
        if tree.children:
            raise AssertionError("number node should have no children")
        return Number(parse_digits(tree.text))
