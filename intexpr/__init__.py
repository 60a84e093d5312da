from .builder import ExpressionBuilder, IntegerGrammar
from .expression import IntegerExpression, Number, Plus, value
from .grammar import GrammarError, compile
from .integer_expression import evaluate_expression, make_parser, parse
from .parse_tree import ParseTree
from .parser import ParseError, Parser

__all__ = [
    "ExpressionBuilder",
    "GrammarError",
    "IntegerExpression",
    "IntegerGrammar",
    "Number",
    "ParseError",
    "ParseTree",
    "Parser",
    "Plus",
    "compile",
    "evaluate_expression",
    "make_parser",
    "parse",
    "value",
]
