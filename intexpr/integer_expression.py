import logging
from importlib import resources

from .builder import ExpressionBuilder, IntegerGrammar
from .grammar import compile

logger = logging.getLogger(__name__)

GRAMMAR_FILENAME = "IntegerExpression.g"


def make_parser(grammar_filename=GRAMMAR_FILENAME):
    """Compile a grammar shipped inside this package.

    GrammarError propagates: a broken packaged grammar is a bug, not a
    client error.
    """
    try:
        grammar_text = resources.files(__package__).joinpath(grammar_filename).read_text()
    except OSError as e:
        raise RuntimeError("can't read the grammar file %s" % grammar_filename) from e
    return compile(grammar_text, IntegerGrammar.ROOT)


parser = make_parser()


def parse(string):
    """Parse ``string`` into an IntegerExpression; raises ParseError."""
    parse_tree = parser.parse(string)
    logger.debug("parse tree %s", parse_tree)

    expression = ExpressionBuilder().build(parse_tree)
    logger.debug("AST %s", expression)
    return expression


def evaluate_expression(string):
    return parse(string).value()
