"""Backtracking recursive-descent matching over a compiled grammar.

Every combinator has a ``matches(attempt, pos)`` generator that yields
``(end, children)`` for each way it can match the input at ``pos``, most
preferred first. Callers pull further results only when a later part of
the grammar fails, which is how backtracking happens.
"""
import logging

from .parse_tree import ParseTree

logger = logging.getLogger(__name__)


class ParseError(SyntaxError):
    """The input does not match the grammar's root nonterminal."""

    def __init__(self, message, text, position):
        super().__init__(message)
        self.text = text
        self.position = position


class _Attempt:
    # State of a single parse() call; the Parser itself is never mutated.
    def __init__(self, text, rules):
        self.text = text
        self.rules = rules
        self.furthest = 0

    def reach(self, pos):
        if pos > self.furthest:
            self.furthest = pos


class Literal:
    def __init__(self, string):
        self.string = string

    def matches(self, attempt, pos):
        if attempt.text.startswith(self.string, pos):
            end = pos + len(self.string)
            attempt.reach(end)
            yield end, ()

    def skipping(self, skip):
        return Sequence((skip, self))

    def references(self):
        return ()

    def __repr__(self):
        return "Literal(%r)" % self.string


class CharClass:
    """One character inside any of ``ranges`` (or outside all, if negated)."""

    def __init__(self, ranges, negated=False):
        self.ranges = tuple(ranges)
        self.negated = negated

    def accepts(self, char):
        inside = any(low <= char <= high for low, high in self.ranges)
        return inside != self.negated

    def matches(self, attempt, pos):
        if pos < len(attempt.text) and self.accepts(attempt.text[pos]):
            attempt.reach(pos + 1)
            yield pos + 1, ()

    def skipping(self, skip):
        return Sequence((skip, self))

    def references(self):
        return ()

    def __repr__(self):
        return "CharClass(%r, negated=%r)" % (self.ranges, self.negated)


class Sequence:
    """Concatenation. Nested sequences are spliced into one flat sequence.

    Like :class:`Repeat`, pending choice points live on an explicit stack,
    so a sequence costs one generator frame however many items it has.
    """

    def __init__(self, items):
        flat = []
        for item in items:
            if isinstance(item, Sequence):
                flat.extend(item.items)
            else:
                flat.append(item)
        self.items = tuple(flat)

    def matches(self, attempt, pos):
        if not self.items:
            yield pos, ()
            return
        # frame i holds the children matched before items[i] and its candidates
        frames = [((), iter(self.items[0].matches(attempt, pos)))]
        while frames:
            collected, candidates = frames[-1]
            for end, children in candidates:
                if len(frames) == len(self.items):
                    yield end, collected + children
                else:
                    following = self.items[len(frames)]
                    frames.append((collected + children, iter(following.matches(attempt, end))))
                    break
            else:
                frames.pop()

    def skipping(self, skip):
        return Sequence(item.skipping(skip) for item in self.items)

    def references(self):
        return [name for item in self.items for name in item.references()]

    def __repr__(self):
        return "Sequence(%r)" % (self.items,)


class Choice:
    def __init__(self, alternatives):
        self.alternatives = tuple(alternatives)

    def matches(self, attempt, pos):
        for alternative in self.alternatives:
            yield from alternative.matches(attempt, pos)

    def skipping(self, skip):
        return Choice(alternative.skipping(skip) for alternative in self.alternatives)

    def references(self):
        return [name for alternative in self.alternatives for name in alternative.references()]

    def __repr__(self):
        return "Choice(%r)" % (self.alternatives,)


class Repeat:
    """Greedy repetition of ``item`` between ``minimum`` and ``maximum`` times.

    Choice points are kept on an explicit stack of pending generators, so
    long runs such as ``1+1+...+1`` do not nest Python frames per item.
    """

    def __init__(self, item, minimum=0, maximum=None):
        self.item = item
        self.minimum = minimum
        self.maximum = maximum

    def _candidates(self, attempt, pos, count):
        if self.maximum is not None and count >= self.maximum:
            return iter(())
        return iter(self.item.matches(attempt, pos))

    def matches(self, attempt, pos):
        # frame i holds the state after i repetitions
        frames = [(pos, (), self._candidates(attempt, pos, 0))]
        while frames:
            start, collected, candidates = frames[-1]
            for end, children in candidates:
                # an empty match would repeat forever
                if end > start:
                    frames.append((end, collected + children,
                                   self._candidates(attempt, end, len(frames))))
                    break
            else:
                frames.pop()
                if len(frames) >= self.minimum:
                    yield start, collected

    def skipping(self, skip):
        return Repeat(self.item.skipping(skip), self.minimum, self.maximum)

    def references(self):
        return self.item.references()

    def __repr__(self):
        return "Repeat(%r, %r, %r)" % (self.item, self.minimum, self.maximum)


class Reference:
    """A nonterminal used inside a production; each match becomes a node."""

    def __init__(self, name):
        self.name = name

    def matches(self, attempt, pos):
        expression = attempt.rules[self.name]
        for end, children in expression.matches(attempt, pos):
            yield end, (ParseTree(self.name, attempt.text, pos, end, children),)

    def skipping(self, skip):
        return Sequence((skip, self))

    def references(self):
        return (self.name,)

    def __repr__(self):
        return "Reference(%r)" % self.name


class Skip:
    """Consume the longest match of nonterminal ``name``, or nothing.

    Skipped text produces no nodes and is never backtracked into.
    """

    def __init__(self, name):
        self.name = name

    def matches(self, attempt, pos):
        for end, _ in attempt.rules[self.name].matches(attempt, pos):
            yield end, ()
            return
        yield pos, ()

    def references(self):
        return (self.name,)

    def __repr__(self):
        return "Skip(%r)" % self.name


class Parser:
    """A compiled grammar. Immutable; ``parse`` may be called concurrently."""

    def __init__(self, rules, root):
        self._rules = dict(rules)
        self.root = root

    @property
    def nonterminals(self):
        return list(self._rules)

    def parse(self, text):
        attempt = _Attempt(text, self._rules)
        try:
            for end, children in Reference(self.root).matches(attempt, 0):
                if end == len(text):
                    return children[0]
        except RecursionError as e:
            # each nesting level holds a few generator frames
            raise ParseError("input nests too deeply to parse: gave up at offset %d"
                             % attempt.furthest, text, attempt.furthest) from e
        logger.debug("no derivation of %r for %r, furthest offset %d",
                     self.root, text, attempt.furthest)
        raise ParseError("string does not match the grammar: stopped at offset %d"
                         % attempt.furthest, text, attempt.furthest)
