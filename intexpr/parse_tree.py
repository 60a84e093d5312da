from dataclasses import dataclass, field


@dataclass(frozen=True)
class ParseTree:
    """A node of the concrete derivation of an input string.

    ``start`` and ``end`` are offsets into the parsed string, so the
    matched text is ``source[start:end]``. Terminal-only rules such as
    ``number`` have no children.
    """

    name: str
    source: str = field(repr=False)
    start: int
    end: int
    children: tuple = ()

    @property
    def text(self):
        return self.source[self.start:self.end]

    def children_named(self, name):
        return [child for child in self.children if child.name == name]

    def pretty(self, indent_str="  "):
        lines = []
        self._pretty(0, indent_str, lines)
        return "\n".join(lines) + "\n"

    def _pretty(self, level, indent_str, lines):
        if self.children:
            lines.append("%s%s" % (indent_str * level, self.name))
            for child in self.children:
                child._pretty(level + 1, indent_str, lines)
        else:
            lines.append("%s%s\t%r" % (indent_str * level, self.name, self.text))

    def __str__(self):
        if not self.children:
            return "(%s %r)" % (self.name, self.text)
        return "(%s %s)" % (self.name, " ".join(str(child) for child in self.children))
