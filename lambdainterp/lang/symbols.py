"""Symbol tables: named definitions available to the parser.

A SymbolTable is append-only. extend returns a child scope that sees every definition of its parent but whose own
definitions never reach the parent; the parser uses one to bind a recursive definition's self-reference while parsing
its body.
"""

from collections import namedtuple

from lambdainterp.lang.error import RedefinitionError

# arity: how many arguments a saturated use of the symbol consumes
Definition = namedtuple("Definition", ["term", "arity"])


class SymbolTable:
    """Mapping from names to Definitions, optionally chained to an outer table."""

    def __init__(self, definitions=None, outer=None):
        self.definitions = dict(definitions or {})
        self.outer = outer

    def find(self, name):
        """Returns the nearest table in the chain that defines name, or None."""
        table = self
        while table is not None:
            if name in table.definitions:
                return table
            table = table.outer
        return None

    def lookup(self, name):
        """Returns the Definition bound to name, or None if name is undefined."""
        table = self.find(name)
        return table.definitions[name] if table is not None else None

    def define(self, name, term, arity):
        """Binds name to (term, arity). Raises RedefinitionError if name is already defined anywhere in the chain."""
        if name in self:
            raise RedefinitionError("redefinition of symbol '{}'", name, diagnosis=False)
        self.definitions[name] = Definition(term, arity)

    def extend(self):
        """Returns an empty child scope of this table."""
        return SymbolTable(outer=self)

    def names(self):
        """Returns every name visible from this table, innermost scope first."""
        seen = []
        table = self
        while table is not None:
            seen.extend(name for name in table.definitions if name not in seen)
            table = table.outer
        return seen

    def __contains__(self, name):
        return self.find(name) is not None

    def __repr__(self):
        chain = []
        table = self
        while table is not None:
            chain.append("{" + ", ".join(f"{name}:{arity}" for name, (__, arity) in table.definitions.items()) + "}")
            table = table.outer
        return f"<SymbolTable chain: {' -> '.join(chain)}>"
