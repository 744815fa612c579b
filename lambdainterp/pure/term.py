"""Pure lambda calculus terms.

The `pure` directory contains the calculus itself: terms, substitution and reduction. Surface syntax, definitions and
the primitive library live in `lang`.

Formally, a term is one of

```
<λ-term> ::= <name>                     ; "variable": an identifier, free or bound by an enclosing abstraction
           | "λ" <name> "." <λ-term>    ; "abstraction": a function of one parameter
           | "(" <λ-term> <λ-term> ")"  ; "application": function applied to a single argument
```

Terms are immutable. Every transformation builds new nodes and shares the unchanged subtrees of its input, so a term
can be handed to any number of reductions without copying.

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Name:
    """Variable in lambda calculus. Two Names are equal iff their identifiers are."""
    name: str

    def __str__(self):
        return render(self)


@dataclass(frozen=True)
class Abstraction:
    """Abstraction: binds `bound` within `body`."""
    bound: Name
    body: "Term"

    def __str__(self):
        return render(self)


@dataclass(frozen=True)
class Application:
    """Application of `func` to a single `arg`."""
    func: "Term"
    arg: "Term"

    def __str__(self):
        return render(self)


Term = Union[Name, Abstraction, Application]


def _check(term):
    if not isinstance(term, (Name, Abstraction, Application)):
        raise TypeError(f"'{type(term).__name__}' is not a λ-term")


def render(term):
    """Returns the textual form of term: λ<name>.<body>, (<func> <arg>) or the bare identifier."""
    parts = []
    stack = [term]  # terms still to render, and (text,) tuples

    while stack:
        item = stack.pop()
        if isinstance(item, tuple):
            parts.append(item[0])
        elif isinstance(item, Name):
            parts.append(item.name)
        elif isinstance(item, Abstraction):
            parts.append(f"λ{item.bound.name}.")
            stack.append(item.body)
        elif isinstance(item, Application):
            parts.append("(")
            stack.extend(((")",), item.arg, (" ",), item.func))
        else:
            _check(item)

    return "".join(parts)


def curry(params, body):
    """Wraps body in one Abstraction per param, first param outermost."""
    for param in reversed(params):
        body = Abstraction(param, body)
    return body


def apply(func, *args):
    """Left-associative application: apply(f, a, b) is ((f a) b)."""
    for arg in args:
        func = Application(func, arg)
    return func


def free_names(term):
    """Returns the frozenset of identifiers occurring free in term. Walks the term with an explicit stack, so a
    numeral of any size is fine.
    """
    free = set()
    stack = [(term, frozenset())]  # (subterm, names bound above it)

    while stack:
        term, bound = stack.pop()
        _check(term)
        if isinstance(term, Name):
            if term.name not in bound:
                free.add(term.name)
        elif isinstance(term, Abstraction):
            stack.append((term.body, bound | {term.bound.name}))
        else:
            stack.append((term.arg, bound))
            stack.append((term.func, bound))

    return frozenset(free)


def names(term):
    """Returns the frozenset of every identifier in term, bound or free."""
    found = set()
    stack = [term]

    while stack:
        term = stack.pop()
        _check(term)
        if isinstance(term, Name):
            found.add(term.name)
        elif isinstance(term, Abstraction):
            found.add(term.bound.name)
            stack.append(term.body)
        else:
            stack.extend((term.arg, term.func))

    return frozenset(found)


def alpha_equivalent(term, other):
    """Whether or not two terms are equal up to renaming of bound variables. Bound names are compared by the depth of
    their binder, free names by identifier.
    """

    def _equivalent(term, other, levels, other_levels, depth):
        if isinstance(term, Name) and isinstance(other, Name):
            level, other_level = levels.get(term.name), other_levels.get(other.name)
            if level is None and other_level is None:
                return term.name == other.name
            return level == other_level

        elif isinstance(term, Abstraction) and isinstance(other, Abstraction):
            levels = {**levels, term.bound.name: depth}
            other_levels = {**other_levels, other.bound.name: depth}
            return _equivalent(term.body, other.body, levels, other_levels, depth + 1)

        elif isinstance(term, Application) and isinstance(other, Application):
            return (_equivalent(term.func, other.func, levels, other_levels, depth)
                    and _equivalent(term.arg, other.arg, levels, other_levels, depth))

        return False

    return _equivalent(term, other, {}, {}, 0)
