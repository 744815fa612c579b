"""Beta reduction of pure lambda calculus terms.

A redex is an Application whose function is an Abstraction; contracting it substitutes the argument for the bound
variable in the body. Two single-step strategies are provided, each returning the reduced term or None when the term
has no redex:

- normal order: the leftmost-outermost redex first (the application itself, then its function, then its argument)
- applicative order: the argument first, then the application itself, then its function

Within a subterm the applicative step defers to the normal-order step, so the fixpoint combinator only unfolds when it
is in head position. A term on which the applicative step finds nothing is therefore in beta-normal form.

Source: http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

import logging

from lambdainterp.lang.error import TooManyStepsError
from lambdainterp.pure.substitution import replace
from lambdainterp.pure.term import Abstraction, Application, render

MAX_REDUCE_STEPS = 1024

# slots of a subterm within its parent
FUNC, ARG, BODY = "func", "arg", "body"

logger = logging.getLogger(__name__)


def beta(term):
    """Returns the contractum of term if it is a redex, otherwise None."""
    if isinstance(term, Application) and isinstance(term.func, Abstraction):
        __, reduced = replace(term.func.bound, term.arg, term.func.body)
        return reduced
    return None


def _rebuild(path, term):
    """Puts term back in place of the subterm that path leads to. path is a linked list of (parent, slot, rest)."""
    while path is not None:
        parent, slot, path = path
        if slot is BODY:
            term = Abstraction(parent.bound, term)
        elif slot is FUNC:
            term = Application(term, parent.arg)
        else:
            term = Application(parent.func, term)
    return term


def normal_step(term):
    """Contracts the leftmost-outermost redex of term. Returns None if there is none.

    The search is a preorder walk (an application itself, then its function, then its argument) with an explicit
    stack, so it is not limited by Python's recursion depth.
    """
    stack = [(term, None)]

    while stack:
        term, path = stack.pop()
        if isinstance(term, Application):
            reduced = beta(term)
            if reduced is not None:
                return _rebuild(path, reduced)

            stack.append((term.arg, (term, ARG, path)))
            stack.append((term.func, (term, FUNC, path)))
        elif isinstance(term, Abstraction):
            stack.append((term.body, (term, BODY, path)))

    return None


def applicative_step(term):
    """Reduces the argument of an application before contracting the application itself. Returns None if term has no
    redex.
    """
    if isinstance(term, Application):
        arg = normal_step(term.arg)
        if arg is not None:
            return Application(term.func, arg)

        reduced = beta(term)
        if reduced is not None:
            return reduced

        func = normal_step(term.func)
        if func is not None:
            return Application(func, term.arg)

    elif isinstance(term, Abstraction):
        body = normal_step(term.body)
        if body is not None:
            return Abstraction(term.bound, body)

    return None


STRATEGIES = {
    "applicative": applicative_step,
    "normal": normal_step,
}


def reduce(term, strategy=applicative_step, max_steps=MAX_REDUCE_STEPS):
    """Repeatedly applies strategy to term until no redex remains and returns the result. Raises TooManyStepsError
    if more than max_steps contractions would be needed.
    """
    result = term
    remaining = max_steps

    while True:
        reduced = strategy(result)
        if reduced is None:
            return result

        if remaining == 0:
            raise TooManyStepsError("'{}' has no normal form within {} reduction steps", (render(term), str(max_steps)),
                                    term=term, steps=max_steps, diagnosis=False)
        remaining -= 1

        logger.debug("β %s", reduced)
        result = reduced
