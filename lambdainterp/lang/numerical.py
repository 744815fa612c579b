"""Natural numbers encoded with `zero` and `succ` (see primitives.py). Note that arithmetic is not implemented here:
integer literals are turned into chains of `succ` applications and left for reduction to evaluate.

In normal form, zero is λx.x and succ n is λs.((s false) n), so 2 reduces to

    λs.((s λx.λy.y) λs.((s λx.λy.y) λx.x))
"""

from lambdainterp.lang.error import GenericException
from lambdainterp.lang.primitives import SUCC, ZERO
from lambdainterp.pure.term import Abstraction, Application, Name, free_names


def cnumber(num):
    """Returns the term (succ (succ ... zero)) for natural number num."""
    if isinstance(num, (bool, float)):
        raise GenericException("expected natural number, got '{}'", str(num), internal=True)
    try:
        num = int(num)
    except (TypeError, ValueError):
        raise GenericException("expected natural number, got '{}'", str(num), internal=True)
    if num < 0:
        raise GenericException("expected natural number, got '{}'", str(num), internal=True)

    term = ZERO
    for __ in range(num):
        term = Application(SUCC, term)
    return term


def _is_false(term):
    """Whether or not term is λa.λb.b (for any a, b)."""
    return isinstance(term, Abstraction) and isinstance(term.body, Abstraction) and term.body.body == term.body.bound


def number(cnum):
    """Returns the natural number encoded by the normal-form term cnum. If cnum isn't a numeral, returns None."""
    num = 0
    while isinstance(cnum, Abstraction):
        bound, body = cnum.bound, cnum.body
        if body == bound:
            return num

        if not (isinstance(body, Application) and isinstance(body.func, Application)):
            return None
        if body.func.func != bound or not _is_false(body.func.arg) or bound.name in free_names(body.arg):
            return None

        num += 1
        cnum = body.arg

    return None


def numberify(term):
    """Returns term with every numeral subterm replaced by a Name holding its digits."""
    num = number(term)
    if num is not None:
        return Name(str(num))
    elif isinstance(term, Abstraction):
        return Abstraction(term.bound, numberify(term.body))
    elif isinstance(term, Application):
        return Application(numberify(term.func), numberify(term.arg))
    return term
