"""Built-in definitions, Church-encoded as closed λ-terms.

Naturals are built from `zero` and `succ`: zero is the identity function and succ n is a pair whose first element is
`false` (not zero) and whose second is n. Booleans select one of two arguments. `cond` takes its arguments in the
order then-branch, else-branch, condition. Recursion goes through the self-application fixpoint `recursive`.

Objects are pairs (type, value). The typed conditional checks that its condition is tagged with `bool_type` and
yields `bool_error` otherwise.

Source: https://en.wikipedia.org/wiki/Church_encoding, G. Michaelson, "An Introduction to Functional Programming
Through Lambda Calculus", chapters 3-4
"""

from lambdainterp.lang.symbols import Definition, SymbolTable
from lambdainterp.pure.term import Name, apply, curry


def lam(*args):
    """lam("x", "y", body) is λx.λy.body."""
    *params, body = args
    return curry([Name(param) for param in params], body)


def var(name):
    return Name(name)


# λx.x
ZERO = lam("x", var("x"))

# λx.λy.x
SELECT_FIRST = lam("x", "y", var("x"))

# λx.λy.y
SELECT_SECOND = lam("x", "y", var("y"))

TRUE = SELECT_FIRST
FALSE = SELECT_SECOND

# λe1.λe2.λc.((c e1) e2)
COND = lam("e1", "e2", "c", apply(var("c"), var("e1"), var("e2")))

MAKE_PAIR = COND

# λn.(n select_first)
ISZERO = lam("n", apply(var("n"), SELECT_FIRST))

# λn.λs.((s false) n)
SUCC = lam("n", "s", apply(var("s"), FALSE, var("n")))

ONE = apply(SUCC, ZERO)

# λn.if iszero n then zero else (n select_second)
PRED = lam("n", apply(COND, ZERO, apply(var("n"), SELECT_SECOND), apply(ISZERO, var("n"))))

# λs.(f (s s))
_SELF_APPLY = lam("s", apply(var("f"), apply(var("s"), var("s"))))

# λf.(λs.(f (s s)) λs.(f (s s)))
RECURSIVE = lam("f", apply(_SELF_APPLY, _SELF_APPLY))

# λf.λx.λy.if iszero x then y else f (pred x) (succ y)
_ADD1 = lam("f", "x", "y", apply(COND,
                                 var("y"),
                                 apply(var("f"), apply(PRED, var("x")), apply(SUCC, var("y"))),
                                 apply(ISZERO, var("x"))))

ADD = apply(RECURSIVE, _ADD1)

# λf.λx.λy.if iszero y then x else f (pred x) (pred y)
_SUB1 = lam("f", "x", "y", apply(COND,
                                 var("x"),
                                 apply(var("f"), apply(PRED, var("x")), apply(PRED, var("y"))),
                                 apply(ISZERO, var("y"))))

SUB = apply(RECURSIVE, _SUB1)

# λf.λx.λy.if iszero y then zero else add x (f x (pred y))
_MULT1 = lam("f", "x", "y", apply(COND,
                                  ZERO,
                                  apply(ADD, var("x"), apply(var("f"), var("x"), apply(PRED, var("y")))),
                                  apply(ISZERO, var("y"))))

MULT = apply(RECURSIVE, _MULT1)

# λx.λy.add (sub x y) (sub y x)
ABS_DIFF = lam("x", "y", apply(ADD, apply(SUB, var("x"), var("y")), apply(SUB, var("y"), var("x"))))

# λx.λy.iszero (abs_diff x y)
EQUAL = lam("x", "y", apply(ISZERO, apply(ABS_DIFF, var("x"), var("y"))))

MAKE_OBJ = MAKE_PAIR

# λobj.(obj select_first)
TYPE_OF = lam("obj", apply(var("obj"), SELECT_FIRST))

# λobj.(obj select_second)
VALUE_OF = lam("obj", apply(var("obj"), SELECT_SECOND))

# λt.λobj.equal t (type_of obj)
IS_TYPE = lam("t", "obj", apply(EQUAL, var("t"), apply(TYPE_OF, var("obj"))))

ERROR_TYPE = ZERO

MAKE_ERROR = apply(MAKE_OBJ, ERROR_TYPE)

BOOL_TYPE = ONE

# λx.is_type bool_type x
IS_BOOL = lam("x", apply(IS_TYPE, BOOL_TYPE, var("x")))

BOOL_ERROR = apply(MAKE_ERROR, BOOL_TYPE)

# λE1.λE2.λC.if is_bool C then (if value_of C then E1 else E2) else bool_error
TYPED_COND = lam("E1", "E2", "C", apply(COND,
                                        apply(COND, var("E1"), var("E2"), apply(VALUE_OF, var("C"))),
                                        BOOL_ERROR,
                                        apply(IS_BOOL, var("C"))))

BUILTINS = {
    "zero": Definition(ZERO, 0),
    "one": Definition(ONE, 0),
    "select_first": Definition(SELECT_FIRST, 2),
    "select_second": Definition(SELECT_SECOND, 2),
    "true": Definition(TRUE, 0),
    "false": Definition(FALSE, 0),
    "cond": Definition(COND, 3),
    "make_pair": Definition(MAKE_PAIR, 2),
    "iszero": Definition(ISZERO, 1),
    "succ": Definition(SUCC, 1),
    "pred": Definition(PRED, 1),
    "recursive": Definition(RECURSIVE, 1),
    "add": Definition(ADD, 2),
    "sub": Definition(SUB, 2),
    "mult": Definition(MULT, 2),
    "abs_diff": Definition(ABS_DIFF, 2),
    "equal": Definition(EQUAL, 2),
    "make_obj": Definition(MAKE_OBJ, 2),
    "type_of": Definition(TYPE_OF, 1),
    "value_of": Definition(VALUE_OF, 1),
    "is_type": Definition(IS_TYPE, 2),
    "error_type": Definition(ERROR_TYPE, 0),
    "make_error": Definition(MAKE_ERROR, 1),
    "bool_type": Definition(BOOL_TYPE, 0),
    "is_bool": Definition(IS_BOOL, 1),
    "bool_error": Definition(BOOL_ERROR, 0),
    "typed_cond": Definition(TYPED_COND, 3),
}


def default_symbols():
    """Returns a new SymbolTable holding the built-in definitions."""
    return SymbolTable(BUILTINS)
