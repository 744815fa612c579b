"""Capture-avoiding substitution, used by beta reduction.

replace(x, N, M) computes M[x := N]: every free occurrence of x in M becomes N. Abstractions whose bound variable
occurs free in N would capture it, so they are alpha-converted to a fresh name first. Fresh names are built by
prefixing "^", which cannot appear in a source identifier.
"""

from lambdainterp.pure.term import Abstraction, Application, Name, free_names, names

RENAME_PREFIX = "^"


def fresh_name(name, avoid):
    """Returns a decorated copy of name whose identifier is not in avoid."""
    candidate = name.name
    while candidate in avoid:
        candidate = RENAME_PREFIX + candidate
    return Name(candidate)


def alpha_convert(abstraction, new_name):
    """Renames the bound variable of abstraction to new_name. new_name must not occur in the body."""
    __, body = replace(abstraction.bound, new_name, abstraction.body)
    return Abstraction(new_name, body)


def replace(target, replacement, term):
    """Substitutes replacement for every free occurrence of target (a Name) in term. Returns (changed, result), where
    changed is whether any occurrence was replaced. Unchanged subtrees are shared with term, not copied.
    """
    cache = []

    def replacement_free():
        # only needed at binders whose body changed
        if not cache:
            cache.append(free_names(replacement))
        return cache[0]

    return _replace(target, replacement, replacement_free, term)


def _replace(target, replacement, replacement_free, term):
    if isinstance(term, Name):
        if term == target:
            return True, replacement
        return False, term

    elif isinstance(term, Application):
        func_changed, func = _replace(target, replacement, replacement_free, term.func)
        arg_changed, arg = _replace(target, replacement, replacement_free, term.arg)
        if func_changed or arg_changed:
            return True, Application(func, arg)
        return False, term

    elif isinstance(term, Abstraction):
        if term.bound == target:
            return False, term  # target is shadowed, so nothing below is free

        changed, body = _replace(target, replacement, replacement_free, term.body)
        if not changed:
            return False, term

        if term.bound.name in replacement_free():
            avoid = replacement_free() | names(term.body) | {target.name}
            renamed = alpha_convert(term, fresh_name(term.bound, avoid))
            return _replace(target, replacement, replacement_free, renamed)

        return True, Abstraction(term.bound, body)

    raise TypeError(f"'{type(term).__name__}' is not a λ-term")
