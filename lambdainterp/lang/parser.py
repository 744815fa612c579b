"""Backtracking recursive-descent parser for the lambda language.

Each top-level unit is either a definition or an expression:

```
<unit>       ::= <definition> | <expr>
<definition> ::= ("def" | "rec") <name> <name>* "=" <expr>
```

At every expression position the following alternatives are tried in order. The first one that succeeds wins; each
one saves the cursor before it starts and rewinds it when it fails.

```
<expr> ::= "if" <expr> "then" <expr> "else" <expr>    ; ((cond then) else) condition
         | "IF" <expr> "THEN" <expr> "ELSE" <expr>    ; same, with typed_cond
         | <int>                                      ; succ applied <int> times to zero
         | <symbol> <expr>{arity}                     ; implicit application of a defined symbol
         | <name>
         | "λ" <name> "." <expr>
         | "(" <expr> <expr> ")"                      ; explicit application
         | "(" <expr> ")"                             ; grouping
```

A defined symbol with arity n consumes exactly n following expressions, or none at all: if fewer than n can be
parsed, the symbol stands alone. As the function of an explicit application, a symbol whose arguments would run up
to the closing parenthesis also stands alone, so that `(f x)` applies f to x.

`def f x y = body` binds f to λx.λy.body with arity 2. `rec` additionally lets the body refer to f: the reference is
bound through the fixpoint combinator, giving (recursive λf^.λx.λy.body).
"""

import logging
from dataclasses import dataclass, replace as dataclass_replace
from enum import Enum, auto
from typing import Optional

from lambdainterp.lang.error import ParseError, RedefinitionError
from lambdainterp.lang.lexical import TokenKind, TokenStream
from lambdainterp.lang.numerical import cnumber
from lambdainterp.lang.primitives import COND, RECURSIVE, TYPED_COND, default_symbols
from lambdainterp.lang.symbols import SymbolTable
from lambdainterp.pure.term import Abstraction, Application, Name, Term, apply, curry

SELF_SUFFIX = "^"

logger = logging.getLogger(__name__)


class ParentPos(Enum):
    """Where the expression being parsed sits."""
    EXPRESSION = auto()
    APPLICATION_FUNC = auto()  # function slot of an explicit "(" <expr> <expr> ")"


@dataclass(frozen=True)
class ParseContext:
    symbols: SymbolTable
    position: ParentPos = ParentPos.EXPRESSION

    def at(self, position):
        return dataclass_replace(self, position=position)


@dataclass(frozen=True)
class Unit:
    """One top-level parse result. Definitions carry their name and arity, expressions have name None."""
    term: Term
    name: Optional[str] = None
    arity: int = 0

    @property
    def is_definition(self):
        return self.name is not None


class Parser:
    """Parses units from source, installing definitions into symbols."""

    def __init__(self, source, symbols=None):
        self.tokens = TokenStream(source)
        self.symbols = symbols if symbols is not None else default_symbols()

    def __iter__(self):
        """Yields units until the input is exhausted."""
        while True:
            unit = self.parse_unit()
            if unit is None:
                return
            yield unit

    def parse_unit(self):
        """Returns the next Unit, or None at the end of input. Raises ParseError if the upcoming tokens are not a valid
        unit, and RedefinitionError if a definition reuses an existing name.
        """
        first = self.tokens.peek()
        if first is None:
            return None

        if first.kind in (TokenKind.DEF, TokenKind.REC):
            return self._parse_definition()

        term = self._parse_expression(ParseContext(self.symbols))
        if term is None:
            self._fail()
        return Unit(term)

    def _fail(self):
        """Raises a ParseError pointing at the furthest token reached."""
        source = self.tokens.source
        token = self.tokens.furthest_token()
        if token is None:
            raise ParseError("'{}' ends unexpectedly", source, start=len(source.rstrip()), end=len(source.rstrip()) + 1)
        msg = "'{}' is not valid λ-term grammar at '{}'"
        raise ParseError(msg, (source, token.text), start=token.pos, end=token.pos + len(token.text))

    def _parse_definition(self):
        recursive = self.tokens.advance().kind is TokenKind.REC

        name = self.tokens.accept(TokenKind.OBJECT)
        if name is None:
            self._fail()
        if name.text in self.symbols:
            msg = "'{}' redefines symbol '{}'"
            source = self.tokens.source
            raise RedefinitionError(msg, (source, name.text), start=name.pos, end=name.pos + len(name.text))

        params = []
        param = self.tokens.accept(TokenKind.OBJECT)
        while param is not None:
            params.append(Name(param.text))
            param = self.tokens.accept(TokenKind.OBJECT)

        if self.tokens.accept(TokenKind.EQUALS) is None:
            self._fail()

        # the self-reference is only visible while parsing this body
        scope = self.symbols.extend()
        self_ref = Name(name.text + SELF_SUFFIX)
        if recursive:
            scope.define(name.text, self_ref, len(params))

        body = self._parse_expression(ParseContext(scope))
        if body is None:
            self._fail()

        term = curry(params, body)
        if recursive:
            term = Application(RECURSIVE, Abstraction(self_ref, term))

        self.symbols.define(name.text, term, len(params))
        logger.info("DEF %s:%d = %s", name.text, len(params), term)
        return Unit(term, name.text, len(params))

    def _parse_expression(self, ctx):
        """Returns the first alternative that parses at the cursor, or None if none does."""
        alternatives = (
            self._parse_if,
            self._parse_typed_if,
            self._parse_int,
            self._parse_symbol,
            self._parse_name,
            self._parse_abstraction,
            self._parse_application,
            self._parse_group,
        )
        for alternative in alternatives:
            term = alternative(ctx)
            if term is not None:
                return term
        return None

    def _parse_conditional(self, ctx, keywords, selector):
        """if/then/else desugared to ((selector then) else) condition. keywords are the three TokenKinds to expect."""
        mark = self.tokens.mark()
        if_kind, then_kind, else_kind = keywords

        if self.tokens.accept(if_kind):
            inner = ctx.at(ParentPos.EXPRESSION)
            condition = self._parse_expression(inner)
            if condition is not None and self.tokens.accept(then_kind):
                then_term = self._parse_expression(inner)
                if then_term is not None and self.tokens.accept(else_kind):
                    else_term = self._parse_expression(inner)
                    if else_term is not None:
                        return apply(selector, then_term, else_term, condition)

        self.tokens.reset(mark)
        return None

    def _parse_if(self, ctx):
        return self._parse_conditional(ctx, (TokenKind.IF, TokenKind.THEN, TokenKind.ELSE), COND)

    def _parse_typed_if(self, ctx):
        keywords = (TokenKind.IF_TYPED, TokenKind.THEN_TYPED, TokenKind.ELSE_TYPED)
        return self._parse_conditional(ctx, keywords, TYPED_COND)

    def _parse_int(self, ctx):
        token = self.tokens.accept(TokenKind.INT_LITERAL)
        return cnumber(token.text) if token is not None else None

    def _parse_symbol(self, ctx):
        mark = self.tokens.mark()
        token = self.tokens.accept(TokenKind.OBJECT)

        if token is not None:
            definition = ctx.symbols.lookup(token.text)
            if definition is not None:
                applied = self._parse_implicit_application(definition, ctx)
                return applied if applied is not None else definition.term

        self.tokens.reset(mark)
        return None

    def _parse_implicit_application(self, definition, ctx):
        """Parses exactly definition.arity arguments after a symbol. Returns None, with the cursor restored, if they
        are not all there.
        """
        mark = self.tokens.mark()
        term = definition.term
        arg_ctx = ctx.at(ParentPos.EXPRESSION)

        for remaining in reversed(range(definition.arity)):
            arg = self._parse_expression(arg_ctx)
            if arg is None:
                break
            term = Application(term, arg)

            if remaining == 0:
                next_token = self.tokens.peek()
                closes = next_token is not None and next_token.kind is TokenKind.RPAREN
                if ctx.position is ParentPos.APPLICATION_FUNC and closes:
                    break  # the last argument belongs to the enclosing application
                return term

        self.tokens.reset(mark)
        return None

    def _parse_name(self, ctx):
        token = self.tokens.accept(TokenKind.OBJECT)
        return Name(token.text) if token is not None else None

    def _parse_abstraction(self, ctx):
        mark = self.tokens.mark()

        if self.tokens.accept(TokenKind.LAMBDA):
            bound = self.tokens.accept(TokenKind.OBJECT)
            if bound is not None and self.tokens.accept(TokenKind.DOT):
                body = self._parse_expression(ctx.at(ParentPos.EXPRESSION))
                if body is not None:
                    return Abstraction(Name(bound.text), body)

        self.tokens.reset(mark)
        return None

    def _parse_application(self, ctx):
        mark = self.tokens.mark()

        if self.tokens.accept(TokenKind.LPAREN):
            func = self._parse_expression(ctx.at(ParentPos.APPLICATION_FUNC))
            if func is not None:
                arg = self._parse_expression(ctx)
                if arg is not None and self.tokens.accept(TokenKind.RPAREN):
                    return Application(func, arg)

        self.tokens.reset(mark)
        return None

    def _parse_group(self, ctx):
        mark = self.tokens.mark()

        if self.tokens.accept(TokenKind.LPAREN):
            term = self._parse_expression(ctx.at(ParentPos.EXPRESSION))
            if term is not None and self.tokens.accept(TokenKind.RPAREN):
                return term

        self.tokens.reset(mark)
        return None


def parse(source, symbols=None):
    """Returns the list of units in source."""
    return list(Parser(source, symbols))
