"""Lexical analysis for the lambda language. Note that this module does not provide input file handling, but rather
tokenization of arbitrary string expressions.

Tokens are scanned longest-match-first:

```
<lambda>  ::= "λ"
<dot>     ::= "."
<paren>   ::= "(" | ")"
<equals>  ::= "="
<word>    ::= (<alnum> | "_")+     ; classified as a keyword, an integer literal (all digits) or an identifier
<keyword> ::= "def" | "rec" | "if" | "then" | "else" | "IF" | "THEN" | "ELSE"
```

Whitespace between tokens is skipped. Any other character aborts tokenization with a LexicalError.
"""

import re
from dataclasses import dataclass
from enum import Enum

from lambdainterp.lang.error import LexicalError


class TokenKind(Enum):
    LAMBDA = "λ"
    DOT = "."
    LPAREN = "("
    RPAREN = ")"
    EQUALS = "="
    DEF = "def"
    REC = "rec"
    IF = "if"
    THEN = "then"
    ELSE = "else"
    IF_TYPED = "IF"
    THEN_TYPED = "THEN"
    ELSE_TYPED = "ELSE"
    INT_LITERAL = "<int>"
    OBJECT = "<object>"


SINGLE_CHARS = {kind.value: kind for kind in (TokenKind.LAMBDA, TokenKind.DOT, TokenKind.LPAREN, TokenKind.RPAREN,
                                              TokenKind.EQUALS)}
KEYWORDS = {kind.value: kind for kind in (TokenKind.DEF, TokenKind.REC, TokenKind.IF, TokenKind.THEN, TokenKind.ELSE,
                                          TokenKind.IF_TYPED, TokenKind.THEN_TYPED, TokenKind.ELSE_TYPED)}

WHITESPACE_RE = re.compile(r"\s*")
TOKEN_RE = re.compile(r"[λ.()=]|(?:(?!λ)\w)+")  # "λ" counts as a letter for \w
INT_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class Token:
    """A classified piece of source text. pos is the index of its first character."""
    kind: TokenKind
    text: str
    pos: int = 0

    def __str__(self):
        return self.text


def classify(text):
    """Returns the TokenKind of a scanned piece of text."""
    if text in SINGLE_CHARS:
        return SINGLE_CHARS[text]
    elif text in KEYWORDS:
        return KEYWORDS[text]
    elif INT_RE.fullmatch(text):
        return TokenKind.INT_LITERAL
    return TokenKind.OBJECT


def lex(source):
    """Token generator: lazily yields the Tokens of source."""
    pos = WHITESPACE_RE.match(source).end()

    while pos < len(source):
        match = TOKEN_RE.match(source, pos)
        if not match:
            msg = "'{}' has unexpected character '{}'"
            raise LexicalError(msg, (source, source[pos]), start=pos, end=pos + 1)

        yield Token(classify(match.group()), match.group(), pos)
        pos = WHITESPACE_RE.match(source, match.end()).end()


class TokenStream:
    """Cursor over the tokens of a source string. Tokens are lexed on demand and buffered, so a cursor position saved
    with mark can later be restored with reset: this is how the parser backtracks.
    """

    def __init__(self, source):
        self.source = source
        self.tokens = lex(source)
        self.buffer = []
        self.pos = 0
        self.furthest = 0  # furthest position read so far, used for error messages

    def _fill(self, pos):
        """Lexes until self.buffer holds index pos. Returns whether or not it does."""
        for token in self.tokens:
            self.buffer.append(token)
            if len(self.buffer) > pos:
                break
        return len(self.buffer) > pos

    def peek(self):
        """Returns the next Token without consuming it, or None at the end of input."""
        if self.pos < len(self.buffer) or self._fill(self.pos):
            return self.buffer[self.pos]
        return None

    def advance(self):
        """Consumes and returns the next Token, or None at the end of input."""
        token = self.peek()
        if token is not None:
            self.pos += 1
            self.furthest = max(self.furthest, self.pos)
        return token

    def accept(self, kind):
        """Consumes and returns the next Token if it is of the given kind, otherwise returns None."""
        token = self.peek()
        if token is not None and token.kind is kind:
            return self.advance()
        return None

    def at_end(self):
        return self.peek() is None

    def mark(self):
        """Returns the current cursor position."""
        return self.pos

    def reset(self, mark):
        """Rewinds the cursor to a position returned by mark."""
        self.pos = mark

    def furthest_token(self):
        """Returns the Token just past the furthest one consumed, or None if input was exhausted there."""
        if self.furthest < len(self.buffer) or self._fill(self.furthest):
            return self.buffer[self.furthest]
        return None
