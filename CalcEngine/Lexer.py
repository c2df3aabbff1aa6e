# Lexer.py
"""""
Tokenizer for the MathEngine.

Turns the raw input string into a flat token list. Every parenthesized group
is lexed recursively into a single GroupToken, so the token list mirrors the
nesting of the source. Positions reported in errors are 0-based offsets into
the top-level string.

A '-' is either a binary operator or a NegationToken. It is a negation when
nothing but negations precede it, or when it follows an operator; it is never
a negation right after a number.
"""""
import math
from decimal import Decimal

from . import error as E

Operations = ["^", "*", "/", "+", "-"]
Digits = "0123456789"
Identifier_Chars = "abcdefghijklmnopqrstuvwxyz_"


def isDigit(zahl):
    """Return True for a single ASCII digit."""
    return len(zahl) == 1 and zahl in Digits


def isOp(zahl):
    """Return index of a known operator or -1 if unknown."""
    try:
        return Operations.index(zahl)
    except ValueError:
        return -1


def format_number(value):
    """Render a float for display and error messages.

    Shortest round-trip digits, positional between 1E-15 and 1E+16
    (3.0 -> '3', 1e-07 -> '0.0000001'), scientific with 'E' outside that
    range (1e300 -> '1E+300') so the text can be typed back in.
    """
    if not math.isfinite(value):
        return repr(value)
    if value == 0:
        return "0"
    digits = Decimal(repr(value)).normalize()
    if 1e-15 <= abs(value) < 1e16:
        return format(digits, "f")
    return format(digits, "E")


# -----------------------------
# Token types
# -----------------------------

class Token:
    """Base class; tokens compare by type and payload."""
    def _key(self):
        return ()

    def __eq__(self, other):
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self):
        return hash((type(self).__name__, self._key()))


class NumberToken(Token):
    def __init__(self, value):
        self.value = float(value)

    def _key(self):
        return (self.value,)

    def descriptor(self):
        return f"number {format_number(self.value)}"

    def __repr__(self):
        return f"Number({format_number(self.value)})"


class OperatorToken(Token):
    def __init__(self, operator):
        self.operator = operator

    def _key(self):
        return (self.operator,)

    def descriptor(self):
        return f"operator {self.operator}"

    def __repr__(self):
        return f"Op({self.operator!r})"


class IdentifierToken(Token):
    def __init__(self, name):
        self.name = name

    def _key(self):
        return (self.name,)

    def descriptor(self):
        return f"variable {self.name}"

    def __repr__(self):
        return f"Var({self.name!r})"


class GroupToken(Token):
    def __init__(self, tokens):
        self.tokens = tuple(tokens)

    def _key(self):
        return self.tokens

    def descriptor(self):
        return "parentheses expression"

    def __repr__(self):
        return f"Group({list(self.tokens)})"


class NegationToken(Token):
    def descriptor(self):
        return "token '-'"

    def __repr__(self):
        return "Negation"


# -----------------------------
# Token builder
# -----------------------------

NUMBER = "number"
OPERATOR = "operator"
NEGATION = "negation"
GROUP = "group"
IDENTIFIER = "identifier"


class TokenBuilder:
    """State of the token currently being read.

    One builder type for all token kinds; `kind` selects the branch in
    can_insert / push / into_token.
    """
    def __init__(self, kind, start=0):
        self.kind = kind
        self.start = start
        self.text = ""
        self.complete = False
        # number: integer, fraction and exponent segments
        self.parts = ["", "", ""]
        self.segment = 0
        # group: parenthesis depth
        self.level = 0

    def _segment_has_digit(self):
        return any(isDigit(c) for c in self.parts[self.segment])

    def can_insert(self, c):
        if self.kind == NUMBER:
            return (isDigit(c)
                    or (c in "+-" and self.segment == 2 and not self.parts[2])
                    or (c == "." and self.segment == 0 and bool(self.parts[0]))
                    or (c == "E" and self.segment < 2 and self._segment_has_digit()))
        elif self.kind == OPERATOR:
            return not self.complete and isOp(c) != -1
        elif self.kind == NEGATION:
            return not self.complete and c == "-"
        elif self.kind == GROUP:
            return not self.complete and (c != ")" or self.level > 0)
        elif self.kind == IDENTIFIER:
            return c in Identifier_Chars
        return False

    def push(self, c):
        """Append one character; return False if the builder rejects it."""
        if not self.can_insert(c):
            return False

        if self.kind == NUMBER:
            if c == ".":
                self.segment = 1
            elif c == "E":
                self.segment = 2
            else:
                self.parts[self.segment] += c

        elif self.kind in (OPERATOR, NEGATION):
            self.text = c
            self.complete = True

        elif self.kind == GROUP:
            if c == ")":
                self.level -= 1
            if self.level > 0:
                self.text += c
            if c == "(":
                self.level += 1
            self.complete = self.level == 0

        elif self.kind == IDENTIFIER:
            self.text += c

        return True

    def into_token(self):
        """Finish the builder. Raises LexerEOF if the token is incomplete."""
        if self.kind == NUMBER:
            return self._number_token()

        elif self.kind == OPERATOR:
            if not self.complete:
                raise E.LexerEOF()
            return OperatorToken(self.text)

        elif self.kind == NEGATION:
            if not self.complete:
                raise E.LexerEOF()
            return NegationToken()

        elif self.kind == GROUP:
            if not self.text:
                raise E.EmptyParentheses()
            if not self.complete:
                raise E.LexerEOF()
            try:
                return GroupToken(lex(self.text, self.start + 1))
            except E.LexerEOF:
                # The group closed before its content was complete
                raise E.UnexpectedCharacter(")", self.start + len(self.text) + 1)

        elif self.kind == IDENTIFIER:
            if not self.text:
                raise E.LexerEOF()
            return IdentifierToken(self.text)

        raise E.LexerEOF()

    def _number_token(self):
        str_number = ""
        for index, marker in enumerate(("", ".", "E")):
            part = self.parts[index]
            if not part and self.segment == index:
                raise E.LexerEOF()
            if part:
                str_number += marker + part
        try:
            return NumberToken(float(str_number))
        except ValueError:
            raise E.LexerEOF()

    def __repr__(self):
        return f"TokenBuilder({self.kind!r}, text={self.text!r}, parts={self.parts!r})"


# -----------------------------
# Lexer
# -----------------------------

def _last_significant(tokens):
    """Last token that is not a negation, or None."""
    for token in reversed(tokens):
        if not isinstance(token, NegationToken):
            return token
    return None


def _start_builder(current_char, tokens, position):
    """Pick the builder for `current_char`, None for whitespace."""
    last_is_op = isinstance(_last_significant(tokens), OperatorToken)
    last_is_num = bool(tokens) and isinstance(tokens[-1], NumberToken)
    nothing_before = _last_significant(tokens) is None

    if current_char.isspace():
        return None
    elif current_char == "-" and (last_is_op or nothing_before) and not last_is_num:
        return TokenBuilder(NEGATION)
    elif isDigit(current_char) and not last_is_num:
        return TokenBuilder(NUMBER)
    elif isOp(current_char) != -1 and not last_is_op:
        return TokenBuilder(OPERATOR)
    elif current_char == "(":
        return TokenBuilder(GROUP, position)
    elif current_char in Identifier_Chars:
        return TokenBuilder(IDENTIFIER)
    raise E.UnexpectedCharacter(current_char, position)


def lex(problem, offset=0):
    """Convert `problem` into a token list.

    `offset` is the position of problem[0] in the top-level string; it is set
    by the recursive call for parenthesized groups.
    """
    tokens = []
    pending = None
    b = 0

    while b < len(problem):
        current_char = problem[b]
        position = offset + b

        if pending is None:
            pending = _start_builder(current_char, tokens, position)

        if pending is not None:
            if not pending.push(current_char):
                raise E.UnexpectedCharacter(current_char, position)

            next_char = problem[b + 1] if b + 1 < len(problem) else None
            if next_char is None or not pending.can_insert(next_char):
                try:
                    tokens.append(pending.into_token())
                except E.LexerEOF:
                    if next_char is None:
                        raise
                    raise E.UnexpectedCharacter(next_char, position + 1)
                pending = None

        b += 1

    if tokens and isinstance(tokens[-1], (OperatorToken, NegationToken)):
        raise E.LexerEOF()

    return tokens
