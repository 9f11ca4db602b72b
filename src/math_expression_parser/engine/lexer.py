"""Normalize, validate and tokenize arithmetic expressions."""
from enum import Enum
import math
import re
import string
from typing import Dict, Iterator, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from math_expression_parser.common.operators import NULL_OPERATOR, Operator, OperatorKind, get_operator


NUMBER_PATTERN: str = r"\d*\.?\d+(?:e[+\-]?\d+)?"
SYMBOL_PATTERN: str = r"[()+\-*/^%x]"
KEYWORD_PATTERN: str = r"cos|sin|tan|cot|csc|sec|e|pi|tau"

# Alternation order matters: numbers first so "1e5" is one literal, not "1", "e", "5"
TOKEN_REGEX: re.Pattern = re.compile(f"{NUMBER_PATTERN}|{SYMBOL_PATTERN}|{KEYWORD_PATTERN}", re.ASCII)
TOKEN_OR_SPACE_REGEX: re.Pattern = re.compile(f"{NUMBER_PATTERN}|{SYMBOL_PATTERN}|{KEYWORD_PATTERN}|\\s+", re.ASCII)
NUMBER_REGEX: re.Pattern = re.compile(NUMBER_PATTERN, re.ASCII)
SPACES_REGEX: re.Pattern = re.compile(r"\s+", re.ASCII)

_ASCII_LOWER: Dict[int, int] = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

# Lexemes whose meaning does not depend on context
_LEXEME_TO_KIND: Dict[str, OperatorKind] = {
    "%": OperatorKind.PERCENTAGE,
    "(": OperatorKind.PAREN_L,
    ")": OperatorKind.PAREN_R,
    "*": OperatorKind.MULTIPLY,
    "/": OperatorKind.DIVIDE,
    "^": OperatorKind.EXPONENT,
    "x": OperatorKind.TIMES,
    "cos": OperatorKind.COSINE,
    "cot": OperatorKind.COTANGENT,
    "csc": OperatorKind.COSECANT,
    "e": OperatorKind.E,
    "pi": OperatorKind.PI,
    "sec": OperatorKind.SECANT,
    "sin": OperatorKind.SINE,
    "tan": OperatorKind.TANGENT,
    "tau": OperatorKind.TAU,
}

# (unary form, binary form) for signs
_SIGN_TO_KINDS: Dict[str, Tuple[OperatorKind, OperatorKind]] = {
    "+": (OperatorKind.UNARY_PLUS, OperatorKind.ADD),
    "-": (OperatorKind.UNARY_MINUS, OperatorKind.SUBTRACT),
}


class TokenType(str, Enum):
    """Classification of a lexeme."""

    NONE = "none"
    NUMBER = "number"
    OPERATOR = "operator"


class Token(BaseModel):
    """
    A single lexeme of a normalized expression.

    The resolved operator is stored by value, so a token never depends on the
    lifetime of the registry it was looked up in.
    """

    model_config = ConfigDict(frozen=True)

    lexeme: str = Field(default="", description="Raw text of the token")
    position: int = Field(default=0, ge=0, description="Offset in the normalized expression")
    type: TokenType = Field(default=TokenType.NONE, description="Number, operator or unknown")
    operator: Operator = Field(default=NULL_OPERATOR, description="Resolved operator, for operator tokens")
    value: float = Field(default=math.nan, description="Parsed value, for number tokens")

    @property
    def length(self) -> int:
        return len(self.lexeme)

    @property
    def kind(self) -> OperatorKind:
        return self.operator.kind

    @property
    def leaves_edge(self) -> bool:
        """
        Whether a sign following this token must be read as unary.

        True after an unknown token or any operator except a right parenthesis.
        """
        if self.type == TokenType.NONE:
            return True
        return self.type == TokenType.OPERATOR and self.operator.kind != OperatorKind.PAREN_R


def normalize(expression: str) -> str:
    """
    Collapse whitespace runs to a single space and fold ASCII letters to lower case.

    Only ASCII upper-case letters change and each whitespace run shrinks to one
    character, so the result is stable: normalizing twice is a no-op.

    :param str expression: Raw expression

    :return: Normalized expression
    :rtype: str
    """
    return SPACES_REGEX.sub(" ", expression).translate(_ASCII_LOWER)


def find_syntax_error(normalized: str) -> Optional[Tuple[int, int]]:
    """
    Find the first run of text that is neither a token nor whitespace.

    :param str normalized: Normalized expression

    :return: (position, length) of the first unrecognized run, or None if the whole string is valid
    :rtype: Optional[Tuple[int, int]]
    """
    last_end = 0
    for match in TOKEN_OR_SPACE_REGEX.finditer(normalized):
        if match.start() > last_end:
            return last_end, match.start() - last_end
        last_end = match.end()

    if last_end < len(normalized):
        return last_end, len(normalized) - last_end
    return None


def classify(lexeme: str, position: int = 0, left_is_edge: bool = False) -> Token:
    """
    Turn a lexeme into a number or operator token.

    Signs resolve to their unary form when the token to the left is the edge of
    a statement (start of input, an operator or a left parenthesis).

    :param str lexeme: Matched text
    :param int position: Offset in the normalized expression
    :param bool left_is_edge: Whether the previous token leaves an edge

    :return: Classified token, of type NONE if the lexeme is not recognized
    :rtype: Token
    """
    if lexeme in _SIGN_TO_KINDS:
        unary, binary = _SIGN_TO_KINDS[lexeme]
        kind = unary if left_is_edge else binary
        return Token(lexeme=lexeme, position=position, type=TokenType.OPERATOR, operator=get_operator(kind))

    if lexeme in _LEXEME_TO_KIND:
        return Token(
            lexeme=lexeme,
            position=position,
            type=TokenType.OPERATOR,
            operator=get_operator(_LEXEME_TO_KIND[lexeme]),
        )

    # The number grammar decides what counts as a literal, float() only converts it
    if NUMBER_REGEX.fullmatch(lexeme):
        return Token(lexeme=lexeme, position=position, type=TokenType.NUMBER, value=float(lexeme))

    return Token(lexeme=lexeme, position=position)


def tokenize(normalized: str) -> Iterator[Token]:
    """
    Yield the tokens of a normalized expression from left to right.

    The expression is expected to have passed ``find_syntax_error``; whitespace
    between tokens is skipped.

    :param str normalized: Normalized expression

    :return: Iterator of classified tokens
    :rtype: Iterator[Token]
    """
    left_is_edge = True
    for match in TOKEN_REGEX.finditer(normalized):
        token = classify(match.group(), match.start(), left_is_edge)
        left_is_edge = token.leaves_edge
        yield token
