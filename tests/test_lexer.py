"""Test normalization, validation and tokenization."""
import math

from pydantic import ValidationError
import pytest

from math_expression_parser.common.operators import OperatorKind
from math_expression_parser.engine.lexer import (
    Token,
    TokenType,
    classify,
    find_syntax_error,
    normalize,
    tokenize,
)


@pytest.mark.parametrize("expr,expected", [
    ("1 + 2", "1 + 2"),
    ("1    +\t2", "1 + 2"),
    ("  PI  ", " pi "),
    ("Cos(TAU)", "cos(tau)"),
    ("\n\r\f\v", " "),
    ("", ""),
])
def test_normalize(expr, expected):
    """normalize collapses whitespace and folds case."""
    assert normalize(expr) == expected


@pytest.mark.parametrize("expr", [
    "  SIN  30 ",
    "1\t\t+\n2",
    "Ünïcode STAYS",
    "",
])
def test_normalize_is_idempotent(expr):
    """Normalizing an already normalized expression changes nothing."""
    once = normalize(expr)
    assert normalize(once) == once


def test_normalize_only_folds_ascii():
    """Non-ASCII letters keep their case so offsets stay aligned."""
    assert normalize("Ä") == "Ä"


@pytest.mark.parametrize("expr", [
    "1 + 2",
    "1.5e-3 * .5",
    "sin cos tan cot csc sec",
    "e pi tau x",
    "(1 + 2) ^ 3 % 4 / 5",
    "",
    " ",
])
def test_find_syntax_error_valid(expr):
    """find_syntax_error returns None when every character belongs to a token or whitespace."""
    assert find_syntax_error(expr) is None


@pytest.mark.parametrize("expr,expected", [
    ("1a", (1, 1)),
    ("abc", (0, 3)),
    ("1 + 2 # 3", (6, 1)),
    ("12.", (2, 1)),
    ("1 + 2 #", (6, 1)),
    ("# 1 ?", (0, 1)),
    ("1,5", (1, 1)),
])
def test_find_syntax_error_span(expr, expected):
    """find_syntax_error reports the first unrecognized run."""
    assert find_syntax_error(expr) == expected


@pytest.mark.parametrize("lexeme,expected", [
    ("1", 1.0),
    ("1.5", 1.5),
    (".5", 0.5),
    ("1e3", 1000.0),
    ("2.5e-1", 0.25),
])
def test_classify_number(lexeme, expected):
    """classify parses number literals."""
    token = classify(lexeme)
    assert token.type == TokenType.NUMBER
    assert token.value == expected
    assert token.kind == OperatorKind.NONE


@pytest.mark.parametrize("lexeme,kind", [
    ("*", OperatorKind.MULTIPLY),
    ("/", OperatorKind.DIVIDE),
    ("^", OperatorKind.EXPONENT),
    ("%", OperatorKind.PERCENTAGE),
    ("x", OperatorKind.TIMES),
    ("(", OperatorKind.PAREN_L),
    (")", OperatorKind.PAREN_R),
    ("sin", OperatorKind.SINE),
    ("cos", OperatorKind.COSINE),
    ("tan", OperatorKind.TANGENT),
    ("csc", OperatorKind.COSECANT),
    ("sec", OperatorKind.SECANT),
    ("cot", OperatorKind.COTANGENT),
    ("e", OperatorKind.E),
    ("pi", OperatorKind.PI),
    ("tau", OperatorKind.TAU),
])
def test_classify_operator(lexeme, kind):
    """classify resolves symbols and keywords to operators."""
    token = classify(lexeme)
    assert token.type == TokenType.OPERATOR
    assert token.kind == kind
    assert math.isnan(token.value)


@pytest.mark.parametrize("lexeme,left_is_edge,kind", [
    ("+", True, OperatorKind.UNARY_PLUS),
    ("+", False, OperatorKind.ADD),
    ("-", True, OperatorKind.UNARY_MINUS),
    ("-", False, OperatorKind.SUBTRACT),
])
def test_classify_sign_depends_on_context(lexeme, left_is_edge, kind):
    """Signs are unary at an edge and binary otherwise."""
    assert classify(lexeme, left_is_edge=left_is_edge).kind == kind


@pytest.mark.parametrize("lexeme", ["12.", "?", "sine", ""])
def test_classify_unknown(lexeme):
    """Text outside the grammar classifies as NONE, never as a number."""
    token = classify(lexeme)
    assert token.type == TokenType.NONE
    assert token.leaves_edge


@pytest.mark.parametrize("lexeme,expected", [
    ("1", False),
    (")", False),
    ("(", True),
    ("+", True),
    ("*", True),
    ("sin", True),
    ("pi", True),
])
def test_token_leaves_edge(lexeme, expected):
    """Only numbers and right parentheses close an operand."""
    assert classify(lexeme).leaves_edge == expected


def test_tokenize_positions_and_lexemes():
    """tokenize yields tokens with their offsets, skipping whitespace."""
    tokens = list(tokenize("12 + sin(3.5)"))
    assert [t.lexeme for t in tokens] == ["12", "+", "sin", "(", "3.5", ")"]
    assert [t.position for t in tokens] == [0, 3, 5, 8, 9, 12]


def test_tokenize_disambiguates_signs():
    """Each sign is classified from the token to its left."""
    tokens = list(tokenize("-1 - -(2) + +3"))
    kinds = [t.kind for t in tokens if t.type == TokenType.OPERATOR]
    assert kinds == [
        OperatorKind.UNARY_MINUS,
        OperatorKind.SUBTRACT,
        OperatorKind.UNARY_MINUS,
        OperatorKind.PAREN_L,
        OperatorKind.PAREN_R,
        OperatorKind.ADD,
        OperatorKind.UNARY_PLUS,
    ]


def test_tokenize_exponent_literal_is_one_token():
    """An exponent suffix belongs to the number, a lone e is the constant."""
    tokens = list(tokenize("1e5 e"))
    assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.OPERATOR]
    assert tokens[0].value == 1e5
    assert tokens[1].kind == OperatorKind.E


def test_tokenize_empty():
    """An empty expression yields no tokens."""
    assert list(tokenize("")) == []
    assert list(tokenize(" ")) == []


def test_token_is_frozen():
    """Tokens cannot be modified after creation."""
    token = classify("1")
    with pytest.raises(ValidationError):
        token.value = 2.0


def test_token_length():
    """A token's length is the length of its lexeme."""
    assert Token(lexeme="tau").length == 3
