"""Test the exception hierarchy of the engine."""
import pytest

from math_expression_parser.common.errors import EvaluationError, ExpressionError, ParsingError
from math_expression_parser.common.models import (
    EvalErrorKind,
    EvalErrorResult,
    ParseErrorKind,
    ParseErrorResult,
)


@pytest.mark.parametrize("error", [
    ParsingError(ParseErrorKind.EMPTY),
    EvaluationError(EvalErrorKind.DIVIDE_BY_ZERO, 2, 1),
])
def test_errors_are_value_errors(error):
    """Engine errors can be caught as ValueError."""
    assert isinstance(error, ExpressionError)
    assert isinstance(error, ValueError)


def test_error_message():
    """The message names the kind and, when known, the position."""
    assert str(ParsingError(ParseErrorKind.EMPTY)) == "empty"
    assert str(EvaluationError(EvalErrorKind.DIVIDE_BY_ZERO, 2, 1)) == "divide_by_zero at position 2"


def test_evaluation_error_at():
    """at() returns a located copy and keeps the original untouched."""
    error = EvaluationError(EvalErrorKind.EXPECTED_MORE_ARGUMENTS)
    located = error.at(4, 3)
    assert located.kind == EvalErrorKind.EXPECTED_MORE_ARGUMENTS
    assert (located.position, located.length) == (4, 3)
    assert error.position is None


def test_parsing_error_to_result():
    """A parsing error converts into a ParseErrorResult."""
    result = ParsingError(ParseErrorKind.SYNTAX_ERROR, 1, 2).to_result("1ab")
    assert isinstance(result, ParseErrorResult)
    assert result.error == ParseErrorKind.SYNTAX_ERROR
    assert result.error_text == "ab"


def test_evaluation_error_to_result():
    """An evaluation error converts into an EvalErrorResult."""
    result = EvaluationError(EvalErrorKind.IMAGINARY_NUMBER, 5, 1).to_result("(-1) ^ 0.5")
    assert isinstance(result, EvalErrorResult)
    assert result.error == EvalErrorKind.IMAGINARY_NUMBER
    assert result.error_text == "^"


def test_only_concrete_errors_convert():
    """The base class has no result kind of its own, so only its subclasses convert."""
    assert not hasattr(ExpressionError, "to_result")
    assert hasattr(ParsingError, "to_result")
    assert hasattr(EvaluationError, "to_result")
