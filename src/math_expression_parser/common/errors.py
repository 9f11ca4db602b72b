"""Exceptions raised inside the evaluation engine."""
from typing import Optional, Union

from math_expression_parser.common.models import (
    EvalErrorKind,
    EvalErrorResult,
    ParseErrorKind,
    ParseErrorResult,
)


class ExpressionError(ValueError):
    """
    Base class for every failure raised while evaluating an expression.

    Carries the error kind and the span of the offending text in the
    normalized expression. Only the concrete subclasses convert into a
    result model.
    """

    def __init__(
        self,
        kind: Union[ParseErrorKind, EvalErrorKind],
        position: Optional[int] = None,
        length: int = 0,
    ) -> None:
        self.kind = kind
        self.position = position
        self.length = length
        if position is None:
            super().__init__(kind.value)
        else:
            super().__init__(f"{kind.value} at position {position}")


class ParsingError(ExpressionError):
    """The expression is empty, unbalanced or contains unknown text."""

    kind: ParseErrorKind

    def to_result(self, normalized_expression: str) -> ParseErrorResult:
        return ParseErrorResult(
            error=self.kind,
            normalized_expression=normalized_expression,
            error_position=self.position,
            error_length=self.length,
        )


class EvaluationError(ExpressionError):
    """An operator could not be applied to the operands at hand."""

    kind: EvalErrorKind

    def to_result(self, normalized_expression: str) -> EvalErrorResult:
        return EvalErrorResult(
            error=self.kind,
            normalized_expression=normalized_expression,
            error_position=self.position,
            error_length=self.length,
        )

    def at(self, position: int, length: int) -> "EvaluationError":
        """
        Return a copy of this error located at the given span.

        The operator semantics do not know where the operator came from, so the
        engine attaches the span of the token it was processing.

        :param int position: Offset of the token in the normalized expression
        :param int length: Length of the token lexeme

        :return: Located error
        :rtype: EvaluationError
        """
        return EvaluationError(self.kind, position, length)
