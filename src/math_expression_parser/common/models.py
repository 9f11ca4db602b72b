"""Pydantic models for evaluation configuration and results."""
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ResultStatus(str, Enum):
    """Outcome category of an evaluation."""

    SUCCESS = "success"
    PARSING_ERROR = "parsing_error"
    EVALUATION_ERROR = "evaluation_error"


class ParseErrorKind(str, Enum):
    """Errors detected while reading the shape of the expression."""

    EMPTY = "empty"
    MISMATCHED_PARENS = "mismatched_parens"
    SYNTAX_ERROR = "syntax_error"


class EvalErrorKind(str, Enum):
    """Errors detected while applying an operator."""

    DIVIDE_BY_ZERO = "divide_by_zero"
    EXPECTED_CURRENT_VALUE = "expected_current_value"
    EXPECTED_MORE_ARGUMENTS = "expected_more_arguments"
    IMAGINARY_NUMBER = "imaginary_number"
    UNEXPECTED_TOKEN = "unexpected_token"


class Config(BaseModel):
    """Options that change how an expression is evaluated."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    use_degrees: bool = Field(default=True, description="Interpret trigonometric arguments as degrees instead of radians")


class SuccessResult(BaseModel):
    """Represents a successfully evaluated expression."""

    model_config = ConfigDict(frozen=True)

    status: Literal[ResultStatus.SUCCESS] = ResultStatus.SUCCESS
    value: float = Field(..., description="Evaluated numeric result of the expression")

    @property
    def ok(self) -> bool:
        return True


class _ErrorResult(BaseModel):
    """
    Fields shared by both error outcomes.

    ``error_position`` and ``error_length`` index into ``normalized_expression``,
    i.e. the expression after whitespace collapsing and case folding, not the
    raw input. Errors without a meaningful span use ``None`` and ``0``.
    """

    model_config = ConfigDict(frozen=True)

    normalized_expression: str = Field(default="", description="Expression after whitespace collapsing and case folding")
    error_position: Optional[int] = Field(default=None, ge=0, description="Offset of the offending text in the normalized expression")
    error_length: int = Field(default=0, ge=0, description="Length of the offending text")

    @property
    def ok(self) -> bool:
        return False

    @property
    def error_text(self) -> str:
        """
        Slice of the normalized expression covered by the error span.

        :return: Offending text, or an empty string when the error has no span
        :rtype: str
        """
        if self.error_position is None:
            return ""
        return self.normalized_expression[self.error_position:self.error_position + self.error_length]

    def describe(self) -> str:
        """
        Build a one-line human readable message for the error.

        Examples:
            - ``<parsing error: empty>``
            - ``<parsing error: syntax error> at position 1: "a"``

        :return: Error message
        :rtype: str
        """
        label = f"<{self.status.value.replace('_', ' ')}: {self.error.value.replace('_', ' ')}>"
        if self.error_position is None:
            return label
        return f'{label} at position {self.error_position}: "{self.error_text}"'


class ParseErrorResult(_ErrorResult):
    """Represents an expression that could not be parsed."""

    status: Literal[ResultStatus.PARSING_ERROR] = ResultStatus.PARSING_ERROR
    error: ParseErrorKind = Field(..., description="Kind of parsing error")


class EvalErrorResult(_ErrorResult):
    """Represents an expression that parsed but could not be computed."""

    status: Literal[ResultStatus.EVALUATION_ERROR] = ResultStatus.EVALUATION_ERROR
    error: EvalErrorKind = Field(..., description="Kind of evaluation error")


# Tagged union of every possible evaluation outcome
Result = Annotated[
    Union[SuccessResult, ParseErrorResult, EvalErrorResult],
    Field(discriminator="status"),
]
