"""Apply operators to the value stack."""
from collections.abc import Callable as ABCCallable
import math
import operator
from typing import Callable, Dict, List

from math_expression_parser.common.errors import EvaluationError
from math_expression_parser.common.models import Config, EvalErrorKind
from math_expression_parser.common.operators import Operator, OperatorKind


# Type aliases for operator functions
UnaryFn: ABCCallable[[float], float] = Callable[[float], float]
BinaryFn: ABCCallable[[float, float], float] = Callable[[float, float], float]


def _reciprocal(fn: UnaryFn) -> UnaryFn:
    """Build ``1 / fn(x)``, giving a signed infinity on an exact zero denominator."""

    def inverse(x: float) -> float:
        denominator = fn(x)
        if denominator == 0.0:
            return math.copysign(math.inf, denominator)
        return 1.0 / denominator

    return inverse


def _divide(a: float, b: float) -> float:
    if b == 0.0:
        raise EvaluationError(EvalErrorKind.DIVIDE_BY_ZERO)
    return a / b


def _power(a: float, b: float) -> float:
    """
    Raise ``a`` to the power ``b`` with IEEE-like results.

    math.pow raises where IEEE arithmetic returns special values, so those cases are handled
    here: overflow and a zero base with a negative exponent both become an
    infinity, negative only for an odd integer exponent of a negative or -0 base.
    """
    if a < 0 and math.isfinite(b) and math.modf(b)[0] != 0.0:
        # Real result does not exist
        raise EvaluationError(EvalErrorKind.IMAGINARY_NUMBER)
    if a == 0.0 and b < 0:
        odd = math.isfinite(b) and b % 2 == 1
        return math.copysign(math.inf, a) if odd else math.inf
    try:
        return math.pow(a, b)
    except OverflowError:
        negative = a < 0 and b % 2 == 1
        return -math.inf if negative else math.inf


# Values pushed by zero-arity operators
CONSTANTS: Dict[OperatorKind, float] = {
    OperatorKind.E: math.e,
    OperatorKind.PI: math.pi,
    OperatorKind.TAU: math.tau,
}

TRIG_FUNCTIONS: Dict[OperatorKind, UnaryFn] = {
    OperatorKind.COSECANT: _reciprocal(math.sin),
    OperatorKind.COSINE: math.cos,
    OperatorKind.COTANGENT: _reciprocal(math.tan),
    OperatorKind.SECANT: _reciprocal(math.cos),
    OperatorKind.SINE: math.sin,
    OperatorKind.TANGENT: math.tan,
}

SIGN_FUNCTIONS: Dict[OperatorKind, UnaryFn] = {
    OperatorKind.UNARY_MINUS: operator.neg,
    OperatorKind.UNARY_PLUS: operator.pos,
}

BINARY_FUNCTIONS: Dict[OperatorKind, BinaryFn] = {
    OperatorKind.ADD: operator.add,
    OperatorKind.SUBTRACT: operator.sub,
    OperatorKind.MULTIPLY: operator.mul,
    OperatorKind.DIVIDE: _divide,
    OperatorKind.EXPONENT: _power,
}


def _apply_trig(kind: OperatorKind, value: float, config: Config) -> float:
    if not math.isfinite(value):
        return math.nan
    if config.use_degrees:
        value = math.radians(value)
    return TRIG_FUNCTIONS[kind](value)


def _scale_by_current(kind: OperatorKind, value: float, current_value: float) -> float:
    if math.isnan(current_value):
        raise EvaluationError(EvalErrorKind.EXPECTED_CURRENT_VALUE)
    if kind == OperatorKind.PERCENTAGE:
        return value * current_value / 100.0
    return value * current_value


def apply_operator(
    op: Operator,
    values: List[float],
    config: Config,
    current_value: float = math.nan,
) -> None:
    """
    Apply an operator to the top of the value stack, in place.

    Binary operators pop ``b`` then ``a`` and push ``a <op> b``. Percentage and
    times scale the popped value by the ambient current value.

    :param Operator op: Operator to apply
    :param List[float] values: Value stack, modified in place
    :param Config config: Evaluation options
    :param float current_value: Ambient value for percentage and times, NaN if absent

    :return: None
    :raises EvaluationError: If the operator cannot be applied
    """
    # Check that there are enough operands for the operator
    if len(values) < op.arity:
        raise EvaluationError(EvalErrorKind.EXPECTED_MORE_ARGUMENTS)

    kind = op.kind

    if kind in CONSTANTS:
        values.append(CONSTANTS[kind])

    elif kind in TRIG_FUNCTIONS:
        values.append(_apply_trig(kind, values.pop(), config))

    elif kind in (OperatorKind.PERCENTAGE, OperatorKind.TIMES):
        values.append(_scale_by_current(kind, values.pop(), current_value))

    elif kind in SIGN_FUNCTIONS:
        values.append(SIGN_FUNCTIONS[kind](values.pop()))

    elif kind in BINARY_FUNCTIONS:
        b: float = values.pop()
        a: float = values.pop()
        values.append(BINARY_FUNCTIONS[kind](a, b))

    else:
        # Parentheses and NONE never reach evaluation from a valid token stream
        raise EvaluationError(EvalErrorKind.UNEXPECTED_TOKEN)
