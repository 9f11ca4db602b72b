"""Registry of operators with their precedence, associativity and arity."""
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Associativity(str, Enum):
    """Grouping direction for operators of equal precedence."""

    NONE = "none"
    LEFT = "left"
    RIGHT = "right"


class OperatorKind(str, Enum):
    """Every operator the engine knows about."""

    NONE = "none"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    EXPONENT = "exponent"
    UNARY_MINUS = "unary_minus"
    UNARY_PLUS = "unary_plus"
    PERCENTAGE = "percentage"
    TIMES = "times"
    SINE = "sine"
    COSINE = "cosine"
    TANGENT = "tangent"
    COSECANT = "cosecant"
    SECANT = "secant"
    COTANGENT = "cotangent"
    E = "e"
    PI = "pi"
    TAU = "tau"
    PAREN_L = "paren_l"
    PAREN_R = "paren_r"


class Operator(BaseModel):
    """
    Static description of an operator.

    ``arity`` is the number of operands taken from the value stack when the
    operator is reduced. Constants have arity 0 and only push a value.
    """

    model_config = ConfigDict(frozen=True)

    kind: OperatorKind = Field(..., description="Operator identity")
    associativity: Associativity = Field(default=Associativity.NONE, description="Grouping for equal precedence")
    precedence: int = Field(..., description="Binding strength, higher binds tighter")
    arity: int = Field(default=0, ge=0, le=2, description="Number of operands consumed")
    name: str = Field(default="", description="Display name")


NULL_OPERATOR: Operator = Operator(kind=OperatorKind.NONE, precedence=-1, name="none")

_LEFT, _RIGHT, _NONE = Associativity.LEFT, Associativity.RIGHT, Associativity.NONE

# (kind, associativity, precedence, arity, name)
_OPERATOR_TABLE: Tuple[Tuple[OperatorKind, Associativity, int, int, str], ...] = (
    (OperatorKind.PAREN_L,     _NONE,    0, 0, "("),
    (OperatorKind.PAREN_R,     _NONE,    0, 0, ")"),

    (OperatorKind.ADD,         _LEFT,   10, 2, "add"),
    (OperatorKind.SUBTRACT,    _LEFT,   10, 2, "sub"),

    (OperatorKind.DIVIDE,      _LEFT,   20, 2, "div"),
    (OperatorKind.MULTIPLY,    _LEFT,   20, 2, "mul"),

    (OperatorKind.PERCENTAGE,  _LEFT,   30, 1, "%"),
    (OperatorKind.TIMES,       _LEFT,   30, 1, "x"),

    (OperatorKind.COSECANT,    _RIGHT,  40, 1, "csc"),
    (OperatorKind.COSINE,      _RIGHT,  40, 1, "cos"),
    (OperatorKind.COTANGENT,   _RIGHT,  40, 1, "cot"),
    (OperatorKind.SECANT,      _RIGHT,  40, 1, "sec"),
    (OperatorKind.SINE,        _RIGHT,  40, 1, "sin"),
    (OperatorKind.TANGENT,     _RIGHT,  40, 1, "tan"),

    (OperatorKind.EXPONENT,    _RIGHT,  90, 2, "exp"),

    (OperatorKind.UNARY_MINUS, _RIGHT, 100, 1, "neg"),
    (OperatorKind.UNARY_PLUS,  _RIGHT, 100, 1, "pos"),

    (OperatorKind.E,           _LEFT,  200, 0, "e"),
    (OperatorKind.PI,          _LEFT,  200, 0, "pi"),
    (OperatorKind.TAU,         _LEFT,  200, 0, "tau"),
)

# Built once at import time and read-only afterwards
OPERATORS: Mapping[OperatorKind, Operator] = MappingProxyType({
    kind: Operator(kind=kind, associativity=associativity, precedence=precedence, arity=arity, name=name)
    for kind, associativity, precedence, arity, name in _OPERATOR_TABLE
})


def get_operator(kind: OperatorKind) -> Operator:
    """
    Look up the operator registered for a kind.

    :param OperatorKind kind: Operator kind

    :return: Registered operator, or NULL_OPERATOR for unknown kinds
    :rtype: Operator
    """
    return OPERATORS.get(kind, NULL_OPERATOR)
