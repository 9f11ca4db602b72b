"""Parse and evaluate arithmetic expressions in a single pass."""
import math
from typing import List

from math_expression_parser.common.errors import EvaluationError, ParsingError
from math_expression_parser.common.logger import logger
from math_expression_parser.common.models import (
    Config,
    EvalErrorKind,
    ParseErrorKind,
    Result,
    SuccessResult,
)
from math_expression_parser.common.operators import Associativity, Operator, OperatorKind
from math_expression_parser.engine.evaluator import apply_operator
from math_expression_parser.engine.lexer import Token, TokenType, find_syntax_error, normalize, tokenize


DEFAULT_CONFIG: Config = Config()


class ExpressionParser:
    """
    Parse and evaluate arithmetic expressions safely.

    Design constraints:
        - No eval(), no dynamic code execution
        - No expression tree: operators are applied as soon as precedence allows

    Algorithm:
        1. Normalize whitespace and case, then reject unknown text
        2. Tokenize, telling unary signs from binary ones by their left neighbour
        3. Run the Shunting-yard algorithm, but instead of emitting Reverse Polish
           Notation, reduce the value stack in place each time an operator
           would be emitted

    Examples:
        - ``3 + 4 * 2``: ``*`` binds tighter, so ``4 * 2`` is reduced first, giving 11
        - ``2 ^ 2 ^ 3``: ``^`` is right-associative, giving ``2 ^ 8`` = 256
    """

    @staticmethod
    def _should_reduce(incoming: Operator, top: Operator) -> bool:
        """
        Decide whether the operator on top of the stack must be applied before pushing a new one.

        :param Operator incoming: Operator about to be pushed
        :param Operator top: Operator on top of the stack

        :return: True if ``top`` binds at least as tightly as ``incoming`` requires
        :rtype: bool
        """
        if incoming.associativity == Associativity.LEFT:
            return incoming.precedence <= top.precedence
        if incoming.associativity == Associativity.RIGHT:
            return incoming.precedence < top.precedence
        return False

    @staticmethod
    def _reduce(
        stack: List[Token],
        values: List[float],
        config: Config,
        current_value: float,
        located_at: Token,
    ) -> None:
        """
        Apply the operator on top of the stack and pop it.

        :param List[Token] stack: Operator stack
        :param List[float] values: Value stack
        :param Config config: Evaluation options
        :param float current_value: Ambient value for percentage and times
        :param Token located_at: Token whose span is reported on failure

        :raises EvaluationError: If the operator cannot be applied
        """
        try:
            apply_operator(stack[-1].operator, values, config, current_value)
        except EvaluationError as exc:
            raise exc.at(located_at.position, located_at.length) from exc
        stack.pop()

    @staticmethod
    def _close_paren(
        token: Token,
        stack: List[Token],
        values: List[float],
        config: Config,
        current_value: float,
    ) -> None:
        """Apply operators back to the matching left parenthesis and discard it."""
        if not stack:
            raise ParsingError(ParseErrorKind.MISMATCHED_PARENS, token.position, token.length)

        while stack[-1].kind != OperatorKind.PAREN_L:
            ExpressionParser._reduce(stack, values, config, current_value, token)
            if not stack:
                raise ParsingError(ParseErrorKind.MISMATCHED_PARENS, token.position, token.length)
        stack.pop()

    @staticmethod
    def _evaluate_normalized(normalized: str, config: Config, current_value: float) -> float:
        """
        Evaluate an already normalized expression.

        :param str normalized: Normalized expression
        :param Config config: Evaluation options
        :param float current_value: Ambient value for percentage and times

        :return: Computed result
        :rtype: float
        :raises ExpressionError: On the first parsing or evaluation failure
        """
        syntax_error = find_syntax_error(normalized)
        if syntax_error is not None:
            position, length = syntax_error
            raise ParsingError(ParseErrorKind.SYNTAX_ERROR, position, length)

        values: List[float] = []
        stack: List[Token] = []

        for token in tokenize(normalized):
            if token.type == TokenType.NUMBER:
                values.append(token.value)

            elif token.type == TokenType.NONE:
                # Unreachable once the syntax check passed
                raise EvaluationError(EvalErrorKind.UNEXPECTED_TOKEN, token.position, token.length)

            elif token.kind == OperatorKind.PAREN_L:
                stack.append(token)

            elif token.kind == OperatorKind.PAREN_R:
                ExpressionParser._close_paren(token, stack, values, config, current_value)

            else:
                # Apply stacked operators that bind at least as tightly
                while stack and ExpressionParser._should_reduce(token.operator, stack[-1].operator):
                    ExpressionParser._reduce(stack, values, config, current_value, token)
                stack.append(token)

        # Apply remaining operators, innermost first
        while stack:
            top = stack[-1]
            if top.kind == OperatorKind.PAREN_L:
                raise ParsingError(ParseErrorKind.MISMATCHED_PARENS, top.position, top.length)
            ExpressionParser._reduce(stack, values, config, current_value, top)

        if not values:
            raise ParsingError(ParseErrorKind.EMPTY)
        if len(values) > 1:
            # Disconnected sub-expressions, e.g. "1 2 3"
            raise ParsingError(ParseErrorKind.SYNTAX_ERROR)
        return values[0]

    @staticmethod
    def evaluate_or_raise(
        expression: str,
        config: Config = DEFAULT_CONFIG,
        current_value: float = math.nan,
    ) -> float:
        """
        Evaluate an arithmetic expression, raising on failure.

        :param str expression: Arithmetic expression string
        :param Config config: Evaluation options
        :param float current_value: Ambient value for percentage and times, NaN if absent

        :return: Computed result as float
        :rtype: float
        :raises ExpressionError: If the expression is invalid or cannot be computed
        """
        return ExpressionParser._evaluate_normalized(normalize(expression), config, current_value)

    @staticmethod
    def evaluate(
        expression: str,
        config: Config = DEFAULT_CONFIG,
        current_value: float = math.nan,
    ) -> Result:
        """
        Evaluate an arithmetic expression into a result model.

        Never raises for bad input: every failure is reported as a
        ``ParseErrorResult`` or ``EvalErrorResult`` whose span points into the
        normalized expression.

        :param str expression: Arithmetic expression string
        :param Config config: Evaluation options
        :param float current_value: Ambient value for percentage and times, NaN if absent

        :return: Success or error result
        :rtype: Result
        """
        normalized: str = normalize(expression)
        logger.debug(f"🧮🏁 Evaluating {normalized!r} (degrees={config.use_degrees}, current={current_value})")

        try:
            value: float = ExpressionParser._evaluate_normalized(normalized, config, current_value)
        except (ParsingError, EvaluationError) as exc:
            logger.info(f"🧮❌ Could not evaluate {normalized!r}: {exc}")
            return exc.to_result(normalized)

        logger.debug(f"🧮✅ {normalized!r} = {value}")
        return SuccessResult(value=value)


def evaluate(
    expression: str,
    config: Config = DEFAULT_CONFIG,
    current_value: float = math.nan,
) -> Result:
    """Evaluate ``expression``; see ``ExpressionParser.evaluate``."""
    return ExpressionParser.evaluate(expression, config, current_value)
