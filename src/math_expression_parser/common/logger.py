"""Shared logger for the expression parser."""
import logging
import os

LOG_LEVEL_ENV: str = "MATH_EXPRESSION_PARSER_LOG_LEVEL"


def _build_logger() -> logging.Logger:
    """
    Build the package logger.

    Only a NullHandler is attached: the host application decides where records
    go. The level is read from ``MATH_EXPRESSION_PARSER_LOG_LEVEL`` and falls
    back to WARNING for unknown names.

    :return: Configured logger
    :rtype: logging.Logger
    """
    _logger = logging.getLogger("math_expression_parser")
    # Avoid stacking handlers when the module is reloaded
    if not _logger.handlers:
        _logger.addHandler(logging.NullHandler())
    level_name: str = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    _logger.setLevel(level)
    return _logger


logger: logging.Logger = _build_logger()
