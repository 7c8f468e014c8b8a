"""
工具模块

包含日志、异常处理和其他通用工具。
"""

from .logger import setup_logger, get_logger, LoggerMixin, PerformanceLogger
from .exceptions import (
    XiangqiEngineError, InvalidMoveError, FenParseError,
    ConfigurationError, GameStateError
)

__all__ = [
    'setup_logger', 'get_logger', 'LoggerMixin', 'PerformanceLogger',
    'XiangqiEngineError', 'InvalidMoveError', 'FenParseError',
    'ConfigurationError', 'GameStateError'
]
