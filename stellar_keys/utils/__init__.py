from .logging import setup_logging, get_logger, LogLevel, LogFormat

__all__ = [
    'setup_logging',
    'get_logger',
    'LogLevel',
    'LogFormat'
]
