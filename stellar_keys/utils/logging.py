import logging
import logging.handlers
import os
import re
import sys
import json
import threading
from enum import Enum
from datetime import datetime
from typing import Optional, Dict, Any

class LogLevel(Enum):
    """Log levels enumeration"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

class LogFormat(Enum):
    """Log format types"""
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"

# S... secret seeds are 56 base32 characters
SECRET_SEED_PATTERN = re.compile(r'\bS[A-Z2-7]{55}\b')

class StructuredFormatter(logging.Formatter):
    """Formatter that renders the `structured_data` extra of a record"""

    def __init__(self, fmt_type: LogFormat = LogFormat.DETAILED, include_context: bool = True):
        self.fmt_type = fmt_type
        self.include_context = include_context
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        structured_data = getattr(record, 'structured_data', {})

        if self.fmt_type == LogFormat.JSON:
            return self._format_json(record, structured_data)
        elif self.fmt_type == LogFormat.SIMPLE:
            return f"{record.levelname}: {record.getMessage()}"
        return self._format_text(record, structured_data)

    def _format_json(self, record: logging.LogRecord, structured_data: Dict) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName or f"Thread-{record.thread}",
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if structured_data:
            log_entry["data"] = structured_data

        return json.dumps(log_entry, default=str)

    def _format_text(self, record: logging.LogRecord, structured_data: Dict) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S.%f')[:-3]

        base_msg = f"{timestamp} | {record.levelname:8} | {record.name} | {record.getMessage()}"

        if self.include_context and structured_data:
            base_msg += f" | {json.dumps(structured_data, default=str)}"

        if record.exc_info:
            base_msg += f"\n{self.formatException(record.exc_info)}"

        return base_msg

class SensitiveDataFilter(logging.Filter):
    """Filter to mask secret seeds and other registered secrets in logs"""

    def __init__(self):
        super().__init__()
        self.sensitive_patterns = set()
        self.masking_enabled = True
        self._lock = threading.Lock()

    def add_sensitive_pattern(self, pattern: str) -> bool:
        """Register a pattern; True if it was not registered before"""
        if not pattern or len(pattern) <= 4:
            return False
        with self._lock:
            if pattern in self.sensitive_patterns:
                return False
            self.sensitive_patterns.add(pattern)
            return True

    def remove_sensitive_pattern(self, pattern: str):
        with self._lock:
            self.sensitive_patterns.discard(pattern)

    def disable_masking(self):
        self.masking_enabled = False

    def enable_masking(self):
        self.masking_enabled = True

    def filter(self, record: logging.LogRecord) -> bool:
        if not self.masking_enabled:
            return True

        if isinstance(record.msg, str):
            record.msg = self.mask(record.msg)

        if hasattr(record, 'structured_data'):
            record.structured_data = self._mask_structured_data(record.structured_data)

        if record.args:
            if isinstance(record.args, dict):
                record.args = self._mask_structured_data(record.args)
            else:
                record.args = tuple(self.mask(arg) if isinstance(arg, str) else arg
                                    for arg in record.args)

        return True

    def mask(self, text: str) -> str:
        """Mask sensitive data in text, keeping the first four characters"""
        with self._lock:
            patterns = sorted(self.sensitive_patterns, key=len, reverse=True)

        masked_text = text
        for pattern in patterns:
            if pattern in masked_text:
                masked_text = masked_text.replace(pattern, self._mask_value(pattern))

        return SECRET_SEED_PATTERN.sub(lambda m: self._mask_value(m.group(0)), masked_text)

    @staticmethod
    def _mask_value(value: str) -> str:
        return value[:4] + '*' * (len(value) - 4)

    def _mask_structured_data(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {k: self._mask_structured_data(v) for k, v in data.items()}
        elif isinstance(data, (list, tuple)):
            return [self._mask_structured_data(item) for item in data]
        elif isinstance(data, str):
            return self.mask(data)
        return data

class LogManager:
    """Process-wide logging configuration"""

    _instance = None
    _lock = threading.RLock()

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._initialized = False
            return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self.configured = False
        self.loggers = {}
        self.sensitive_filter = SensitiveDataFilter()
        self._handlers = []

        self.config = {
            'log_level': LogLevel.INFO,
            'log_format': LogFormat.DETAILED,
            'log_file': None,
            'max_file_size': 10 * 1024 * 1024,
            'backup_count': 5,
            'enable_console': True,
        }

        self._initialized = True

    def configure(self, config: Dict[str, Any]) -> None:
        """Configure handlers on the package logger"""
        with self._lock:
            self.config.update(config)
            self._setup_handlers()

    def _setup_handlers(self) -> None:
        package_logger = logging.getLogger("stellar_keys")

        for handler in self._handlers:
            package_logger.removeHandler(handler)
            handler.close()
        self._handlers = []

        package_logger.setLevel(getattr(logging, self.config['log_level'].value))
        formatter = StructuredFormatter(self.config['log_format'])

        if self.config['enable_console']:
            self._handlers.append(logging.StreamHandler(sys.stderr))

        log_file = self.config.get('log_file')
        if log_file:
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            self._handlers.append(logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=self.config['max_file_size'],
                backupCount=self.config['backup_count'],
                encoding='utf-8'
            ))

        for handler in self._handlers:
            handler.setFormatter(formatter)
            handler.addFilter(self.sensitive_filter)
            package_logger.addHandler(handler)

        self.configured = True

    def get_logger(self, name: str) -> 'AdvancedLogger':
        with self._lock:
            if name not in self.loggers:
                self.loggers[name] = AdvancedLogger(name)
            return self.loggers[name]

class AdvancedLogger:
    """Logger with keyword structured data and secret masking"""

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)
        self.context_data = {}
        self.sensitive_filter = LogManager().sensitive_filter

    def add_sensitive_data(self, data: str) -> bool:
        """Register a secret to be masked by every handler"""
        return self.sensitive_filter.add_sensitive_pattern(data)

    def remove_sensitive_data(self, data: str) -> None:
        self.sensitive_filter.remove_sensitive_pattern(data)

    def set_context(self, **context) -> None:
        self.context_data.update(context)

    def clear_context(self) -> None:
        self.context_data.clear()

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def _log_with_structure(self, level: int, msg: str, **kwargs) -> None:
        if not self.logger.isEnabledFor(level):
            return

        structured_data = self.context_data.copy()
        structured_data.update(kwargs)

        self.logger.log(level, msg, extra={'structured_data': structured_data})

    def debug(self, msg: str, **kwargs) -> None:
        self._log_with_structure(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs) -> None:
        self._log_with_structure(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs) -> None:
        self._log_with_structure(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, **kwargs) -> None:
        self._log_with_structure(logging.ERROR, msg, **kwargs)

    def critical(self, msg: str, **kwargs) -> None:
        self._log_with_structure(logging.CRITICAL, msg, **kwargs)

class KeysLogger(AdvancedLogger):
    """Package logger"""

    def __init__(self, name: str = "stellar_keys"):
        super().__init__(name)

    def child(self, suffix: str) -> AdvancedLogger:
        return LogManager().get_logger(f"{self.name}.{suffix}")

def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None,
                  log_format: LogFormat = LogFormat.DETAILED,
                  max_bytes: int = 10 * 1024 * 1024, backup_count: int = 5) -> None:
    """Attach console (and optionally rotating file) handlers to the package logger"""
    level = log_level if isinstance(log_level, LogLevel) else LogLevel(log_level.upper())
    LogManager().configure({
        'log_level': level,
        'log_format': log_format,
        'log_file': log_file,
        'max_file_size': max_bytes,
        'backup_count': backup_count,
    })

def get_logger(name: str) -> AdvancedLogger:
    return LogManager().get_logger(name)

logger = KeysLogger("stellar_keys")
