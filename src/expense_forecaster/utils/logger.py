"""Logging infrastructure with input-source context."""
import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


class SourceContextFilter(logging.Filter):
    """Add input source context to log records."""
    
    def __init__(self):
        super().__init__()
        self.source: Optional[str] = None
    
    def filter(self, record):
        """Add source to record."""
        record.source = self.source or "system"
        return True


class ForecasterLogger:
    """Centralized logging manager."""
    
    def __init__(
        self,
        log_level: str = "INFO",
        log_file: Optional[str] = None,
        max_file_size_mb: int = 10,
        backup_count: int = 5
    ):
        self.source_filter = SourceContextFilter()
        
        # Configure package logger
        self.logger = logging.getLogger("expense_forecaster")
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.logger.propagate = False
        
        # Remove existing handlers
        self.logger.handlers.clear()
        
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [source:%(source)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        
        # Console goes to stderr; stdout carries reports
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.source_filter)
        self.logger.addHandler(console_handler)
        
        self.log_file = Path(log_file).expanduser() if log_file else None
        if self.log_file:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_file_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding="utf-8"
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.source_filter)
            self.logger.addHandler(file_handler)
    
    def set_source_context(self, source: Optional[str]):
        """Set current input source for logging."""
        self.source_filter.source = source
    
    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[ForecasterLogger] = None


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = ForecasterLogger(log_level)
    return _logger_instance.get_logger()


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5
) -> logging.Logger:
    """Reconfigure the global logger (level, optional rotating file)."""
    global _logger_instance
    _logger_instance = ForecasterLogger(log_level, log_file, max_file_size_mb, backup_count)
    return _logger_instance.get_logger()


def set_source_context(source: Optional[str]):
    """Set input source context for logging."""
    global _logger_instance
    if _logger_instance:
        _logger_instance.set_source_context(source)
