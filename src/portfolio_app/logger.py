import logging
import sys
import json
import os
import gzip
import shutil
from datetime import datetime
from logging.handlers import TimedRotatingFileHandler
from typing import Optional
from app_config import LoggingConfig
from portfolio_app.context import get_current_context

_STANDARD_ATTRIBUTES = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename', 'module', 'lineno',
    'funcName', 'created', 'msecs', 'relativeCreated', 'thread', 'threadName', 'processName',
    'process', 'taskName', 'asctime', 'getMessage', 'exc_info', 'exc_text', 'stack_info', 'message',
    'command', 'portfolio_id',
}


class CompressingTimedRotatingFileHandler(TimedRotatingFileHandler):
    """Daily rotating log file whose rotated copies are gzipped"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.namer = lambda name: f"{name}.gz"
        self.rotator = self._compress

    @staticmethod
    def _compress(source: str, dest: str):
        try:
            with open(source, "rb") as f_in, gzip.open(dest, "wb") as f_out:
                shutil.copyfileobj(f_in, f_out)
        except OSError as e:
            # Keep logging to the live file even when the old one can't be compressed
            print(f"Error compressing rotated log {source}: {e}", file=sys.stderr)
            return
        os.remove(source)


class StructuredFormatter(logging.Formatter):
    """Formatter for text or JSON lines carrying the command context"""

    def __init__(self, fmt_type: str = 'text'):
        super().__init__()
        self.fmt_type = fmt_type

    def format(self, record):
        log_data = {
            'timestamp': datetime.now().strftime('%Y-%m-%d %H:%M:%S'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if hasattr(record, 'command'):
            log_data['command'] = record.command

        if hasattr(record, 'portfolio_id'):
            log_data['portfolio_id'] = record.portfolio_id

        # Any other extra fields
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRIBUTES:
                log_data[key] = value.isoformat() if isinstance(value, datetime) else value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        if self.fmt_type == 'json':
            return json.dumps(log_data, default=str)

        base_msg = f"{log_data['timestamp']} - {log_data['logger']} - {log_data['level']} - {log_data['message']}"
        if 'command' in log_data:
            base_msg += f" [command={log_data['command']}]"
        if log_data.get('portfolio_id'):
            base_msg += f" [portfolio_id={log_data['portfolio_id']}]"
        if 'exception' in log_data:
            base_msg += f"\n{log_data['exception']}"
        return base_msg


def setup_logger(name: str) -> logging.Logger:
    # Handlers live on the root logger; named loggers propagate to it
    return logging.getLogger(name)


def configure_root_logger(logging_config: Optional[LoggingConfig] = None):
    """Configure the root logger to use structured formatting for all logs"""
    logging_config = logging_config or LoggingConfig()
    root_logger = logging.getLogger()

    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, logging_config.level.upper()))

    formatter = StructuredFormatter(logging_config.format)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if logging_config.log_dir:
        os.makedirs(logging_config.log_dir, exist_ok=True)
        file_handler = CompressingTimedRotatingFileHandler(
            filename=os.path.join(logging_config.log_dir, 'etf-portfolio.log'),
            when='midnight',
            interval=1,
            backupCount=logging_config.backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    _configure_third_party_loggers()


def _configure_third_party_loggers():
    """Configure specific third-party library loggers with appropriate levels"""
    # aiohttp: Set to WARNING to reduce HTTP request/response noise
    logging.getLogger('aiohttp').setLevel(logging.WARNING)
    logging.getLogger('asyncio').setLevel(logging.WARNING)


def _extract_context_properties():
    """Extract the current command context for logging"""
    context = get_current_context()
    if context is None:
        return {}
    return {
        'command': context.command,
        'portfolio_id': context.portfolio_id,
    }


class AppLogger:
    """Logger wrapper that attaches the current command context to every record"""

    def __init__(self, name: str):
        self.logger = setup_logger(name)

    def log_debug(self, message: str):
        self.logger.debug(message, extra=_extract_context_properties())

    def log_info(self, message: str):
        self.logger.info(message, extra=_extract_context_properties())

    def log_warning(self, message: str):
        self.logger.warning(message, extra=_extract_context_properties())

    def log_error(self, message: str, exc_info: bool = False):
        self.logger.error(message, extra=_extract_context_properties(), exc_info=exc_info)
