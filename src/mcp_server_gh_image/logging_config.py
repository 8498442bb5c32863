import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


class SafeStreamHandler(logging.StreamHandler):
    """
    Stream handler that tolerates closed streams during shutdown.
    """

    def handleError(self, record):
        error = sys.exc_info()[1]
        if isinstance(error, (ValueError, OSError)):
            message = str(error).lower()
            if "closed file" in message or "bad file descriptor" in message:
                return
        super().handleError(record)


class StructuredLogFormatter(logging.Formatter):
    """
    Formats log records as structured JSON with contextual fields.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in ("request_id", "tool", "duration_ms"):
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        elif record.exc_text:
            log_record["exception"] = record.exc_text
        return json.dumps(log_record, ensure_ascii=False)


def configure_logging(
    log_level: str = "INFO",
    log_dir: Optional[Path] = None,
) -> Optional[Path]:
    """
    Centralized logging configuration for MCP GitHub Image Server.

    Logs go to stderr because stdout carries the protocol stream. When
    ``log_dir`` is given, a DEBUG-level file log is also written there and
    its path is returned.
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    handler = SafeStreamHandler(sys.stderr)
    handler.setFormatter(StructuredLogFormatter())
    handler.setLevel(log_level.upper())
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    log_file = None
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        session_id = os.environ.get(
            "MCP_SESSION_ID", datetime.now().strftime("%Y%m%d_%H%M%S")
        )
        log_file = log_dir / f"mcp_gh_image-{session_id}.log"
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(StructuredLogFormatter())
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)

    logging.getLogger("asyncio").setLevel("WARNING")
    logging.getLogger("git").setLevel("WARNING")
    logging.getLogger("mcp").setLevel("WARNING")
    return log_file
