"""Logging utilities for the file agent runtime."""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

# Top-level packages whose module loggers share the handlers below
PACKAGE_LOGGERS = ("shared", "fileAgent", "orchestrationAgent")


def setup_logging(
    level: int = logging.INFO,
    log_dir: str = "logs",
    packages: Iterable[str] = PACKAGE_LOGGERS,
) -> Path:
    """Setup logging configuration for the runtime.

    Args:
        level: Console logging level floor is WARNING; file handler logs from ``level``
        log_dir: Directory for the timestamped log file
        packages: Top-level package names to attach handlers to

    Returns:
        Path of the log file
    """
    logs_dir = Path(log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / f"fileagent_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    # File handler (detailed logs)
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))

    # Console handler (user-friendly)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(max(level, logging.WARNING))
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    for name in packages:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        logger.propagate = False
        logger.handlers = [file_handler, console_handler]

    logger = logging.getLogger(PACKAGE_LOGGERS[0])
    logger.info("=" * 80)
    logger.info("File agent session started")
    logger.info(f"Log file: {log_file}")
    logger.info("=" * 80)

    return log_file


def _preview(value: Any, limit: int = 500) -> str:
    text = value if isinstance(value, str) else str(value)
    if len(text) > limit:
        return text[:limit] + "... (truncated)"
    return text


def log_tool_call(logger: logging.Logger, tool_name: str, args: Any) -> None:
    """Log capability invocation.

    Args:
        logger: Logger instance
        tool_name: Name of the capability being called
        args: Argument payload
    """
    logger.info(f"Tool call start: {tool_name}")
    if isinstance(args, dict):
        logger.debug(f"  Arguments: {json.dumps(args, ensure_ascii=False, indent=2, default=str)}")
    else:
        logger.debug(f"  Arguments: {_preview(args)}")


def log_tool_result(logger: logging.Logger, tool_name: str, result: Any, success: bool = True) -> None:
    """Log capability execution result.

    Args:
        logger: Logger instance
        tool_name: Name of the capability
        result: Output text or error
        success: Whether the capability completed
    """
    if success:
        logger.info(f"Tool call success: {tool_name}")
        logger.debug(f"  Result: {_preview(result)}")
    else:
        logger.error(f"Tool call error: {tool_name} - {_preview(result)}")


def log_round(
    logger: logging.Logger,
    agent: str,
    round_number: int,
    max_rounds: int,
    message_count: int,
    pending_calls: Optional[int] = None,
) -> None:
    """Log one round of a conversation driver."""
    logger.debug(
        f"{agent} round {round_number}/{max_rounds} "
        f"(messages: {message_count}"
        + (f", tool calls: {pending_calls})" if pending_calls is not None else ")")
    )


def log_error(logger: logging.Logger, error: Exception, context: str = "") -> None:
    """Log error with context.

    Args:
        logger: Logger instance
        error: Exception instance
        context: Additional context about where the error occurred
    """
    logger.error(f"Error occurred: {type(error).__name__}: {str(error)}")
    if context:
        logger.error(f"  Context: {context}")
    logger.debug("Full traceback:", exc_info=error)


def summarize_record(record: Dict[str, Any]) -> str:
    """One-line summary of an audit record, used in debug logs."""
    keys = ", ".join(sorted(record.keys()))
    return f"record[{keys}]"
