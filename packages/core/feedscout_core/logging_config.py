"""
Logging configuration.

Standard library loggers are rendered through structlog's
``ProcessorFormatter``. Structured context is passed with ``extra={...}`` at
call sites and shows up as key/value pairs (console) or JSON fields.
"""

import logging

import structlog

_handler: logging.Handler | None = None

# Applied to records coming from plain ``logging`` calls
_PRE_CHAIN: list = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.ExtraAdder(),
    structlog.processors.TimeStamper(fmt="iso", utc=True),
]


def build_formatter(json_output: bool = False) -> structlog.stdlib.ProcessorFormatter:
    """
    Build the log formatter.

    Args:
        json_output: Render one JSON object per line instead of console output.

    Returns:
        Formatter for a logging handler.
    """
    if json_output:
        renderers = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderers = [
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.dev.ConsoleRenderer(),
        ]
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_PRE_CHAIN,
        processors=renderers,
    )


def init_logging(level: str | int = "INFO", json_output: bool = False) -> None:
    """
    Initialize application logging on the root logger.

    Safe to call more than once; the handler is replaced, not duplicated.

    Args:
        level: Log level name or number.
        json_output: Emit JSON lines instead of console output.
    """
    global _handler

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            *_PRE_CHAIN,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(build_formatter(json_output))

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    _handler = handler

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a module logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
