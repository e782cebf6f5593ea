import logging.config
from typing import Literal

import structlog
from structlog.processors import CallsiteParameter, CallsiteParameterAdder
from structlog.typing import Processor

logger = logging.getLogger(__name__)


LoggingLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Motor/pymongo and uvicorn access noise stays at WARNING
QUIET_LOGGERS = ("pymongo", "motor", "uvicorn.access")


def shared_processors() -> tuple[Processor, ...]:
    """Applied to structlog and stdlib records alike"""
    return (
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.ExtraAdder(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        CallsiteParameterAdder(
            (
                CallsiteParameter.FUNC_NAME,
                CallsiteParameter.LINENO,
            ),
        ),
    )


def build_renderer(*, json_logs: bool) -> Processor:
    if json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


def build_handler(level: LoggingLevel, *, json_logs: bool) -> logging.Handler:
    final_processors: list[Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if json_logs:
        # console renderer prints tracebacks itself
        final_processors.append(structlog.processors.format_exc_info)
    final_processors.append(build_renderer(json_logs=json_logs))

    handler = logging.StreamHandler()
    handler.set_name("default")
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors(),
            processors=final_processors,
        ),
    )
    return handler


def configure_logging(level: LoggingLevel = "INFO", *, json_logs: bool = False) -> None:
    """
    Route stdlib logging and structlog through one handler.

    Modules log with logging.getLogger(__name__) and %-style arguments,
    request context bound in structlog contextvars is merged into every
    record.
    """
    logging.basicConfig(
        handlers=[build_handler(level, json_logs=json_logs)],
        level=level,
        force=True,
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            *shared_processors(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logger.info("Logger successfully setup, level=%s json=%s", level, json_logs)
