import sys

import structlog

# Map string level to integer
_LEVELS = {
    "INFO": 20,
    "DEBUG": 10,
    "TRACE": 5,
}

_configured_level: int | None = None


def _configure(log_level: int) -> None:
    global _configured_level
    if _configured_level == log_level:
        return

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,  # Keep level changes after reload_config() effective
    )
    _configured_level = log_level


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger bound to a module name.

    The level comes from advanced.log_level (NEXUS_LOG_LEVEL) and is re-applied
    whenever a logger is requested after the configuration changed.

    Args:
        name: Logger name, usually __name__

    Returns:
        Configured logger instance
    """
    from nexusclient.services.config import get_config

    _configure(_LEVELS.get(get_config().advanced.log_level, 20))
    return structlog.get_logger(name, module=name)
