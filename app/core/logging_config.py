# app/core/logging_config.py
import logging
import sys
import structlog


def setup_logging(level: str = "INFO") -> None:
    """
    Configure structlog + standaard logging.
    Logs gaan als JSON naar stdout.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def bind_submission(business_name: str, root: str) -> None:
    """Koppel de inzending aan alle logregels van dit request."""
    structlog.contextvars.bind_contextvars(business_name=business_name, root=root)


def clear_submission() -> None:
    structlog.contextvars.clear_contextvars()


# Globale logger die je overal kunt importeren
logger = structlog.get_logger("onboarding")
