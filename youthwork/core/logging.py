"""Structured logging configuration."""

import logging
import sys
from typing import Optional

from youthwork.core.config import settings
from youthwork.policy.models import ComplianceResult, JobInput


class StructuredFormatter(logging.Formatter):
    """Custom formatter for structured log output."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with structured data."""
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        # Add extra fields if present
        for key in ("request_id", "client", "action", "ruleset_version"):
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Simple key=value format for readability
        parts = [f"{k}={v}" for k, v in log_data.items()]
        return " ".join(parts)


def setup_logging() -> None:
    """Configure service logging."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    # Plain output in dev, key=value everywhere else
    if settings.is_dev:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    else:
        formatter = StructuredFormatter()

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


class DecisionLogger:
    """Logger for compliance verdicts.

    Kept at the HTTP boundary so the policy engine itself stays free of
    side effects.
    """

    def __init__(self) -> None:
        self.logger = get_logger("decisions")

    def log_validation(
        self,
        job: JobInput,
        results: list[ComplianceResult],
        ruleset_version: str,
        worker_age: Optional[int] = None,
    ) -> None:
        """Log one verdict per evaluated age group."""
        for result in results:
            self.logger.info(
                f"DECISION: category={job.category.value} "
                f"age_group={result.age_group.value} "
                f"compliant={result.compliant} "
                f"violations={result.violation_codes} "
                f"warnings={len(result.warnings)} "
                f"worker_age={worker_age}",
                extra={"action": "validate_job", "ruleset_version": ruleset_version},
            )


decision_logger = DecisionLogger()
