"""
Audit Logger

Every command outcome is logged as a structured event:
1. What the user attempted
2. What the server answered
3. Which message the user was shown

The audit logger only writes to the local structured log. Correlation
ids tie together the events of one command (e.g. a save and its reload).
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from controle_gastos.config import get_settings
from controle_gastos.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditSeverity,
)


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Route stdlib logging (and therefore structlog) to stderr.

    Uses the configured log level unless one is given.
    """
    level = level or get_settings().app.log_level
    logging.basicConfig(format="%(message)s", level=getattr(logging, level))


class AuditLogger:
    """Central audit logging service."""

    def __init__(self):
        self._logger = structlog.get_logger("controle_gastos.audit")

    def log(self, event: AuditEvent) -> None:
        """Log an audit event at the level matching its severity."""
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

    def log_expenses_loaded(
        self,
        count: int,
        total: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.expenses_loaded(
            count=count,
            total=total,
            correlation_id=correlation_id,
        ))

    def log_load_failed(
        self,
        error: Exception,
        message: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.load_failed(
            error=error,
            message=message,
            correlation_id=correlation_id,
        ))

    def log_validation_failed(
        self,
        issues: list[dict],
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.validation_failed(
            issues=issues,
            correlation_id=correlation_id,
        ))

    def log_edit_started(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.edit_started(expense_id))

    def log_edit_cancelled(self, expense_id: Optional[str]) -> None:
        self.log(AuditEventBuilder.edit_cancelled(expense_id))

    def log_expense_saved(
        self,
        expense_id: str,
        amount: str,
        created: bool,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.expense_saved(
            expense_id=expense_id,
            amount=amount,
            created=created,
            correlation_id=correlation_id,
        ))

    def log_save_failed(
        self,
        expense_id: Optional[str],
        error: Exception,
        message: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.save_failed(
            expense_id=expense_id,
            error=error,
            message=message,
            correlation_id=correlation_id,
        ))

    def log_expense_deleted(
        self,
        expense_id: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.expense_deleted(
            expense_id=expense_id,
            correlation_id=correlation_id,
        ))

    def log_delete_declined(self, expense_id: str) -> None:
        self.log(AuditEventBuilder.delete_declined(expense_id))

    def log_delete_failed(
        self,
        expense_id: str,
        error: Exception,
        message: str,
        correlation_id: UUID,
    ) -> None:
        self.log(AuditEventBuilder.delete_failed(
            expense_id=expense_id,
            error=error,
            message=message,
            correlation_id=correlation_id,
        ))

    def log_command_ignored(self, command: str) -> None:
        self.log(AuditEventBuilder.command_ignored(command))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of each command and pass it through.
    """
    return uuid4()
